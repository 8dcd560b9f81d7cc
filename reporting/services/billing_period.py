"""Calendar month billing periods."""

import calendar
import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, time

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


@dataclass(frozen=True, order=True)
class BillingPeriod:
    """A calendar month, the unit invoices are generated for."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if self.year < 1:
            raise ValueError(f"Invalid year: {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")

    @classmethod
    def parse(cls, value: str) -> "BillingPeriod":
        """Parse a period in ``YYYY-MM`` format."""
        match = _PERIOD_RE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid period '{value}', expected YYYY-MM")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def previous(cls, today: date | None = None) -> "BillingPeriod":
        """Return the month before the one containing ``today``."""
        if today is None:
            today = datetime.now(UTC).date()
        if today.month == 1:
            return cls(today.year - 1, 12)
        return cls(today.year, today.month - 1)

    @property
    def start(self) -> date:
        """First day of the month."""
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        """Last day of the month, inclusive."""
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def start_datetime(self) -> datetime:
        """UTC midnight of the first day of the month."""
        return datetime(self.year, self.month, 1, tzinfo=UTC)

    @property
    def end_datetime(self) -> datetime:
        """UTC midnight of the last day of the month."""
        return datetime.combine(self.end, time.min, tzinfo=UTC)

    def __str__(self) -> str:
        return f"{self.year} {calendar.month_name[self.month]}"
