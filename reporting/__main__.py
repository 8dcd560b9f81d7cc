"""Entry point for `python -m reporting` and the `reporting` console script."""

from __future__ import annotations

from reporting.cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
