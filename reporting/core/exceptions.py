class InvoiceGenerationError(Exception):
    """Raised when reading the fact store fails while generating invoices.

    The message names the tenant, category and period being processed; the
    underlying store error is chained as ``__cause__``.
    """
