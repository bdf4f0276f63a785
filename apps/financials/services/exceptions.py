"""Domain-specific exceptions for financials services."""


class FinancialsServiceError(Exception):
    """Base exception for financials services."""
    pass


class ExpenseNotFoundError(FinancialsServiceError):
    """Raised when expense does not exist in the project."""
    pass


class InvoiceNotFoundError(FinancialsServiceError):
    """Raised when client invoice does not exist in the project."""
    pass


class InvalidExpenseError(FinancialsServiceError):
    """Raised when an expense amount or category is invalid."""
    pass


class InvalidInvoiceError(FinancialsServiceError):
    """Raised when invoice dates, status or line items are invalid."""
    pass
