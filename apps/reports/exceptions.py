"""
Domain exceptions for reports app.

Exception Hierarchy:
    ReportServiceError (base)
    └── InvalidDateRangeError
"""


class ReportServiceError(Exception):
    """Base exception for all report errors."""

    pass


class InvalidDateRangeError(ReportServiceError):
    """
    Raised when a report period starts after it ends.

    Example:
        raise InvalidDateRangeError("Start date must be on or before end date")
    """

    pass
