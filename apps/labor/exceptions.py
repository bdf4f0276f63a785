"""Domain-specific exceptions for labor services."""


class LaborServiceError(Exception):
    """Base exception for labor services."""
    pass


class MemberNotOnTeamError(LaborServiceError):
    """Raised when attendance is recorded for someone outside the project team."""
    pass


class InvalidAttendanceStatusError(LaborServiceError):
    """Raised when the attendance status is unknown."""
    pass
