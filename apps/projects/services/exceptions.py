"""Domain-specific exceptions for projects services."""


class ProjectsServiceError(Exception):
    """Base exception for projects services."""
    pass


class ProjectNotFoundError(ProjectsServiceError):
    """Raised when project does not exist."""
    pass


class InsufficientPermissionsError(ProjectsServiceError):
    """Raised when user lacks permission for the operation."""
    pass


class InvalidProjectDataError(ProjectsServiceError):
    """Raised when project fields break a rule (dates, budget, progress)."""
    pass


class UserNotFoundError(ProjectsServiceError):
    """Raised when the user to add does not exist."""
    pass


class AlreadyTeamMemberError(ProjectsServiceError):
    """Raised when user is already on the project team."""
    pass


class NotTeamMemberError(ProjectsServiceError):
    """Raised when user is not on the project team."""
    pass
