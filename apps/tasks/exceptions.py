"""Domain exceptions for tasks app."""


class TaskServiceError(Exception):
    """Base exception for task service errors."""
    pass


class TaskNotFoundError(TaskServiceError):
    """Raised when task does not exist in the project."""
    pass


class InvalidAssigneeError(TaskServiceError):
    """Raised when the assignee is not on the project team."""
    pass


class InvalidDependencyError(TaskServiceError):
    """Raised when a dependency is the task itself or from another project."""
    pass


class InvalidTaskDatesError(TaskServiceError):
    """Raised when due date is before start date."""
    pass
