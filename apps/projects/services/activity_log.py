"""
Activity log service.

Every state-changing operation on a project appends an entry here. The
entries are what the project feed shows, newest first.
"""

from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.projects.models import ActivityLog, Project

from .exceptions import ProjectNotFoundError


def record_activity(
    *,
    project: Project,
    user: User,
    action: str,
    details: str = ''
) -> ActivityLog:
    """
    Append an entry to the project's activity log.

    Amounts in ``details`` should be written with
    ``apps.accounts.currency.currency_token`` so they render in the
    reader's currency.
    """
    return ActivityLog.objects.create(
        project=project,
        user=user,
        action=action,
        details=details,
    )


def get_project_activity(*, project_id: UUID, limit: int = 50) -> QuerySet:
    """
    Latest activity entries of a project.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    if not Project.objects.filter(id=project_id).exists():
        raise ProjectNotFoundError(f"Project with ID {project_id} not found")

    return (
        ActivityLog.objects
        .filter(project_id=project_id)
        .select_related('user')
        .order_by('-timestamp')[:limit]
    )
