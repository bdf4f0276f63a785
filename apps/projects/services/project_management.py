"""
Project management service.

Handles project CRUD. Only project managers and super admins create
projects; the creator joins the team as "Project Manager".
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.currency import currency_token
from apps.accounts.models import Role, User
from apps.projects.models import (
    ActivityAction,
    Project,
    ProjectStatus,
    ProjectTeamMember,
)

from .activity_log import record_activity
from .exceptions import (
    InsufficientPermissionsError,
    InvalidProjectDataError,
    ProjectNotFoundError,
)

logger = logging.getLogger('apps.projects')

UPDATABLE_FIELDS = (
    'name',
    'location',
    'client',
    'start_date',
    'end_date',
    'budget',
    'status',
    'progress',
)


def _validate_dates(start_date, end_date):
    if start_date and end_date and end_date < start_date:
        raise InvalidProjectDataError("End date cannot be before start date")


def get_project_by_id(*, project_id: UUID) -> Project:
    """
    Get project by ID.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        return Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project with ID {project_id} not found")


def ensure_project_manager(*, project: Project, user: User) -> None:
    """
    Raises:
        InsufficientPermissionsError: If user cannot manage the project
    """
    if not project.is_manager(user):
        raise InsufficientPermissionsError(
            "Only the project manager can perform this action"
        )


def get_visible_projects(*, user: User) -> QuerySet:
    """Projects the user can open: all for super admins, else their teams'."""
    queryset = Project.objects.all()
    if not user.is_super_admin:
        queryset = queryset.filter(team_members__user=user).distinct()
    return queryset


def list_projects(
    *,
    user: User,
    status: Optional[str] = ProjectStatus.ACTIVE
) -> QuerySet:
    """
    List projects visible to user.

    Args:
        user: Requesting user
        status: Filter by status; None returns every status

    Returns:
        QuerySet of Project, newest first
    """
    queryset = get_visible_projects(user=user)
    if status:
        queryset = queryset.filter(status=status)
    return queryset.select_related('created_by').order_by('-created_at')


@transaction.atomic
def create_project(
    *,
    name: str,
    location: str,
    client: str,
    start_date: date,
    budget: Decimal,
    created_by: User,
    end_date: Optional[date] = None,
    progress: int = 0,
) -> Project:
    """
    Create a project and put its creator on the team.

    Args:
        name: Project name
        location: Site location
        client: Client name
        start_date: Planned start
        budget: Total budget
        created_by: User creating the project
        end_date: Planned end (optional)
        progress: Completion percentage

    Returns:
        Created Project instance

    Raises:
        InsufficientPermissionsError: If user is not a project manager or super admin
        InvalidProjectDataError: If end date is before start date
    """
    if not (created_by.is_super_admin or created_by.role == Role.PROJECT_MANAGER):
        raise InsufficientPermissionsError(
            "Only project managers can create projects"
        )

    _validate_dates(start_date, end_date)

    project = Project.objects.create(
        name=name,
        location=location,
        client=client,
        start_date=start_date,
        end_date=end_date,
        budget=budget,
        progress=progress,
        created_by=created_by,
    )

    ProjectTeamMember.objects.create(
        project=project,
        user=created_by,
        project_role='Project Manager',
        daily_wage=Decimal('0.00'),
    )

    record_activity(
        project=project,
        user=created_by,
        action=ActivityAction.PROJECT_CREATED,
        details=f"Created project {project.name} with a budget of {currency_token(project.budget)}.",
    )

    logger.info(f"Project {project.id} '{project.name}' created by {created_by.email}")
    return project


@transaction.atomic
def update_project(*, project_id: UUID, user: User, **fields) -> Project:
    """
    Update project details (manager only).

    Args:
        project_id: UUID of the project
        user: User making the change
        **fields: Any of name, location, client, start_date, end_date,
            budget, status, progress

    Returns:
        Updated Project instance

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If user is not a manager
        InvalidProjectDataError: If an unknown field is given or dates conflict
    """
    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project with ID {project_id} not found")

    ensure_project_manager(project=project, user=user)

    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise InvalidProjectDataError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    _validate_dates(
        fields.get('start_date', project.start_date),
        fields.get('end_date', project.end_date),
    )

    old_budget = project.budget
    changed = [name for name, value in fields.items() if getattr(project, name) != value]
    if not changed:
        return project

    for name in changed:
        setattr(project, name, fields[name])
    project.save()

    if 'budget' in changed:
        details = (
            f"Changed project budget from {currency_token(old_budget)} "
            f"to {currency_token(project.budget)}."
        )
    else:
        details = f"Updated {', '.join(name.replace('_', ' ') for name in changed)}."

    record_activity(
        project=project,
        user=user,
        action=ActivityAction.PROJECT_UPDATED,
        details=details,
    )

    logger.info(f"Project {project.id} updated: {', '.join(changed)}")
    return project


def archive_project(*, project_id: UUID, user: User) -> Project:
    """Move project to Archived (manager only)."""
    return update_project(project_id=project_id, user=user, status=ProjectStatus.ARCHIVED)


@transaction.atomic
def delete_project(*, project_id: UUID, user: User) -> None:
    """
    Delete project and everything it owns (manager only).

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If user is not a manager
    """
    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project with ID {project_id} not found")

    ensure_project_manager(project=project, user=user)

    name = project.name
    project.delete()
    logger.info(f"Project {project_id} '{name}' deleted by {user.email}")
