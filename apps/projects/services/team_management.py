"""
Team management service.

Project team membership: who works on a site, in which role and for
what daily wage. Mutations are manager only.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.projects.models import ActivityAction, Project, ProjectTeamMember

from .activity_log import record_activity
from .exceptions import (
    AlreadyTeamMemberError,
    NotTeamMemberError,
    ProjectNotFoundError,
    UserNotFoundError,
)
from .project_management import ensure_project_manager

logger = logging.getLogger('apps.projects')


def _get_project(project_id, lock=False):
    queryset = Project.objects.select_for_update() if lock else Project.objects
    try:
        return queryset.get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project with ID {project_id} not found")


def get_team_members(*, project_id: UUID) -> QuerySet:
    """
    Get all team members of a project.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = _get_project(project_id)
    return (
        ProjectTeamMember.objects
        .filter(project=project)
        .select_related('user')
        .order_by('joined_at')
    )


def get_team_member(*, project: Project, user_id: UUID) -> ProjectTeamMember:
    """
    Raises:
        NotTeamMemberError: If the user is not on the team
    """
    try:
        return (
            ProjectTeamMember.objects
            .select_related('user')
            .get(project=project, user_id=user_id)
        )
    except ProjectTeamMember.DoesNotExist:
        raise NotTeamMemberError(f"User {user_id} is not on the team of {project.name}")


@transaction.atomic
def add_team_member(
    *,
    project_id: UUID,
    user_id: UUID,
    added_by: User,
    project_role: str = '',
    daily_wage: Decimal = Decimal('0.00'),
) -> ProjectTeamMember:
    """
    Add a user to the project team.

    Args:
        project_id: UUID of the project
        user_id: UUID of the user to add
        added_by: Manager adding the member
        project_role: Site role, e.g. "Foreman"
        daily_wage: Wage per full day of attendance

    Returns:
        Created ProjectTeamMember

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If added_by is not a manager
        UserNotFoundError: If user doesn't exist or is inactive
        AlreadyTeamMemberError: If user is already on the team
    """
    project = _get_project(project_id, lock=True)
    ensure_project_manager(project=project, user=added_by)

    try:
        user = User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if project.has_member(user):
        raise AlreadyTeamMemberError(f"{user.get_display_name()} is already on the team")

    try:
        member = ProjectTeamMember.objects.create(
            project=project,
            user=user,
            project_role=project_role,
            daily_wage=daily_wage,
        )
    except IntegrityError:
        raise AlreadyTeamMemberError(f"{user.get_display_name()} is already on the team")

    record_activity(
        project=project,
        user=added_by,
        action=ActivityAction.TEAM_MEMBER_ADDED,
        details=f"Added {user.get_display_name()} to the team as {project_role or 'member'}.",
    )

    logger.info(f"User {user.email} added to project {project.id}")
    return member


@transaction.atomic
def update_team_member(
    *,
    project_id: UUID,
    user_id: UUID,
    updated_by: User,
    project_role: Optional[str] = None,
    daily_wage: Optional[Decimal] = None,
) -> ProjectTeamMember:
    """
    Change a member's project role and/or daily wage.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If updated_by is not a manager
        NotTeamMemberError: If user is not on the team
    """
    project = _get_project(project_id)
    ensure_project_manager(project=project, user=updated_by)

    member = get_team_member(project=project, user_id=user_id)

    update_fields = []
    if project_role is not None:
        member.project_role = project_role
        update_fields.append('project_role')
    if daily_wage is not None:
        member.daily_wage = daily_wage
        update_fields.append('daily_wage')

    if update_fields:
        member.save(update_fields=update_fields)

    return member


@transaction.atomic
def remove_team_member(
    *,
    project_id: UUID,
    user_id: UUID,
    removed_by: User
) -> None:
    """
    Remove a member from the team. Their attendance history stays.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If removed_by is not a manager
        NotTeamMemberError: If user is not on the team
    """
    project = _get_project(project_id, lock=True)
    ensure_project_manager(project=project, user=removed_by)

    member = get_team_member(project=project, user_id=user_id)
    name = member.user.get_display_name()
    member.delete()

    record_activity(
        project=project,
        user=removed_by,
        action=ActivityAction.TEAM_MEMBER_REMOVED,
        details=f"Removed {name} from the team.",
    )

    logger.info(f"User {user_id} removed from project {project.id}")
