"""
Labor services.

Attendance is one record per member per day; recording it again for the
same day overwrites the status.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.projects.services import get_project_by_id

from .exceptions import InvalidAttendanceStatusError, MemberNotOnTeamError
from .models import AttendanceRecord, AttendanceStatus

logger = logging.getLogger('apps.labor')


def get_attendance(
    *,
    project_id: UUID,
    date: Optional[date] = None,
    member_id: Optional[UUID] = None,
) -> QuerySet:
    """
    Attendance records of a project, optionally for one day or one member.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)
    queryset = AttendanceRecord.objects.filter(project=project).select_related('member')

    if date:
        queryset = queryset.filter(date=date)
    if member_id:
        queryset = queryset.filter(member_id=member_id)

    return queryset


@transaction.atomic
def update_attendance(
    *,
    project_id: UUID,
    member_id: UUID,
    date: date,
    status: str,
    recorded_by: Optional[User] = None,
) -> AttendanceRecord:
    """
    Record a member's attendance for a day, replacing any earlier entry.

    Args:
        project_id: UUID of the project
        member_id: UUID of the team member's user
        date: Attendance day
        status: AttendanceStatus value
        recorded_by: User taking attendance

    Returns:
        The created or updated AttendanceRecord

    Raises:
        ProjectNotFoundError: If project doesn't exist
        MemberNotOnTeamError: If the user is not on the project team
        InvalidAttendanceStatusError: If status is unknown
    """
    if status not in AttendanceStatus.values:
        raise InvalidAttendanceStatusError(f"Unknown attendance status: {status}")

    project = get_project_by_id(project_id=project_id)

    if not project.team_members.filter(user_id=member_id).exists():
        raise MemberNotOnTeamError(f"User {member_id} is not on the project team")

    record, created = AttendanceRecord.objects.update_or_create(
        project=project,
        member_id=member_id,
        date=date,
        defaults={'status': status, 'recorded_by': recorded_by},
    )

    logger.info(
        f"Attendance {'recorded' if created else 'updated'} for {member_id} "
        f"on {date} in project {project.id}: {status}"
    )
    return record
