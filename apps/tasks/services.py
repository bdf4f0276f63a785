"""
Task services.

Tasks belong to one project. Assignees must be on that project's team
and dependencies must be other tasks of the same project, without
cycles. Status changes are written to the project activity log.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.projects.models import ActivityAction, Project
from apps.projects.services import (
    ensure_project_manager,
    get_project_by_id,
    record_activity,
)

from .exceptions import (
    InvalidAssigneeError,
    InvalidDependencyError,
    InvalidTaskDatesError,
    TaskNotFoundError,
)
from .models import Task, TaskStatus

logger = logging.getLogger('apps.tasks')

UPDATABLE_FIELDS = ('title', 'description', 'status', 'start_date', 'due_date')


def _resolve_assignee(project: Project, assignee_id: Optional[UUID]) -> Optional[User]:
    if assignee_id is None:
        return None
    member = (
        project.team_members
        .select_related('user')
        .filter(user_id=assignee_id)
        .first()
    )
    if member is None:
        raise InvalidAssigneeError("Assignee must be a member of the project team")
    return member.user


def _validate_dates(start_date: Optional[date], due_date: Optional[date]) -> None:
    if start_date and due_date and due_date < start_date:
        raise InvalidTaskDatesError("Due date cannot be before start date")


def _creates_cycle(task: Task, dependencies: List[Task]) -> bool:
    """True if any dependency already (transitively) depends on task."""
    seen = set()
    stack = [dep.id for dep in dependencies]
    while stack:
        current = stack.pop()
        if current == task.id:
            return True
        if current in seen:
            continue
        seen.add(current)
        stack.extend(
            Task.dependencies.through.objects
            .filter(from_task_id=current)
            .values_list('to_task_id', flat=True)
        )
    return False


def _resolve_dependencies(
    project: Project,
    dependency_ids: Iterable[UUID],
    task: Optional[Task] = None
) -> List[Task]:
    ids = set(dependency_ids)
    if task is not None and task.id in ids:
        raise InvalidDependencyError("A task cannot depend on itself")

    dependencies = list(Task.objects.filter(project=project, id__in=ids))
    if len(dependencies) != len(ids):
        raise InvalidDependencyError("Dependencies must be tasks of the same project")

    if task is not None and _creates_cycle(task, dependencies):
        raise InvalidDependencyError("Dependencies cannot form a cycle")
    return dependencies


def get_task(*, project_id: UUID, task_id: UUID) -> Task:
    """
    Raises:
        TaskNotFoundError: If task doesn't exist in the project
    """
    try:
        return (
            Task.objects
            .select_related('assignee', 'project')
            .prefetch_related('dependencies')
            .get(id=task_id, project_id=project_id)
        )
    except Task.DoesNotExist:
        raise TaskNotFoundError(f"Task with ID {task_id} not found")


def get_project_tasks(
    *,
    project_id: UUID,
    status: Optional[str] = None,
    assignee_id: Optional[UUID] = None
) -> QuerySet:
    """
    Tasks of a project, earliest due first.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)
    queryset = (
        Task.objects
        .filter(project=project)
        .select_related('assignee')
        .prefetch_related('dependencies')
    )
    if status:
        queryset = queryset.filter(status=status)
    if assignee_id:
        queryset = queryset.filter(assignee_id=assignee_id)
    return queryset


def get_tasks_for_user(*, user: User, include_done: bool = True) -> QuerySet:
    """Tasks assigned to user across every project."""
    queryset = (
        Task.objects
        .filter(assignee=user)
        .select_related('project')
        .prefetch_related('dependencies')
        .order_by('due_date', 'created_at')
    )
    if not include_done:
        queryset = queryset.exclude(status=TaskStatus.DONE)
    return queryset


@transaction.atomic
def create_task(
    *,
    project_id: UUID,
    created_by: User,
    title: str,
    description: str = '',
    assignee_id: Optional[UUID] = None,
    status: str = TaskStatus.TODO,
    start_date: Optional[date] = None,
    due_date: Optional[date] = None,
    dependency_ids: Iterable[UUID] = (),
) -> Task:
    """
    Create a task in a project.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InvalidAssigneeError: If assignee is not on the team
        InvalidDependencyError: If a dependency is from another project
        InvalidTaskDatesError: If due date is before start date
    """
    project = get_project_by_id(project_id=project_id)
    _validate_dates(start_date, due_date)
    assignee = _resolve_assignee(project, assignee_id)
    dependencies = _resolve_dependencies(project, dependency_ids)

    task = Task.objects.create(
        project=project,
        title=title,
        description=description,
        assignee=assignee,
        status=status,
        start_date=start_date,
        due_date=due_date,
    )
    if dependencies:
        task.dependencies.set(dependencies)

    record_activity(
        project=project,
        user=created_by,
        action=ActivityAction.TASK_CREATED,
        details=f'Created task "{task.title}".',
    )

    logger.info(f"Task {task.id} created in project {project.id}")
    return task


@transaction.atomic
def update_task(
    *,
    project_id: UUID,
    task_id: UUID,
    user: User,
    **fields
) -> Task:
    """
    Update a task.

    Args:
        project_id: UUID of the project
        task_id: UUID of the task
        user: User making the change (for the activity log)
        **fields: title, description, status, start_date, due_date,
            assignee_id (None unassigns), dependency_ids (replaces all)

    Raises:
        ProjectNotFoundError: If project doesn't exist
        TaskNotFoundError: If task doesn't exist in the project
        InvalidAssigneeError, InvalidDependencyError, InvalidTaskDatesError
    """
    project = get_project_by_id(project_id=project_id)
    try:
        task = Task.objects.select_for_update().get(id=task_id, project=project)
    except Task.DoesNotExist:
        raise TaskNotFoundError(f"Task with ID {task_id} not found")

    old_status = task.status

    _validate_dates(
        fields.get('start_date', task.start_date),
        fields.get('due_date', task.due_date),
    )

    if 'assignee_id' in fields:
        task.assignee = _resolve_assignee(project, fields.pop('assignee_id'))

    dependencies = None
    if 'dependency_ids' in fields:
        dependencies = _resolve_dependencies(project, fields.pop('dependency_ids'), task=task)

    for name in UPDATABLE_FIELDS:
        if name in fields:
            setattr(task, name, fields[name])
    task.save()

    if dependencies is not None:
        task.dependencies.set(dependencies)

    if task.status != old_status:
        record_activity(
            project=project,
            user=user,
            action=ActivityAction.TASK_STATUS_UPDATE,
            details=f'Updated task "{task.title}" to {task.get_status_display()}.',
        )
        logger.info(f"Task {task.id} moved from {old_status} to {task.status}")

    return task


@transaction.atomic
def delete_task(*, project_id: UUID, task_id: UUID, user: User) -> None:
    """
    Delete a task (manager only).

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If user is not a manager
        TaskNotFoundError: If task doesn't exist in the project
    """
    project = get_project_by_id(project_id=project_id)
    ensure_project_manager(project=project, user=user)

    deleted, _ = Task.objects.filter(id=task_id, project=project).delete()
    if not deleted:
        raise TaskNotFoundError(f"Task with ID {task_id} not found")
