import pytest
import uuid
from datetime import date
from apps.projects.models import ActivityAction
from apps.projects.services import InsufficientPermissionsError, ProjectNotFoundError
from apps.tasks.models import Task, TaskStatus
from apps.tasks.services import (
    create_task,
    update_task,
    delete_task,
    get_project_tasks,
    get_tasks_for_user,
)
from apps.tasks.exceptions import (
    TaskNotFoundError,
    InvalidAssigneeError,
    InvalidDependencyError,
    InvalidTaskDatesError,
)


@pytest.fixture
def foundation(project, pm, engineer):
    return create_task(
        project_id=project.id,
        created_by=pm,
        title='Pour foundation',
        assignee_id=engineer.id,
        start_date=date(2025, 1, 5),
        due_date=date(2025, 1, 20),
    )


@pytest.mark.django_db
class TestCreateTask:

    def test_create(self, foundation, project, engineer):
        assert foundation.status == TaskStatus.TODO
        assert foundation.assignee == engineer
        assert project.activity_logs.filter(action=ActivityAction.TASK_CREATED).exists()

    def test_assignee_must_be_on_team(self, project, pm, outsider):
        with pytest.raises(InvalidAssigneeError):
            create_task(project_id=project.id, created_by=pm, title='X', assignee_id=outsider.id)

    def test_due_before_start(self, project, pm):
        with pytest.raises(InvalidTaskDatesError):
            create_task(
                project_id=project.id,
                created_by=pm,
                title='X',
                start_date=date(2025, 2, 1),
                due_date=date(2025, 1, 1),
            )

    def test_dependency_from_other_project(self, project, other_project, pm, super_admin):
        foreign = create_task(project_id=other_project.id, created_by=super_admin, title='Elsewhere')

        with pytest.raises(InvalidDependencyError):
            create_task(
                project_id=project.id,
                created_by=pm,
                title='Walls',
                dependency_ids=[foreign.id],
            )

    def test_with_dependency(self, foundation, project, pm):
        walls = create_task(
            project_id=project.id,
            created_by=pm,
            title='Walls',
            dependency_ids=[foundation.id],
        )
        assert list(walls.dependencies.all()) == [foundation]

    def test_missing_project(self, pm):
        with pytest.raises(ProjectNotFoundError):
            create_task(project_id=uuid.uuid4(), created_by=pm, title='X')


@pytest.mark.django_db
class TestUpdateTask:

    def test_status_change_is_logged(self, foundation, project, engineer):
        update_task(
            project_id=project.id,
            task_id=foundation.id,
            user=engineer,
            status=TaskStatus.IN_PROGRESS,
        )

        entry = project.activity_logs.get(action=ActivityAction.TASK_STATUS_UPDATE)
        assert entry.details == 'Updated task "Pour foundation" to In Progress.'
        assert entry.user == engineer

    def test_other_changes_not_logged(self, foundation, project, engineer):
        update_task(project_id=project.id, task_id=foundation.id, user=engineer, title='Pour slab')

        assert not project.activity_logs.filter(action=ActivityAction.TASK_STATUS_UPDATE).exists()

    def test_unassign(self, foundation, project, pm):
        task = update_task(project_id=project.id, task_id=foundation.id, user=pm, assignee_id=None)
        assert task.assignee is None

    def test_self_dependency(self, foundation, project, pm):
        with pytest.raises(InvalidDependencyError):
            update_task(
                project_id=project.id,
                task_id=foundation.id,
                user=pm,
                dependency_ids=[foundation.id],
            )

    def test_cycle_rejected(self, foundation, project, pm):
        walls = create_task(
            project_id=project.id,
            created_by=pm,
            title='Walls',
            dependency_ids=[foundation.id],
        )

        with pytest.raises(InvalidDependencyError):
            update_task(
                project_id=project.id,
                task_id=foundation.id,
                user=pm,
                dependency_ids=[walls.id],
            )

    def test_due_before_existing_start(self, foundation, project, pm):
        with pytest.raises(InvalidTaskDatesError):
            update_task(
                project_id=project.id,
                task_id=foundation.id,
                user=pm,
                due_date=date(2025, 1, 1),
            )

    def test_missing_task(self, project, pm):
        with pytest.raises(TaskNotFoundError):
            update_task(project_id=project.id, task_id=uuid.uuid4(), user=pm, title='X')


@pytest.mark.django_db
class TestDeleteAndQuery:

    def test_manager_deletes(self, foundation, project, pm):
        delete_task(project_id=project.id, task_id=foundation.id, user=pm)
        assert not Task.objects.filter(id=foundation.id).exists()

    def test_member_cannot_delete(self, foundation, project, engineer):
        with pytest.raises(InsufficientPermissionsError):
            delete_task(project_id=project.id, task_id=foundation.id, user=engineer)

    def test_filter_by_status(self, foundation, project, pm):
        create_task(project_id=project.id, created_by=pm, title='Done one', status=TaskStatus.DONE)

        tasks = get_project_tasks(project_id=project.id, status=TaskStatus.DONE)
        assert [t.title for t in tasks] == ['Done one']

    def test_tasks_for_user(self, foundation, project, pm, engineer):
        create_task(
            project_id=project.id,
            created_by=pm,
            title='Finished',
            assignee_id=engineer.id,
            status=TaskStatus.DONE,
        )

        assert get_tasks_for_user(user=engineer).count() == 2
        assert list(get_tasks_for_user(user=engineer, include_done=False)) == [foundation]
