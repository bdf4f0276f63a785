from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.projects.mixins import ProjectScopedMixin
from .models import TaskStatus
from .serializers import (
    TaskSerializer,
    MyTaskSerializer,
    TaskWriteSerializer,
    TaskFilterSerializer,
    MyTasksFilterSerializer,
)
from . import services
from .exceptions import (
    TaskNotFoundError,
    InvalidAssigneeError,
    InvalidDependencyError,
    InvalidTaskDatesError,
)


class TaskViewSet(ProjectScopedMixin, viewsets.ViewSet):
    """
    Tasks of one project.

    list: Tasks (?status=, ?assignee=)
    create: Create a task
    retrieve: Get a task
    partial_update: Update a task; status changes are logged
    destroy: Delete a task (manager only)
    """

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, enum=TaskStatus.values),
            OpenApiParameter('assignee', str, description='User UUID'),
        ],
        responses={200: TaskSerializer(many=True)},
    )
    def list(self, request, project_id=None):
        filters = TaskFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        tasks = services.get_project_tasks(
            project_id=self.get_project().id,
            status=filters.validated_data.get('status'),
            assignee_id=filters.validated_data.get('assignee'),
        )
        return Response(TaskSerializer(tasks, many=True).data)

    @extend_schema(request=TaskWriteSerializer, responses={201: TaskSerializer})
    def create(self, request, project_id=None):
        serializer = TaskWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            task = services.create_task(
                project_id=self.get_project().id,
                created_by=request.user,
                **serializer.validated_data
            )
        except (InvalidAssigneeError, InvalidDependencyError, InvalidTaskDatesError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: TaskSerializer})
    def retrieve(self, request, project_id=None, pk=None):
        try:
            task = services.get_task(project_id=self.get_project().id, task_id=pk)
        except TaskNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(TaskSerializer(task).data)

    @extend_schema(request=TaskWriteSerializer, responses={200: TaskSerializer})
    def partial_update(self, request, project_id=None, pk=None):
        serializer = TaskWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            task = services.update_task(
                project_id=self.get_project().id,
                task_id=pk,
                user=request.user,
                **serializer.validated_data
            )
        except TaskNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidAssigneeError, InvalidDependencyError, InvalidTaskDatesError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TaskSerializer(task).data)

    def destroy(self, request, project_id=None, pk=None):
        try:
            services.delete_task(
                project_id=self.get_project().id,
                task_id=pk,
                user=request.user
            )
        except TaskNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    parameters=[OpenApiParameter('include_done', bool, description='Include finished tasks (default true)')],
    responses={200: MyTaskSerializer(many=True)},
    description="Tasks assigned to the current user across all projects.",
    tags=['tasks'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_tasks(request):
    """Tasks assigned to the current user."""
    filters = MyTasksFilterSerializer(data=request.query_params)
    filters.is_valid(raise_exception=True)

    tasks = services.get_tasks_for_user(
        user=request.user,
        include_done=filters.validated_data['include_done']
    )
    return Response(MyTaskSerializer(tasks, many=True).data)
