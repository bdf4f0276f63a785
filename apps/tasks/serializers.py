from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Task, TaskStatus


class TaskSerializer(serializers.ModelSerializer):
    """Task with assignee details and dependency ids."""

    assignee = UserPublicSerializer(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    dependencies = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = Task
        fields = [
            'id',
            'project',
            'title',
            'description',
            'assignee',
            'status',
            'status_display',
            'start_date',
            'due_date',
            'dependencies',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class MyTaskSerializer(TaskSerializer):
    """Task as shown in "my tasks", with the project name."""

    project_name = serializers.CharField(source='project.name', read_only=True)

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ['project_name']
        read_only_fields = fields


class TaskWriteSerializer(serializers.Serializer):
    """Input for creating or updating a task."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    assignee_id = serializers.UUIDField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=TaskStatus.choices, required=False)
    start_date = serializers.DateField(required=False, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)
    dependency_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        allow_empty=True
    )

    def validate(self, attrs):
        start_date = attrs.get('start_date')
        due_date = attrs.get('due_date')
        if start_date and due_date and due_date < start_date:
            raise serializers.ValidationError({
                'due_date': 'Due date cannot be before start date.'
            })
        return attrs


class TaskFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TaskStatus.choices, required=False)
    assignee = serializers.UUIDField(required=False)


class MyTasksFilterSerializer(serializers.Serializer):
    include_done = serializers.BooleanField(required=False, default=True)
