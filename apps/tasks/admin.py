from django.contrib import admin
from apps.tasks.models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin interface for Tasks."""

    list_display = ['title', 'project', 'assignee', 'status', 'start_date', 'due_date']
    list_filter = ['status', 'due_date']
    search_fields = ['title', 'description', 'project__name', 'assignee__email']
    filter_horizontal = ['dependencies']
    date_hierarchy = 'due_date'
    ordering = ['due_date']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('project', 'assignee')
