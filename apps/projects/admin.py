# ==========================================
# apps/projects/admin.py
# ==========================================

from django.contrib import admin
from apps.projects.models import ActivityLog, Project, ProjectTeamMember


class ProjectTeamMemberInline(admin.TabularInline):
    """Inline admin for project team members."""
    model = ProjectTeamMember
    extra = 0
    fields = ['user', 'project_role', 'daily_wage', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin interface for Projects."""

    list_display = [
        'name',
        'client',
        'location',
        'status',
        'budget',
        'actual_cost',
        'revenue',
        'progress',
        'member_count',
        'start_date',
    ]
    list_filter = ['status', 'start_date']
    search_fields = ['name', 'client', 'location']
    readonly_fields = ['actual_cost', 'revenue', 'created_by', 'created_at', 'updated_at']
    inlines = [ProjectTeamMemberInline]
    date_hierarchy = 'start_date'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'client', 'location', 'status', 'progress')
        }),
        ('Schedule & Budget', {
            'fields': ('start_date', 'end_date', 'budget')
        }),
        ('Derived Totals', {
            'fields': ('actual_cost', 'revenue'),
            'description': 'Recomputed from expenses and paid client invoices.',
        }),
        ('Metadata', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def member_count(self, obj):
        return obj.team_members.count()
    member_count.short_description = 'Team'

    actions = ['recalculate_totals']

    @admin.action(description='Recalculate actual cost and revenue')
    def recalculate_totals(self, request, queryset):
        for project in queryset:
            project.recalculate_actual_cost()
            project.recalculate_revenue()
        self.message_user(request, f"Recalculated totals for {queryset.count()} project(s)")


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    """Admin interface for the activity log (read-only)."""

    list_display = ['timestamp', 'project', 'user', 'action']
    list_filter = ['action', 'timestamp']
    search_fields = ['details', 'project__name', 'user__email']
    date_hierarchy = 'timestamp'
    ordering = ['-timestamp']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'project')
