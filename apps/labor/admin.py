from django.contrib import admin
from apps.labor.models import AttendanceRecord


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ['member', 'project', 'date', 'status', 'recorded_by']
    list_filter = ['status', 'date']
    search_fields = ['member__email', 'member__display_name', 'project__name']
    date_hierarchy = 'date'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('project', 'member', 'recorded_by')
