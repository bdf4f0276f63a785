from django.contrib import admin
from apps.documents.models import Document


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ['name', 'project', 'doc_type', 'version', 'uploaded_by', 'uploaded_at']
    list_filter = ['doc_type', 'uploaded_at']
    search_fields = ['name', 'project__name']
    readonly_fields = ['version', 'uploaded_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('project', 'uploaded_by')
