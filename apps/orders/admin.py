from django.contrib import admin
from apps.orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    """Inline admin for order lines."""
    model = OrderItem
    extra = 0
    fields = ['name', 'quantity', 'unit']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for material orders."""

    list_display = ['id', 'project', 'status', 'requested_by', 'approved_by', 'created_at', 'received_at']
    list_filter = ['status', 'created_at']
    search_fields = ['project__name', 'requested_by__email', 'items__name']
    readonly_fields = ['created_at', 'updated_at', 'received_at']
    inlines = [OrderItemInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('project', 'requested_by', 'approved_by')
