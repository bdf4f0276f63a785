from django.contrib import admin
from django.db.models import F
from apps.inventory.models import InventoryItem, MaterialConsumption


class LowStockFilter(admin.SimpleListFilter):
    title = 'stock level'
    parameter_name = 'stock'

    def lookups(self, request, model_admin):
        return [('low', 'Low stock'), ('ok', 'In stock')]

    def queryset(self, request, queryset):
        if self.value() == 'low':
            return queryset.filter(quantity__lte=F('threshold'))
        if self.value() == 'ok':
            return queryset.filter(quantity__gt=F('threshold'))
        return queryset


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    """Admin interface for inventory items."""

    list_display = ['name', 'project', 'quantity', 'unit', 'threshold', 'is_low_stock']
    list_filter = [LowStockFilter, 'unit']
    search_fields = ['name', 'project__name']
    ordering = ['project', 'name']

    def is_low_stock(self, obj):
        return obj.is_low_stock
    is_low_stock.boolean = True
    is_low_stock.short_description = 'Low stock'


@admin.register(MaterialConsumption)
class MaterialConsumptionAdmin(admin.ModelAdmin):
    list_display = ['date', 'item_name', 'quantity', 'unit', 'project', 'logged_by']
    list_filter = ['date']
    search_fields = ['item_name', 'project__name', 'logged_by__email']
    date_hierarchy = 'date'
    ordering = ['-date']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('project', 'logged_by')
