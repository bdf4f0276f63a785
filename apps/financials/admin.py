from django.contrib import admin
from apps.financials.models import ClientInvoice, Expense, InvoiceLineItem


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Admin interface for project expenses."""

    list_display = ['description', 'project', 'amount', 'category', 'date', 'submitted_by']
    list_filter = ['category', 'date']
    search_fields = ['description', 'project__name']
    readonly_fields = ['created_at']
    date_hierarchy = 'date'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('project', 'submitted_by')

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        obj.project.recalculate_actual_cost()

    def delete_model(self, request, obj):
        project = obj.project
        super().delete_model(request, obj)
        project.recalculate_actual_cost()


class InvoiceLineItemInline(admin.TabularInline):
    model = InvoiceLineItem
    extra = 1
    fields = ['description', 'quantity', 'unit_price']


@admin.register(ClientInvoice)
class ClientInvoiceAdmin(admin.ModelAdmin):
    """Admin interface for client invoices."""

    list_display = ['invoice_number', 'title', 'project', 'amount', 'status', 'issue_date', 'due_date']
    list_filter = ['status', 'issue_date']
    search_fields = ['invoice_number', 'title', 'project__name']
    readonly_fields = ['amount', 'created_at', 'updated_at']
    inlines = [InvoiceLineItemInline]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        form.instance.recalculate_amount()
        form.instance.project.recalculate_revenue()
