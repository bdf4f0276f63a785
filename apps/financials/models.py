from decimal import Decimal
import uuid

from django.core.validators import MinValueValidator
from django.db import models


class ExpenseCategory(models.TextChoices):
    # Declaration order is the order used in reports
    LABOR = 'labor', 'Labor'
    MATERIAL = 'material', 'Material'
    FUEL = 'fuel', 'Fuel'
    EQUIPMENT_RENTAL = 'equipment_rental', 'Equipment Rental'
    SUBCONTRACTOR = 'subcontractor', 'Subcontractor'
    OVERHEAD = 'overhead', 'Overhead'
    MISCELLANEOUS = 'miscellaneous', 'Miscellaneous'


class InvoiceStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    SENT = 'sent', 'Sent'
    PAID = 'paid', 'Paid'
    OVERDUE = 'overdue', 'Overdue'


class Expense(models.Model):
    """Money spent on a project. Sum of amounts is the project's actual cost."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='expenses'
    )
    description = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    category = models.CharField(
        max_length=30,
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.MISCELLANEOUS
    )
    date = models.DateField()
    submitted_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='submitted_expenses'
    )
    receipt_url = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['project', 'date']),
            models.Index(fields=['category']),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.description} ({self.amount})"


class ClientInvoice(models.Model):
    """Invoice billed to the client. Paid invoices make up project revenue."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='client_invoices'
    )
    invoice_number = models.CharField(max_length=30)
    title = models.CharField(max_length=200)
    amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(
        max_length=20,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.DRAFT
    )
    issue_date = models.DateField()
    due_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'client_invoices'
        indexes = [
            models.Index(fields=['project', 'status']),
            models.Index(fields=['issue_date']),
        ]
        ordering = ['-issue_date', '-created_at']

    def __str__(self):
        return f"{self.invoice_number} - {self.title}"

    def recalculate_amount(self):
        """Set amount to the sum of quantity * unit_price over the line items."""
        self.amount = sum(
            (line.total for line in self.line_items.all()),
            Decimal('0.00')
        )
        self.save(update_fields=['amount', 'updated_at'])
        return self.amount


class InvoiceLineItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice = models.ForeignKey(ClientInvoice, on_delete=models.CASCADE, related_name='line_items')
    description = models.CharField(max_length=255)
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    unit_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    class Meta:
        db_table = 'invoice_line_items'

    def __str__(self):
        return self.description

    @property
    def total(self):
        return (self.quantity * self.unit_price).quantize(Decimal('0.01'))
