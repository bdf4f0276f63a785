# ==========================================
# apps/inventory/models.py
# ==========================================

from decimal import Decimal
import uuid

from django.core.validators import MinValueValidator
from django.db import models


class InventoryItem(models.Model):
    """Stock of one material held at a project site."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey('projects.Project', on_delete=models.CASCADE, related_name='inventory_items')
    name = models.CharField(max_length=200)
    # Consumption may take this below zero
    quantity = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    unit = models.CharField(max_length=50)
    threshold = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'inventory_items'
        unique_together = [['project', 'name']]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.quantity} {self.unit})"

    @property
    def is_low_stock(self):
        return self.quantity <= self.threshold


class MaterialConsumption(models.Model):
    """Usage of a material on site. Item name and unit are snapshots."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey('projects.Project', on_delete=models.CASCADE, related_name='material_consumptions')
    item = models.ForeignKey(
        InventoryItem,
        on_delete=models.SET_NULL,
        null=True,
        related_name='consumptions'
    )
    item_name = models.CharField(max_length=200)
    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    unit = models.CharField(max_length=50)
    date = models.DateField()
    logged_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='material_consumptions'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'material_consumptions'
        indexes = [
            models.Index(fields=['project', 'date']),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.quantity} {self.unit} of {self.item_name} on {self.date}"
