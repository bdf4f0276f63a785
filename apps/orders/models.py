# ==========================================
# apps/orders/models.py
# ==========================================

from decimal import Decimal
import uuid

from django.core.validators import MinValueValidator
from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    SENT = 'sent', 'Sent'
    RECEIVED = 'received', 'Received'
    REJECTED = 'rejected', 'Rejected'


# Allowed next states; Received and Rejected are final
ORDER_TRANSITIONS = {
    OrderStatus.PENDING.value: {OrderStatus.APPROVED.value, OrderStatus.REJECTED.value},
    OrderStatus.APPROVED.value: {OrderStatus.SENT.value, OrderStatus.REJECTED.value},
    OrderStatus.SENT.value: {OrderStatus.RECEIVED.value, OrderStatus.REJECTED.value},
    OrderStatus.RECEIVED.value: set(),
    OrderStatus.REJECTED.value: set(),
}


class Order(models.Model):
    """Material request raised from a site."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey('projects.Project', on_delete=models.CASCADE, related_name='orders')
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    requested_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='requested_orders'
    )
    approved_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_orders'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    received_at = models.DateTimeField(null=True, blank=True)
    # Supplier invoice location (path or URL)
    invoice_url = models.CharField(max_length=500, blank=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['project', 'status']),
            models.Index(fields=['created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {str(self.id)[:8]} ({self.get_status_display()})"

    @property
    def is_final(self):
        return not ORDER_TRANSITIONS[str(self.status)]

    def can_transition_to(self, new_status):
        return str(new_status) in ORDER_TRANSITIONS[str(self.status)]


class OrderItem(models.Model):
    """Line of an order: what material and how much."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    name = models.CharField(max_length=200)
    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    unit = models.CharField(max_length=50)

    class Meta:
        db_table = 'order_items'

    def __str__(self):
        return f"{self.quantity} {self.unit} of {self.name}"
