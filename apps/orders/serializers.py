from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Order, OrderItem, OrderStatus


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ['id', 'name', 'quantity', 'unit']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with its items and the people involved."""

    items = OrderItemSerializer(many=True, read_only=True)
    requested_by = UserPublicSerializer(read_only=True)
    approved_by = UserPublicSerializer(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'project',
            'items',
            'status',
            'status_display',
            'requested_by',
            'approved_by',
            'created_at',
            'received_at',
            'invoice_url',
        ]
        read_only_fields = fields


class OrderItemInputSerializer(serializers.Serializer):
    # Non-positive quantities are accepted here and dropped by the service
    name = serializers.CharField(max_length=200, allow_blank=True)
    quantity = serializers.DecimalField(max_digits=14, decimal_places=2)
    unit = serializers.CharField(max_length=50, allow_blank=True, required=False, default='')


class CreateOrderSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, allow_empty=False)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class AttachInvoiceSerializer(serializers.Serializer):
    invoice_url = serializers.CharField(max_length=500)


class OrderFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
