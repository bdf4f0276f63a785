from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import InventoryItem, MaterialConsumption


class InventoryItemSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            'id',
            'project',
            'name',
            'quantity',
            'unit',
            'threshold',
            'is_low_stock',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class InventoryItemWriteSerializer(serializers.Serializer):
    """Input for creating or updating an inventory item."""

    name = serializers.CharField(max_length=200)
    unit = serializers.CharField(max_length=50)
    quantity = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    threshold = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0.00'), required=False
    )


class InventoryFilterSerializer(serializers.Serializer):
    low_stock = serializers.BooleanField(required=False, default=False)


class MaterialConsumptionSerializer(serializers.ModelSerializer):
    logged_by = UserPublicSerializer(read_only=True)

    class Meta:
        model = MaterialConsumption
        fields = [
            'id',
            'project',
            'item',
            'item_name',
            'quantity',
            'unit',
            'date',
            'logged_by',
            'created_at',
        ]
        read_only_fields = fields


class LogConsumptionSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    date = serializers.DateField()


class ConsumptionFilterSerializer(serializers.Serializer):
    item = serializers.UUIDField(required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date.'
            })
        return attrs
