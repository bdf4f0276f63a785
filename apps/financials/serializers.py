from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import (
    ClientInvoice,
    Expense,
    ExpenseCategory,
    InvoiceLineItem,
    InvoiceStatus,
)


class ExpenseSerializer(serializers.ModelSerializer):
    submitted_by = UserPublicSerializer(read_only=True)
    category_display = serializers.CharField(source='get_category_display', read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id',
            'project',
            'description',
            'amount',
            'category',
            'category_display',
            'date',
            'submitted_by',
            'receipt_url',
            'created_at',
        ]
        read_only_fields = fields


class ExpenseWriteSerializer(serializers.Serializer):
    """Input for logging or editing an expense."""

    description = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0.01')
    )
    category = serializers.ChoiceField(choices=ExpenseCategory.choices)
    date = serializers.DateField()
    receipt_url = serializers.CharField(max_length=500, required=False, allow_blank=True)


class ExpenseFilterSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)


class InvoiceLineItemSerializer(serializers.ModelSerializer):
    total = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)

    class Meta:
        model = InvoiceLineItem
        fields = ['id', 'description', 'quantity', 'unit_price', 'total']
        read_only_fields = ['id', 'total']


class ClientInvoiceSerializer(serializers.ModelSerializer):
    line_items = InvoiceLineItemSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = ClientInvoice
        fields = [
            'id',
            'project',
            'invoice_number',
            'title',
            'amount',
            'status',
            'status_display',
            'issue_date',
            'due_date',
            'line_items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class LineItemInputSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=255)
    quantity = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0.00')
    )
    unit_price = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0.00')
    )


class ClientInvoiceCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    issue_date = serializers.DateField()
    due_date = serializers.DateField()
    line_items = LineItemInputSerializer(many=True, required=False, default=list)

    def validate(self, attrs):
        if attrs['due_date'] < attrs['issue_date']:
            raise serializers.ValidationError({
                'due_date': 'Due date cannot be before issue date'
            })
        return attrs


class ClientInvoiceUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, required=False)
    status = serializers.ChoiceField(choices=InvoiceStatus.choices, required=False)
    issue_date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)
    line_items = LineItemInputSerializer(many=True, required=False)


class InvoiceFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=InvoiceStatus.choices, required=False)


class FinancialSummarySerializer(serializers.Serializer):
    budget = serializers.DecimalField(max_digits=14, decimal_places=2)
    actual_cost = serializers.DecimalField(max_digits=14, decimal_places=2)
    remaining_budget = serializers.DecimalField(max_digits=14, decimal_places=2)
    budget_utilization = serializers.DecimalField(max_digits=7, decimal_places=2)
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    outstanding_receivables = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
