"""
Serializers for reports app.

Input Serializers:
    ReportPeriodQuerySerializer - Validates the report period

Response Serializers:
    FinancialReportSerializer - Financial report
    LaborReportSerializer - Labor report
"""

from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class ReportPeriodQuerySerializer(serializers.Serializer):
    """
    Validate the report period.

    Query Parameters:
        start_date (date): First day, defaults to the start of a REPORT_DEFAULT_DAYS-day
            period ending on end_date
        end_date (date): Last day (inclusive), defaults to today
    """

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        end = attrs.get('end_date') or timezone.localdate()
        # Both bounds are inclusive
        start = attrs.get('start_date') or end - timedelta(days=settings.REPORT_DEFAULT_DAYS - 1)

        if start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be on or before end date'
            })

        attrs['start_date'] = start
        attrs['end_date'] = end
        return attrs


# =============================================================================
# Response Serializers
# =============================================================================

class ExpenseBreakdownSerializer(serializers.Serializer):
    category = serializers.CharField()
    label = serializers.CharField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class RevenueItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    invoice_number = serializers.CharField()
    title = serializers.CharField()
    issue_date = serializers.DateField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class ExpenseItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    description = serializers.CharField()
    category = serializers.CharField()
    date = serializers.DateField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class FinancialReportSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    expense_breakdown = ExpenseBreakdownSerializer(many=True)
    revenue_items = RevenueItemSerializer(many=True)
    expense_items = ExpenseItemSerializer(many=True)


class LaborMemberSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    display_name = serializers.CharField()
    project_role = serializers.CharField()
    daily_wage = serializers.DecimalField(max_digits=10, decimal_places=2)
    present = serializers.IntegerField()
    absent = serializers.IntegerField()
    half_day = serializers.IntegerField()
    wages = serializers.DecimalField(max_digits=14, decimal_places=2)


class LaborTotalsSerializer(serializers.Serializer):
    present = serializers.IntegerField()
    absent = serializers.IntegerField()
    half_day = serializers.IntegerField()
    wages = serializers.DecimalField(max_digits=14, decimal_places=2)


class LaborReportSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    members = LaborMemberSerializer(many=True)
    totals = LaborTotalsSerializer()
