from decimal import Decimal

from rest_framework import serializers

from apps.accounts.currency import render_currency_tokens
from apps.accounts.serializers import UserPublicSerializer
from .models import ActivityLog, Project, ProjectStatus, ProjectTeamMember


class ProjectSerializer(serializers.ModelSerializer):
    """Full project details."""

    created_by = UserPublicSerializer(read_only=True)
    remaining_budget = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    budget_utilization = serializers.DecimalField(max_digits=7, decimal_places=2, read_only=True)
    team_size = serializers.SerializerMethodField()
    is_manager = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id',
            'name',
            'location',
            'client',
            'start_date',
            'end_date',
            'budget',
            'status',
            'actual_cost',
            'revenue',
            'remaining_budget',
            'budget_utilization',
            'progress',
            'team_size',
            'is_manager',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id', 'actual_cost', 'revenue', 'created_by', 'created_at', 'updated_at',
        ]

    def get_team_size(self, obj):
        return obj.team_members.count()

    def get_is_manager(self, obj):
        request = self.context.get('request')
        if not request or not request.user.is_authenticated:
            return False
        return obj.is_manager(request.user)


class ProjectListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for project cards."""

    class Meta:
        model = Project
        fields = [
            'id',
            'name',
            'location',
            'client',
            'status',
            'budget',
            'actual_cost',
            'revenue',
            'progress',
            'start_date',
            'end_date',
        ]


class ProjectCreateSerializer(serializers.Serializer):
    """Input for creating a project."""

    name = serializers.CharField(max_length=200)
    location = serializers.CharField(max_length=255)
    client = serializers.CharField(max_length=200)
    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False, allow_null=True)
    budget = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.00'))
    progress = serializers.IntegerField(min_value=0, max_value=100, required=False, default=0)

    def validate(self, attrs):
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({
                'end_date': 'End date cannot be before start date.'
            })
        return attrs


class ProjectUpdateSerializer(ProjectCreateSerializer):
    """Input for updating a project; every field optional."""

    name = serializers.CharField(max_length=200, required=False)
    location = serializers.CharField(max_length=255, required=False)
    client = serializers.CharField(max_length=200, required=False)
    start_date = serializers.DateField(required=False)
    budget = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0.00'), required=False
    )
    progress = serializers.IntegerField(min_value=0, max_value=100, required=False)
    status = serializers.ChoiceField(choices=ProjectStatus.choices, required=False)


class ProjectFilterSerializer(serializers.Serializer):
    """Query params for the project list."""

    status = serializers.ChoiceField(
        choices=ProjectStatus.values + ['all'],
        required=False,
        default=ProjectStatus.ACTIVE,
    )


class TeamMemberSerializer(serializers.ModelSerializer):
    """Project team member with user details."""

    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = ProjectTeamMember
        fields = ['id', 'user', 'project_role', 'daily_wage', 'joined_at']
        read_only_fields = fields


class AddTeamMemberSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    project_role = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    daily_wage = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.00'),
        required=False, default=Decimal('0.00')
    )


class UpdateTeamMemberSerializer(serializers.Serializer):
    project_role = serializers.CharField(max_length=100, required=False, allow_blank=True)
    daily_wage = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.00'), required=False
    )


class ActivityLogSerializer(serializers.ModelSerializer):
    """
    Activity entry. Amounts in ``details`` are rendered in the requesting
    user's currency.
    """

    user = UserPublicSerializer(read_only=True)
    details = serializers.SerializerMethodField()

    class Meta:
        model = ActivityLog
        fields = ['id', 'user', 'action', 'details', 'timestamp']

    def get_details(self, obj):
        request = self.context.get('request')
        currency = None
        if request and request.user.is_authenticated:
            currency = request.user.get_preference('currency')
        return render_currency_tokens(obj.details, currency)


class ActivityQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=500, required=False, default=50)


class LowStockItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    project_id = serializers.UUIDField()
    project_name = serializers.CharField()
    name = serializers.CharField()
    quantity = serializers.DecimalField(max_digits=14, decimal_places=2)
    unit = serializers.CharField()
    threshold = serializers.DecimalField(max_digits=14, decimal_places=2)


class DashboardSummarySerializer(serializers.Serializer):
    """Output shape of the dashboard summary."""

    active_projects = serializers.IntegerField()
    total_budget = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_actual_cost = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    low_stock_alerts = serializers.IntegerField()
    low_stock_items = LowStockItemSerializer(many=True)
    personnel = serializers.IntegerField()
    pending_orders = serializers.IntegerField()
