# ==========================================
# apps/projects/models.py
# ==========================================

from decimal import Decimal
import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Sum
from django.utils import timezone

from apps.accounts.models import Role


class ProjectStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    ARCHIVED = 'archived', 'Archived'
    COMPLETED = 'completed', 'Completed'


class ActivityAction(models.TextChoices):
    PROJECT_CREATED = 'Project Created', 'Project Created'
    PROJECT_UPDATED = 'Project Updated', 'Project Updated'
    TEAM_MEMBER_ADDED = 'Team Member Added', 'Team Member Added'
    TEAM_MEMBER_REMOVED = 'Team Member Removed', 'Team Member Removed'
    TASK_CREATED = 'Task Created', 'Task Created'
    TASK_STATUS_UPDATE = 'Task Status Update', 'Task Status Update'
    MATERIAL_CONSUMPTION = 'Material Consumption', 'Material Consumption'
    INVENTORY_REQUEST = 'Inventory Request', 'Inventory Request'
    ORDER_STATUS_UPDATE = 'Order Status Update', 'Order Status Update'
    EXPENSE_LOGGED = 'Expense Logged', 'Expense Logged'
    INVOICE_CREATED = 'Invoice Created', 'Invoice Created'
    DOCUMENT_UPLOAD = 'Document Upload', 'Document Upload'
    DOCUMENT_UPDATE = 'Document Update', 'Document Update'
    DOCUMENT_DELETION = 'Document Deletion', 'Document Deletion'


class Project(models.Model):
    """Construction project, the aggregate that owns every site record."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    location = models.CharField(max_length=255)
    client = models.CharField(max_length=200)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    budget = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        max_length=20,
        choices=ProjectStatus.choices,
        default=ProjectStatus.ACTIVE
    )

    # Derived, recomputed by the financials services
    actual_cost = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    revenue = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    progress = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_projects'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        indexes = [
            models.Index(fields=['status', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.team_members.filter(user=user).exists()

    def is_manager(self, user):
        """Super admins manage every project; project managers manage theirs."""
        if getattr(user, 'is_super_admin', False):
            return True
        return (
            user.role == Role.PROJECT_MANAGER
            and self.has_member(user)
        )

    def can_view(self, user):
        return getattr(user, 'is_super_admin', False) or self.has_member(user)

    @property
    def remaining_budget(self):
        return self.budget - self.actual_cost

    @property
    def budget_utilization(self):
        """Share of the budget spent, in percent."""
        if not self.budget:
            return Decimal('0.00')
        return (self.actual_cost / self.budget * 100).quantize(Decimal('0.01'))

    def recalculate_actual_cost(self):
        """Set actual_cost to the sum of the project's expenses."""
        total = self.expenses.aggregate(total=Sum('amount'))['total']
        self.actual_cost = total or Decimal('0.00')
        self.save(update_fields=['actual_cost', 'updated_at'])
        return self.actual_cost

    def recalculate_revenue(self):
        """Set revenue to the sum of the project's paid invoices."""
        from apps.financials.models import InvoiceStatus

        total = (
            self.client_invoices
            .filter(status=InvoiceStatus.PAID)
            .aggregate(total=Sum('amount'))['total']
        )
        self.revenue = total or Decimal('0.00')
        self.save(update_fields=['revenue', 'updated_at'])
        return self.revenue


class ProjectTeamMember(models.Model):
    """User assigned to a project with a site role and daily wage."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='team_members')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='project_memberships')
    project_role = models.CharField(max_length=100, blank=True)
    daily_wage = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'project_team_members'
        unique_together = [['project', 'user']]
        indexes = [
            models.Index(fields=['user', 'joined_at']),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} on {self.project.name} ({self.project_role})"


class ActivityLog(models.Model):
    """Entry in a project's activity feed."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='activity_logs')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='activity_logs'
    )
    action = models.CharField(max_length=50, choices=ActivityAction.choices)
    # May hold CURRENCY[<amount>] tokens
    details = models.TextField(blank=True)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'activity_logs'
        indexes = [
            models.Index(fields=['project', 'timestamp']),
        ]
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.action} on {self.project.name}"
