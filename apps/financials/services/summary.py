"""Financial summary of a single project."""

from decimal import Decimal
from typing import Dict
from uuid import UUID

from django.db.models import Sum

from apps.projects.services import get_project_by_id
from apps.financials.models import InvoiceStatus

OUTSTANDING_STATUSES = [InvoiceStatus.SENT, InvoiceStatus.OVERDUE]


def get_financial_summary(*, project_id: UUID) -> Dict:
    """
    Budget position and cash flow of a project.

    outstanding_receivables is what Sent and Overdue invoices still owe;
    net_profit is revenue minus actual cost.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)

    outstanding = (
        project.client_invoices
        .filter(status__in=OUTSTANDING_STATUSES)
        .aggregate(total=Sum('amount'))['total']
    ) or Decimal('0.00')

    return {
        'budget': project.budget,
        'actual_cost': project.actual_cost,
        'remaining_budget': project.remaining_budget,
        'budget_utilization': project.budget_utilization,
        'revenue': project.revenue,
        'outstanding_receivables': outstanding,
        'net_profit': project.revenue - project.actual_cost,
    }
