"""
Dashboard summary.

Portfolio-level numbers over the active projects a user can see.
"""

from decimal import Decimal

from django.db.models import Count, F, Sum

from apps.accounts.models import User
from apps.inventory.models import InventoryItem
from apps.orders.models import Order, OrderStatus
from apps.projects.models import ProjectStatus, ProjectTeamMember

from .project_management import get_visible_projects


def get_dashboard_summary(*, user: User) -> dict:
    """
    Summary numbers for the dashboard.

    Returns:
        dict with active_projects, total_budget, total_actual_cost,
        total_revenue, low_stock_alerts, low_stock_items, personnel,
        pending_orders
    """
    projects = get_visible_projects(user=user).filter(status=ProjectStatus.ACTIVE)
    project_ids = list(projects.values_list('id', flat=True))

    totals = projects.aggregate(
        count=Count('id', distinct=True),
        budget=Sum('budget'),
        actual_cost=Sum('actual_cost'),
        revenue=Sum('revenue'),
    )

    low_stock = (
        InventoryItem.objects
        .filter(project_id__in=project_ids, quantity__lte=F('threshold'))
        .select_related('project')
        .order_by('project__name', 'name')
    )

    personnel = (
        ProjectTeamMember.objects
        .filter(project_id__in=project_ids)
        .values('user')
        .distinct()
        .count()
    )

    pending_orders = Order.objects.filter(
        project_id__in=project_ids,
        status=OrderStatus.PENDING
    ).count()

    return {
        'active_projects': totals['count'] or 0,
        'total_budget': totals['budget'] or Decimal('0.00'),
        'total_actual_cost': totals['actual_cost'] or Decimal('0.00'),
        'total_revenue': totals['revenue'] or Decimal('0.00'),
        'low_stock_alerts': low_stock.count(),
        'low_stock_items': [
            {
                'id': item.id,
                'project_id': item.project_id,
                'project_name': item.project.name,
                'name': item.name,
                'quantity': item.quantity,
                'unit': item.unit,
                'threshold': item.threshold,
            }
            for item in low_stock
        ],
        'personnel': personnel,
        'pending_orders': pending_orders,
    }
