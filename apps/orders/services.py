"""
Order services.

Material orders move Pending -> Approved -> Sent -> Received, and may be
Rejected from any non-final state. Approving and rejecting are reserved
to project managers. Receiving an order adds its items to the project
inventory, matched by name.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.inventory.services import restock_item
from apps.projects.models import ActivityAction
from apps.projects.services import get_project_by_id, record_activity

from .exceptions import (
    ApprovalPermissionError,
    EmptyOrderError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
)
from .models import Order, OrderItem, OrderStatus

logger = logging.getLogger('apps.orders')

MANAGER_ONLY_STATUSES = {OrderStatus.APPROVED.value, OrderStatus.REJECTED.value}


def _describe_items(items) -> str:
    parts = []
    for item in items:
        quantity = f'{item.quantity.normalize():f}'
        parts.append(f"{quantity} {item.unit} of {item.name}")
    return ', '.join(parts)


def get_project_orders(*, project_id: UUID, status: Optional[str] = None) -> QuerySet:
    """
    Orders of a project, newest first.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)
    queryset = (
        Order.objects
        .filter(project=project)
        .select_related('requested_by', 'approved_by')
        .prefetch_related('items')
    )
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-created_at')


def get_order(*, project_id: UUID, order_id: UUID) -> Order:
    """
    Raises:
        OrderNotFoundError: If order doesn't exist in the project
    """
    try:
        return (
            Order.objects
            .select_related('requested_by', 'approved_by')
            .prefetch_related('items')
            .get(id=order_id, project_id=project_id)
        )
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


@transaction.atomic
def create_order(
    *,
    project_id: UUID,
    requested_by: User,
    items: Iterable[dict],
) -> Order:
    """
    Raise a Pending order.

    Args:
        project_id: UUID of the project
        requested_by: User requesting the material
        items: dicts with name, quantity, unit; lines with a
            non-positive quantity or a blank name are dropped

    Returns:
        Created Order with its items

    Raises:
        ProjectNotFoundError: If project doesn't exist
        EmptyOrderError: If no line is left after dropping
    """
    project = get_project_by_id(project_id=project_id)

    lines = [
        item for item in items
        if (item.get('name') or '').strip()
        and Decimal(str(item.get('quantity') or 0)) > 0
    ]
    if not lines:
        raise EmptyOrderError("An order needs at least one item with a positive quantity")

    order = Order.objects.create(
        project=project,
        requested_by=requested_by,
        status=OrderStatus.PENDING,
    )
    order_items = OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            name=line['name'].strip(),
            quantity=Decimal(str(line['quantity'])),
            unit=line.get('unit', ''),
        )
        for line in lines
    ])

    record_activity(
        project=project,
        user=requested_by,
        action=ActivityAction.INVENTORY_REQUEST,
        details=f"Requested {_describe_items(order_items)}.",
    )

    logger.info(f"Order {order.id} with {len(order_items)} item(s) created in project {project.id}")
    return order


@transaction.atomic
def update_order_status(
    *,
    project_id: UUID,
    order_id: UUID,
    user: User,
    status: str,
) -> Order:
    """
    Move an order to a new status.

    Approving stamps approved_by. Receiving stamps received_at and
    restocks the project inventory.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        OrderNotFoundError: If order doesn't exist in the project
        ApprovalPermissionError: If a non-manager approves or rejects
        InvalidStatusTransitionError: If status is not reachable
    """
    project = get_project_by_id(project_id=project_id)

    try:
        order = Order.objects.select_for_update().get(id=order_id, project=project)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    if status not in OrderStatus.values:
        raise InvalidStatusTransitionError(f"Unknown order status: {status}")

    if not order.can_transition_to(status):
        raise InvalidStatusTransitionError(
            f"Cannot move order from {order.get_status_display()} to {OrderStatus(status).label}"
        )

    if str(status) in MANAGER_ONLY_STATUSES and not project.is_manager(user):
        raise ApprovalPermissionError()

    old_status = order.get_status_display()
    order.status = status
    update_fields = ['status', 'updated_at']

    if status == OrderStatus.APPROVED:
        order.approved_by = user
        update_fields.append('approved_by')
    elif status == OrderStatus.RECEIVED:
        order.received_at = timezone.now()
        update_fields.append('received_at')
        for item in order.items.all():
            restock_item(
                project=project,
                name=item.name,
                quantity=item.quantity,
                unit=item.unit,
            )

    order.save(update_fields=update_fields)

    record_activity(
        project=project,
        user=user,
        action=ActivityAction.ORDER_STATUS_UPDATE,
        details=f"Moved order of {_describe_items(order.items.all())} from {old_status} to {order.get_status_display()}.",
    )

    logger.info(f"Order {order.id} moved from {old_status} to {order.get_status_display()}")
    return order


def approve_order(*, project_id: UUID, order_id: UUID, user: User) -> Order:
    """Approve a Pending order (manager only)."""
    return update_order_status(
        project_id=project_id,
        order_id=order_id,
        user=user,
        status=OrderStatus.APPROVED,
    )


@transaction.atomic
def attach_order_invoice(
    *,
    project_id: UUID,
    order_id: UUID,
    invoice_url: str,
) -> Order:
    """
    Record where the supplier invoice of an order is kept.

    Raises:
        OrderNotFoundError: If order doesn't exist in the project
    """
    try:
        order = Order.objects.select_for_update().get(id=order_id, project_id=project_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    order.invoice_url = invoice_url
    order.save(update_fields=['invoice_url', 'updated_at'])
    return order
