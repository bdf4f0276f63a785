"""
Inventory services.

Stock levels per project, material consumption and restocking from
received orders. Consumption is never checked against available stock:
the quantity may go negative and a warning is logged.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import F, QuerySet

from apps.accounts.models import User
from apps.projects.models import ActivityAction, Project
from apps.projects.services import (
    ensure_project_manager,
    get_project_by_id,
    record_activity,
)

from .exceptions import (
    DuplicateInventoryItemError,
    InvalidQuantityError,
    InventoryItemNotFoundError,
)
from .models import InventoryItem, MaterialConsumption

logger = logging.getLogger('apps.inventory')

UPDATABLE_FIELDS = ('name', 'quantity', 'unit', 'threshold')


def _format_quantity(value: Decimal) -> str:
    """2.50 -> '2.5', 200.00 -> '200'."""
    text = f'{value:f}'
    return text.rstrip('0').rstrip('.') if '.' in text else text


def get_project_inventory(*, project_id: UUID, low_stock_only: bool = False) -> QuerySet:
    """
    Inventory of a project, by name.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)
    queryset = InventoryItem.objects.filter(project=project)
    if low_stock_only:
        queryset = queryset.filter(quantity__lte=F('threshold'))
    return queryset.order_by('name')


def get_inventory_item(*, project_id: UUID, item_id: UUID) -> InventoryItem:
    """
    Raises:
        InventoryItemNotFoundError: If item doesn't exist in the project
    """
    try:
        return InventoryItem.objects.get(id=item_id, project_id=project_id)
    except InventoryItem.DoesNotExist:
        raise InventoryItemNotFoundError(f"Inventory item with ID {item_id} not found")


@transaction.atomic
def create_inventory_item(
    *,
    project_id: UUID,
    name: str,
    unit: str,
    quantity: Decimal = Decimal('0.00'),
    threshold: Decimal = Decimal('0.00'),
) -> InventoryItem:
    """
    Add a material to the project's inventory.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        DuplicateInventoryItemError: If an item with this name exists
    """
    project = get_project_by_id(project_id=project_id)

    if InventoryItem.objects.filter(project=project, name__iexact=name).exists():
        raise DuplicateInventoryItemError(f"{name} is already in the inventory")

    try:
        item = InventoryItem.objects.create(
            project=project,
            name=name,
            unit=unit,
            quantity=quantity,
            threshold=threshold,
        )
    except IntegrityError:
        raise DuplicateInventoryItemError(f"{name} is already in the inventory")

    logger.info(f"Inventory item {item.name} added to project {project.id}")
    return item


@transaction.atomic
def update_inventory_item(*, project_id: UUID, item_id: UUID, **fields) -> InventoryItem:
    """
    Update name, quantity, unit or threshold of an item.

    Raises:
        InventoryItemNotFoundError: If item doesn't exist in the project
        DuplicateInventoryItemError: If renamed to an existing item's name
    """
    try:
        item = InventoryItem.objects.select_for_update().get(id=item_id, project_id=project_id)
    except InventoryItem.DoesNotExist:
        raise InventoryItemNotFoundError(f"Inventory item with ID {item_id} not found")

    new_name = fields.get('name')
    if new_name and new_name.lower() != item.name.lower():
        clash = (
            InventoryItem.objects
            .filter(project_id=project_id, name__iexact=new_name)
            .exclude(id=item.id)
            .exists()
        )
        if clash:
            raise DuplicateInventoryItemError(f"{new_name} is already in the inventory")

    for name in UPDATABLE_FIELDS:
        if name in fields:
            setattr(item, name, fields[name])
    item.save()
    return item


@transaction.atomic
def delete_inventory_item(*, project_id: UUID, item_id: UUID, user: User) -> None:
    """
    Remove an item (manager only). Consumption history keeps its snapshot.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If user is not a manager
        InventoryItemNotFoundError: If item doesn't exist in the project
    """
    project = get_project_by_id(project_id=project_id)
    ensure_project_manager(project=project, user=user)

    deleted, _ = InventoryItem.objects.filter(id=item_id, project=project).delete()
    if not deleted:
        raise InventoryItemNotFoundError(f"Inventory item with ID {item_id} not found")


@transaction.atomic
def log_material_consumption(
    *,
    project_id: UUID,
    item_id: UUID,
    quantity: Decimal,
    date: date,
    logged_by: User,
) -> MaterialConsumption:
    """
    Record usage of a material: deduct stock, write a consumption record
    and an activity entry.

    Args:
        project_id: UUID of the project
        item_id: UUID of the inventory item
        quantity: Amount used, must be positive
        date: Day of use
        logged_by: User logging the usage

    Returns:
        Created MaterialConsumption

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InventoryItemNotFoundError: If item doesn't exist in the project
        InvalidQuantityError: If quantity is not positive
    """
    if quantity is None or quantity <= 0:
        raise InvalidQuantityError("Consumed quantity must be greater than zero")

    project = get_project_by_id(project_id=project_id)

    try:
        item = InventoryItem.objects.select_for_update().get(id=item_id, project=project)
    except InventoryItem.DoesNotExist:
        raise InventoryItemNotFoundError(f"Inventory item with ID {item_id} not found")

    item.quantity -= quantity
    item.save(update_fields=['quantity', 'updated_at'])

    if item.quantity < 0:
        logger.warning(
            f"Stock of {item.name} in project {project.id} went negative: "
            f"{item.quantity} {item.unit}"
        )

    consumption = MaterialConsumption.objects.create(
        project=project,
        item=item,
        item_name=item.name,
        quantity=quantity,
        unit=item.unit,
        date=date,
        logged_by=logged_by,
    )

    record_activity(
        project=project,
        user=logged_by,
        action=ActivityAction.MATERIAL_CONSUMPTION,
        details=f"Logged usage of {_format_quantity(quantity)} {item.unit} of {item.name}.",
    )

    return consumption


def get_consumption_history(
    *,
    project_id: UUID,
    item_id: Optional[UUID] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> QuerySet:
    """
    Consumption records of a project, newest first.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)
    queryset = (
        MaterialConsumption.objects
        .filter(project=project)
        .select_related('logged_by')
    )
    if item_id:
        queryset = queryset.filter(item_id=item_id)
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return queryset.order_by('-date', '-created_at')


def restock_item(
    *,
    project: Project,
    name: str,
    quantity: Decimal,
    unit: str,
) -> InventoryItem:
    """
    Add received stock to the item with this name, creating it if the
    project does not stock it yet. Call inside the caller's transaction.
    """
    item = (
        InventoryItem.objects
        .select_for_update()
        .filter(project=project, name__iexact=name)
        .first()
    )
    if item is None:
        item = InventoryItem.objects.create(
            project=project,
            name=name,
            unit=unit,
            quantity=quantity,
            threshold=Decimal('0.00'),
        )
        logger.info(f"New inventory item {name} created by restock in project {project.id}")
        return item

    item.quantity += quantity
    item.save(update_fields=['quantity', 'updated_at'])
    return item
