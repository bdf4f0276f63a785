"""
Client invoice service.

An invoice's amount is always the sum of its line items. Project revenue
is the sum of the project's Paid invoices and is recomputed on every
invoice mutation.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.currency import currency_token
from apps.accounts.models import User
from apps.projects.models import ActivityAction, Project
from apps.projects.services import (
    ensure_project_manager,
    get_project_by_id,
    record_activity,
)
from apps.financials.models import ClientInvoice, InvoiceLineItem, InvoiceStatus

from .exceptions import InvalidInvoiceError, InvoiceNotFoundError

logger = logging.getLogger('apps.financials')

UPDATABLE_FIELDS = ('title', 'status', 'issue_date', 'due_date')


def _lock_project(project_id: UUID) -> Project:
    get_project_by_id(project_id=project_id)
    return Project.objects.select_for_update().get(id=project_id)


def _validate_dates(issue_date, due_date):
    if issue_date and due_date and due_date < issue_date:
        raise InvalidInvoiceError("Due date cannot be before issue date")


def _write_line_items(invoice: ClientInvoice, line_items: Iterable[dict]) -> None:
    lines = []
    for line in line_items:
        quantity = Decimal(str(line.get('quantity') or 0))
        unit_price = Decimal(str(line.get('unit_price') or 0))
        if quantity < 0 or unit_price < 0:
            raise InvalidInvoiceError("Line item quantity and unit price cannot be negative")
        lines.append(InvoiceLineItem(
            invoice=invoice,
            description=line.get('description', ''),
            quantity=quantity,
            unit_price=unit_price,
        ))
    InvoiceLineItem.objects.bulk_create(lines)


def next_invoice_number(*, project: Project, issue_date: date) -> str:
    """INV-<issue year>-<NNN>, NNN being the project's invoice count + 1."""
    count = ClientInvoice.objects.filter(project=project).count()
    return f"INV-{issue_date.year}-{count + 1:03d}"


def get_project_invoices(*, project_id: UUID, status: Optional[str] = None) -> QuerySet:
    """
    Client invoices of a project, most recent first.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)
    queryset = ClientInvoice.objects.filter(project=project).prefetch_related('line_items')
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def get_client_invoice(*, project_id: UUID, invoice_id: UUID) -> ClientInvoice:
    """
    Raises:
        InvoiceNotFoundError: If invoice doesn't exist in the project
    """
    try:
        return (
            ClientInvoice.objects
            .prefetch_related('line_items')
            .get(id=invoice_id, project_id=project_id)
        )
    except ClientInvoice.DoesNotExist:
        raise InvoiceNotFoundError(f"Invoice with ID {invoice_id} not found")


@transaction.atomic
def create_client_invoice(
    *,
    project_id: UUID,
    created_by: User,
    title: str,
    issue_date: date,
    due_date: date,
    line_items: Iterable[dict] = (),
) -> ClientInvoice:
    """
    Create a Draft invoice with a generated number.

    Args:
        project_id: UUID of the project
        created_by: User issuing the invoice
        title: Invoice title, e.g. "First Running Bill"
        issue_date: Issue date; its year goes into the invoice number
        due_date: Payment due date, not before issue_date
        line_items: dicts with description, quantity, unit_price

    Returns:
        Created ClientInvoice with amount set from its line items

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InvalidInvoiceError: If dates or line items are invalid
    """
    _validate_dates(issue_date, due_date)
    project = _lock_project(project_id)

    invoice = ClientInvoice.objects.create(
        project=project,
        invoice_number=next_invoice_number(project=project, issue_date=issue_date),
        title=title,
        status=InvoiceStatus.DRAFT,
        issue_date=issue_date,
        due_date=due_date,
    )
    _write_line_items(invoice, line_items)
    invoice.recalculate_amount()

    record_activity(
        project=project,
        user=created_by,
        action=ActivityAction.INVOICE_CREATED,
        details=f"Created invoice {invoice.invoice_number} for {currency_token(invoice.amount)}.",
    )

    logger.info(f"Invoice {invoice.invoice_number} ({invoice.amount}) created in project {project.id}")
    return invoice


@transaction.atomic
def update_client_invoice(
    *,
    project_id: UUID,
    invoice_id: UUID,
    line_items: Optional[Iterable[dict]] = None,
    **fields
) -> ClientInvoice:
    """
    Update an invoice. Line items, when given, replace the existing ones.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InvoiceNotFoundError: If invoice doesn't exist in the project
        InvalidInvoiceError: If dates, status or line items are invalid
    """
    project = _lock_project(project_id)

    try:
        invoice = ClientInvoice.objects.select_for_update().get(id=invoice_id, project=project)
    except ClientInvoice.DoesNotExist:
        raise InvoiceNotFoundError(f"Invoice with ID {invoice_id} not found")

    changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
    if 'status' in changes and changes['status'] not in InvoiceStatus.values:
        raise InvalidInvoiceError(f"Unknown invoice status: {changes['status']}")
    _validate_dates(
        changes.get('issue_date', invoice.issue_date),
        changes.get('due_date', invoice.due_date),
    )

    for field, value in changes.items():
        setattr(invoice, field, value)
    invoice.save()

    if line_items is not None:
        invoice.line_items.all().delete()
        _write_line_items(invoice, line_items)
        invoice.recalculate_amount()

    project.recalculate_revenue()

    logger.info(f"Invoice {invoice.invoice_number} updated, project {project.id} revenue now {project.revenue}")
    return invoice


@transaction.atomic
def delete_client_invoice(*, project_id: UUID, invoice_id: UUID, user: User) -> None:
    """
    Delete an invoice (manager only).

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If user is not a manager
        InvoiceNotFoundError: If invoice doesn't exist in the project
    """
    project = _lock_project(project_id)
    ensure_project_manager(project=project, user=user)

    try:
        invoice = ClientInvoice.objects.get(id=invoice_id, project=project)
    except ClientInvoice.DoesNotExist:
        raise InvoiceNotFoundError(f"Invoice with ID {invoice_id} not found")

    invoice.delete()
    project.recalculate_revenue()
    logger.info(f"Invoice {invoice_id} deleted, project {project.id} revenue now {project.revenue}")
