"""
Expense service.

Every mutation recomputes the project's actual_cost from its expenses,
holding a row lock on the project while it does.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
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
from apps.financials.models import Expense, ExpenseCategory

from .exceptions import ExpenseNotFoundError, InvalidExpenseError

logger = logging.getLogger('apps.financials')

UPDATABLE_FIELDS = ('description', 'amount', 'category', 'date', 'receipt_url')


def _lock_project(project_id: UUID) -> Project:
    # Existence check raises ProjectNotFoundError before locking
    get_project_by_id(project_id=project_id)
    return Project.objects.select_for_update().get(id=project_id)


def _validate(amount=None, category=None):
    if amount is not None and Decimal(str(amount)) <= 0:
        raise InvalidExpenseError("Expense amount must be greater than zero")
    if category is not None and category not in ExpenseCategory.values:
        raise InvalidExpenseError(f"Unknown expense category: {category}")


def get_project_expenses(
    *,
    project_id: UUID,
    category: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> QuerySet:
    """
    Expenses of a project, most recent first.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)
    queryset = Expense.objects.filter(project=project).select_related('submitted_by')

    if category:
        queryset = queryset.filter(category=category)
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)

    return queryset


def get_expense(*, project_id: UUID, expense_id: UUID) -> Expense:
    """
    Raises:
        ExpenseNotFoundError: If expense doesn't exist in the project
    """
    try:
        return Expense.objects.select_related('submitted_by').get(
            id=expense_id,
            project_id=project_id,
        )
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")


@transaction.atomic
def create_expense(
    *,
    project_id: UUID,
    submitted_by: User,
    description: str,
    amount: Decimal,
    category: str,
    date: date,
    receipt_url: str = '',
) -> Expense:
    """
    Log an expense against a project.

    Args:
        project_id: UUID of the project
        submitted_by: User logging the expense
        description: What the money was spent on
        amount: Positive amount
        category: ExpenseCategory value
        date: Day the expense was incurred
        receipt_url: Optional link to the receipt

    Returns:
        Created Expense

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InvalidExpenseError: If amount is not positive or category unknown
    """
    _validate(amount=amount, category=category)
    project = _lock_project(project_id)

    expense = Expense.objects.create(
        project=project,
        submitted_by=submitted_by,
        description=description,
        amount=amount,
        category=category,
        date=date,
        receipt_url=receipt_url,
    )

    project.recalculate_actual_cost()

    record_activity(
        project=project,
        user=submitted_by,
        action=ActivityAction.EXPENSE_LOGGED,
        details=f"Logged an expense of {currency_token(expense.amount)} for {description}.",
    )

    logger.info(
        f"Expense {expense.id} of {expense.amount} logged in project {project.id}, "
        f"actual cost now {project.actual_cost}"
    )
    return expense


@transaction.atomic
def update_expense(*, project_id: UUID, expense_id: UUID, **fields) -> Expense:
    """
    Update an expense and recompute the project's actual cost.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        ExpenseNotFoundError: If expense doesn't exist in the project
        InvalidExpenseError: If amount is not positive or category unknown
    """
    project = _lock_project(project_id)

    try:
        expense = Expense.objects.select_for_update().get(id=expense_id, project=project)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")

    changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
    _validate(amount=changes.get('amount'), category=changes.get('category'))

    for field, value in changes.items():
        setattr(expense, field, value)
    expense.save()

    project.recalculate_actual_cost()

    logger.info(f"Expense {expense.id} updated, project {project.id} actual cost now {project.actual_cost}")
    return expense


@transaction.atomic
def delete_expense(*, project_id: UUID, expense_id: UUID, user: User) -> None:
    """
    Delete an expense (manager only).

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If user is not a manager
        ExpenseNotFoundError: If expense doesn't exist in the project
    """
    project = _lock_project(project_id)
    ensure_project_manager(project=project, user=user)

    deleted, _ = Expense.objects.filter(id=expense_id, project=project).delete()
    if not deleted:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")

    project.recalculate_actual_cost()
    logger.info(f"Expense {expense_id} deleted, project {project.id} actual cost now {project.actual_cost}")
