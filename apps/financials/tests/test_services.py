import pytest
import uuid
from datetime import date
from decimal import Decimal
from apps.financials.models import ExpenseCategory, InvoiceStatus
from apps.financials.services import (
    create_expense,
    update_expense,
    delete_expense,
    get_project_expenses,
    create_client_invoice,
    update_client_invoice,
    delete_client_invoice,
    get_financial_summary,
    ExpenseNotFoundError,
    InvoiceNotFoundError,
    InvalidExpenseError,
    InvalidInvoiceError,
)
from apps.projects.models import ActivityAction
from apps.projects.services import InsufficientPermissionsError, ProjectNotFoundError


def _invoice(project, user, title='Mobilization Advance', issue=date(2024, 5, 1), lines=None):
    return create_client_invoice(
        project_id=project.id,
        created_by=user,
        title=title,
        issue_date=issue,
        due_date=date(issue.year, issue.month, 28),
        line_items=lines if lines is not None else [
            {'description': 'Excavation', 'quantity': Decimal('10'), 'unit_price': Decimal('500')},
            {'description': 'Backfill', 'quantity': Decimal('20'), 'unit_price': Decimal('50.25')},
        ],
    )


# =============================================================================
# Expenses
# =============================================================================

@pytest.mark.django_db
class TestExpenses:

    def test_create_increases_actual_cost(self, project, engineer):
        create_expense(
            project_id=project.id,
            submitted_by=engineer,
            description='Fuel for excavator',
            amount=Decimal('12000.00'),
            category=ExpenseCategory.FUEL,
            date=date(2025, 1, 10),
        )

        project.refresh_from_db()
        assert project.actual_cost == Decimal('12000.00')

    def test_create_is_logged_with_currency_token(self, project, engineer):
        create_expense(
            project_id=project.id,
            submitted_by=engineer,
            description='Purchase of safety helmets',
            amount=Decimal('8000.00'),
            category=ExpenseCategory.MATERIAL,
            date=date(2025, 1, 10),
        )

        entry = project.activity_logs.get(action=ActivityAction.EXPENSE_LOGGED)
        assert entry.details == 'Logged an expense of CURRENCY[8000.00] for Purchase of safety helmets.'

    @pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-10')])
    def test_non_positive_amount(self, project, engineer, amount):
        with pytest.raises(InvalidExpenseError):
            create_expense(
                project_id=project.id,
                submitted_by=engineer,
                description='Nothing',
                amount=amount,
                category=ExpenseCategory.MISCELLANEOUS,
                date=date(2025, 1, 10),
            )

    def test_unknown_category(self, project, engineer):
        with pytest.raises(InvalidExpenseError):
            create_expense(
                project_id=project.id,
                submitted_by=engineer,
                description='Snacks',
                amount=Decimal('10'),
                category='catering',
                date=date(2025, 1, 10),
            )

    def test_missing_project(self, engineer):
        with pytest.raises(ProjectNotFoundError):
            create_expense(
                project_id=uuid.uuid4(),
                submitted_by=engineer,
                description='X',
                amount=Decimal('10'),
                category=ExpenseCategory.LABOR,
                date=date(2025, 1, 10),
            )

    def test_update_and_delete_recompute(self, project, pm, engineer):
        labor = create_expense(
            project_id=project.id,
            submitted_by=engineer,
            description='Labor payment for week 4',
            amount=Decimal('150000.00'),
            category=ExpenseCategory.LABOR,
            date=date(2025, 1, 28),
        )
        create_expense(
            project_id=project.id,
            submitted_by=engineer,
            description='Fuel for excavator',
            amount=Decimal('12000.00'),
            category=ExpenseCategory.FUEL,
            date=date(2025, 1, 10),
        )

        update_expense(project_id=project.id, expense_id=labor.id, amount=Decimal('140000.00'))
        project.refresh_from_db()
        assert project.actual_cost == Decimal('152000.00')

        delete_expense(project_id=project.id, expense_id=labor.id, user=pm)
        project.refresh_from_db()
        assert project.actual_cost == Decimal('12000.00')

    def test_member_cannot_delete(self, project, engineer):
        expense = create_expense(
            project_id=project.id,
            submitted_by=engineer,
            description='Fuel',
            amount=Decimal('100'),
            category=ExpenseCategory.FUEL,
            date=date(2025, 1, 10),
        )
        with pytest.raises(InsufficientPermissionsError):
            delete_expense(project_id=project.id, expense_id=expense.id, user=engineer)

    def test_delete_missing(self, project, pm):
        with pytest.raises(ExpenseNotFoundError):
            delete_expense(project_id=project.id, expense_id=uuid.uuid4(), user=pm)

    def test_filter_by_category(self, project, engineer):
        for category in (ExpenseCategory.FUEL, ExpenseCategory.LABOR):
            create_expense(
                project_id=project.id,
                submitted_by=engineer,
                description=category.label,
                amount=Decimal('100'),
                category=category,
                date=date(2025, 1, 10),
            )

        expenses = get_project_expenses(project_id=project.id, category=ExpenseCategory.FUEL)
        assert [e.description for e in expenses] == ['Fuel']


# =============================================================================
# Client invoices
# =============================================================================

@pytest.mark.django_db
class TestClientInvoices:

    def test_number_status_and_amount(self, project, pm):
        invoice = _invoice(project, pm)

        assert invoice.invoice_number == 'INV-2024-001'
        assert invoice.status == InvoiceStatus.DRAFT
        # 10 * 500 + 20 * 50.25
        assert invoice.amount == Decimal('6005.00')

    def test_numbers_count_up(self, project, pm):
        _invoice(project, pm)
        second = _invoice(project, pm, title='First Running Bill')

        assert second.invoice_number == 'INV-2024-002'

    def test_number_uses_issue_year(self, project, pm):
        invoice = _invoice(project, pm, issue=date(2025, 2, 1))
        assert invoice.invoice_number == 'INV-2025-001'

    def test_due_before_issue(self, project, pm):
        with pytest.raises(InvalidInvoiceError):
            create_client_invoice(
                project_id=project.id,
                created_by=pm,
                title='Backwards',
                issue_date=date(2025, 2, 1),
                due_date=date(2025, 1, 1),
            )

    def test_draft_is_not_revenue(self, project, pm):
        _invoice(project, pm)
        project.refresh_from_db()
        assert project.revenue == Decimal('0.00')

    def test_paid_becomes_revenue(self, project, pm):
        invoice = _invoice(project, pm)

        update_client_invoice(project_id=project.id, invoice_id=invoice.id, status=InvoiceStatus.PAID)

        project.refresh_from_db()
        assert project.revenue == Decimal('6005.00')

    def test_replacing_lines_recomputes_amount_and_revenue(self, project, pm):
        invoice = _invoice(project, pm)
        update_client_invoice(project_id=project.id, invoice_id=invoice.id, status=InvoiceStatus.PAID)

        invoice = update_client_invoice(
            project_id=project.id,
            invoice_id=invoice.id,
            line_items=[{'description': 'Lump sum', 'quantity': Decimal('1'), 'unit_price': Decimal('1000')}],
        )

        assert invoice.amount == Decimal('1000.00')
        assert invoice.line_items.count() == 1
        project.refresh_from_db()
        assert project.revenue == Decimal('1000.00')

    def test_delete_paid_invoice_reduces_revenue(self, project, pm):
        invoice = _invoice(project, pm)
        update_client_invoice(project_id=project.id, invoice_id=invoice.id, status=InvoiceStatus.PAID)

        delete_client_invoice(project_id=project.id, invoice_id=invoice.id, user=pm)

        project.refresh_from_db()
        assert project.revenue == Decimal('0.00')

    def test_update_missing(self, project):
        with pytest.raises(InvoiceNotFoundError):
            update_client_invoice(project_id=project.id, invoice_id=uuid.uuid4(), title='X')


# =============================================================================
# Summary
# =============================================================================

@pytest.mark.django_db
class TestFinancialSummary:

    def test_summary(self, project, pm, engineer):
        create_expense(
            project_id=project.id,
            submitted_by=engineer,
            description='Labor',
            amount=Decimal('250000.00'),
            category=ExpenseCategory.LABOR,
            date=date(2025, 1, 10),
        )
        paid = _invoice(project, pm)
        update_client_invoice(project_id=project.id, invoice_id=paid.id, status=InvoiceStatus.PAID)
        sent = _invoice(project, pm, title='Second Running Bill')
        update_client_invoice(project_id=project.id, invoice_id=sent.id, status=InvoiceStatus.SENT)

        summary = get_financial_summary(project_id=project.id)

        assert summary['actual_cost'] == Decimal('250000.00')
        assert summary['remaining_budget'] == Decimal('750000.00')
        assert summary['budget_utilization'] == Decimal('25.00')
        assert summary['revenue'] == Decimal('6005.00')
        assert summary['outstanding_receivables'] == Decimal('6005.00')
        assert summary['net_profit'] == Decimal('6005.00') - Decimal('250000.00')
