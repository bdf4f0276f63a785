"""
Reports Module
==============

Read-only aggregations over one project's records for a closed date
interval, used by the financial and labor report endpoints.

Classes:
    ReportQueries: Static methods building the report payloads.

Example:
    Financial report for January::

        from apps.reports.reports import ReportQueries

        report = ReportQueries.financial_report(
            project_id=project.id,
            start_date=date(2025, 1, 1),
            end_date=date(2025, 1, 31),
        )
        print(report['net_profit'])

Note:
    Both bounds are inclusive. Every method returns plain dictionaries
    and lists, ready for JSON serialization.
"""

import logging
from collections import Counter
from decimal import Decimal

from apps.financials.models import ClientInvoice, Expense, ExpenseCategory, InvoiceStatus
from apps.labor.models import AttendanceRecord, AttendanceStatus
from apps.projects.models import ProjectTeamMember

from .exceptions import InvalidDateRangeError

logger = logging.getLogger('apps.reports')


def _check_range(start_date, end_date):
    if start_date > end_date:
        raise InvalidDateRangeError("Start date must be on or before end date")


class ReportQueries:
    """
    Report aggregations for a single project.

    Methods:
        financial_report: Revenue, expenses and net profit with a
            per-category expense breakdown.
        labor_report: Per-member attendance counts and wages.
    """

    @staticmethod
    def financial_report(project_id, start_date, end_date):
        """
        Revenue against expenses for a period.

        Revenue is the sum of Paid client invoices issued in the period.
        Expenses are every expense dated in the period, whatever its
        category.

        Args:
            project_id (UUID): The project's unique identifier.
            start_date (date): First day of the period.
            end_date (date): Last day of the period, inclusive.

        Returns:
            dict: A dictionary containing:
                - start_date, end_date (date): The period.
                - total_revenue (Decimal): Sum of paid invoices.
                - total_expenses (Decimal): Sum of expenses.
                - net_profit (Decimal): total_revenue - total_expenses.
                - expense_breakdown (list[dict]): category, label and amount
                  for each category with a non-zero total, in category order.
                - revenue_items (list[dict]): The paid invoices counted.
                - expense_items (list[dict]): The expenses counted.

        Raises:
            InvalidDateRangeError: If start_date is after end_date.
        """
        _check_range(start_date, end_date)

        invoices = ClientInvoice.objects.filter(
            project_id=project_id,
            status=InvoiceStatus.PAID,
            issue_date__gte=start_date,
            issue_date__lte=end_date,
        ).order_by('issue_date', 'invoice_number')

        expenses = Expense.objects.filter(
            project_id=project_id,
            date__gte=start_date,
            date__lte=end_date,
        ).order_by('date', 'created_at')

        revenue_items = [
            {
                'id': invoice.id,
                'invoice_number': invoice.invoice_number,
                'title': invoice.title,
                'issue_date': invoice.issue_date,
                'amount': invoice.amount,
            }
            for invoice in invoices
        ]

        by_category = {category: Decimal('0.00') for category in ExpenseCategory.values}
        expense_items = []
        for expense in expenses:
            by_category[expense.category] = by_category.get(expense.category, Decimal('0.00')) + expense.amount
            expense_items.append({
                'id': expense.id,
                'description': expense.description,
                'category': expense.category,
                'date': expense.date,
                'amount': expense.amount,
            })

        total_revenue = sum((item['amount'] for item in revenue_items), Decimal('0.00'))
        total_expenses = sum((item['amount'] for item in expense_items), Decimal('0.00'))

        breakdown = [
            {
                'category': category.value,
                'label': category.label,
                'amount': by_category[category.value],
            }
            for category in ExpenseCategory
            if by_category[category.value] != 0
        ]

        logger.debug(
            f"Financial report for {project_id} {start_date}..{end_date}: "
            f"revenue {total_revenue}, expenses {total_expenses}"
        )

        return {
            'start_date': start_date,
            'end_date': end_date,
            'total_revenue': total_revenue,
            'total_expenses': total_expenses,
            'net_profit': total_revenue - total_expenses,
            'expense_breakdown': breakdown,
            'revenue_items': revenue_items,
            'expense_items': expense_items,
        }

    @staticmethod
    def labor_report(project_id, start_date, end_date):
        """
        Attendance and wages per team member for a period.

        Wages are ``present * daily_wage + half_day * daily_wage / 2``.
        Every current team member is listed, with zero counts if they
        have no attendance in the period.

        Args:
            project_id (UUID): The project's unique identifier.
            start_date (date): First day of the period.
            end_date (date): Last day of the period, inclusive.

        Returns:
            dict: A dictionary containing:
                - start_date, end_date (date): The period.
                - members (list[dict]): user_id, display_name, project_role,
                  daily_wage, present, absent, half_day and wages.
                - totals (dict): present, absent, half_day and wages summed
                  across members.

        Raises:
            InvalidDateRangeError: If start_date is after end_date.
        """
        _check_range(start_date, end_date)

        counts = Counter(
            AttendanceRecord.objects.filter(
                project_id=project_id,
                date__gte=start_date,
                date__lte=end_date,
            ).values_list('member_id', 'status')
        )

        team = (
            ProjectTeamMember.objects
            .filter(project_id=project_id)
            .select_related('user')
            .order_by('joined_at')
        )

        members = []
        totals = {
            'present': 0,
            'absent': 0,
            'half_day': 0,
            'wages': Decimal('0.00'),
        }

        for membership in team:
            user_id = membership.user_id
            present = counts[(user_id, AttendanceStatus.PRESENT.value)]
            absent = counts[(user_id, AttendanceStatus.ABSENT.value)]
            half_day = counts[(user_id, AttendanceStatus.HALF_DAY.value)]
            wage = membership.daily_wage
            wages = (present * wage + half_day * wage / 2).quantize(Decimal('0.01'))

            members.append({
                'user_id': user_id,
                'display_name': membership.user.get_display_name(),
                'project_role': membership.project_role,
                'daily_wage': wage,
                'present': present,
                'absent': absent,
                'half_day': half_day,
                'wages': wages,
            })

            totals['present'] += present
            totals['absent'] += absent
            totals['half_day'] += half_day
            totals['wages'] += wages

        logger.debug(
            f"Labor report for {project_id} {start_date}..{end_date}: "
            f"{len(members)} members, wages {totals['wages']}"
        )

        return {
            'start_date': start_date,
            'end_date': end_date,
            'members': members,
            'totals': totals,
        }
