import pytest
from datetime import timedelta
from decimal import Decimal
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.financials.models import Expense, ExpenseCategory


@pytest.mark.django_db
class TestFinancialReportEndpoint:
    """Tests for GET /api/projects/{project_id}/reports/financial/"""

    def test_default_period_is_last_30_days(self, engineer_client, project, pm):
        today = timezone.localdate()
        Expense.objects.create(
            project=project,
            description='Recent',
            amount=Decimal('100.00'),
            category=ExpenseCategory.FUEL,
            date=today - timedelta(days=3),
            submitted_by=pm,
        )
        Expense.objects.create(
            project=project,
            description='Old',
            amount=Decimal('999.00'),
            category=ExpenseCategory.FUEL,
            date=today - timedelta(days=60),
            submitted_by=pm,
        )

        response = engineer_client.get(reverse('reports:financial-report', args=[project.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['end_date'] == today.isoformat()
        assert response.data['start_date'] == (today - timedelta(days=29)).isoformat()
        assert Decimal(response.data['total_expenses']) == Decimal('100.00')

    def test_default_period_spans_exactly_30_days(self, engineer_client, project, pm):
        today = timezone.localdate()
        for description, days_ago in (('First day', 29), ('Day before', 30)):
            Expense.objects.create(
                project=project,
                description=description,
                amount=Decimal('10.00'),
                category=ExpenseCategory.FUEL,
                date=today - timedelta(days=days_ago),
                submitted_by=pm,
            )

        response = engineer_client.get(reverse('reports:financial-report', args=[project.id]))

        descriptions = [item['description'] for item in response.data['expense_items']]
        assert descriptions == ['First day']

    def test_start_after_end(self, engineer_client, project):
        response = engineer_client.get(
            reverse('reports:financial-report', args=[project.id]),
            {'start_date': '2025-02-01', 'end_date': '2025-01-01'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'start_date' in response.data

    def test_outsider_forbidden(self, outsider_client, project):
        response = outsider_client.get(reverse('reports:financial-report', args=[project.id]))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_project(self, pm_client):
        import uuid
        response = pm_client.get(reverse('reports:financial-report', args=[uuid.uuid4()]))
        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestLaborReportEndpoint:
    """Tests for GET /api/projects/{project_id}/reports/labor/"""

    def test_labor_report(self, pm_client, project):
        response = pm_client.get(
            reverse('reports:labor-report', args=[project.id]),
            {'start_date': '2025-01-01', 'end_date': '2025-01-31'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['members']) == 2
        assert response.data['totals']['present'] == 0
