import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.orders.models import OrderStatus
from apps.orders.services import create_order


@pytest.fixture
def order(project, engineer):
    return create_order(
        project_id=project.id,
        requested_by=engineer,
        items=[{'name': 'Sand', 'quantity': Decimal('50'), 'unit': 'cubic meters'}],
    )


@pytest.mark.django_db
class TestOrderEndpoints:
    """Tests for /api/projects/{project_id}/orders/"""

    def test_create(self, engineer_client, project):
        response = engineer_client.post(reverse('orders:order-list', args=[project.id]), {
            'items': [
                {'name': 'Cement (OPC)', 'quantity': '200', 'unit': 'bags'},
                {'name': 'Sand', 'quantity': '0', 'unit': 'cubic meters'},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == OrderStatus.PENDING
        assert len(response.data['items']) == 1

    def test_create_all_lines_dropped(self, engineer_client, project):
        response = engineer_client.post(reverse('orders:order-list', args=[project.id]), {
            'items': [{'name': 'Sand', 'quantity': '-1', 'unit': 'cubic meters'}],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_list_filtered(self, engineer_client, project, order):
        url = reverse('orders:order-list', args=[project.id])

        assert len(engineer_client.get(url, {'status': 'pending'}).data) == 1
        assert len(engineer_client.get(url, {'status': 'sent'}).data) == 0

    def test_approve_as_manager(self, pm_client, project, order):
        response = pm_client.post(reverse('orders:order-approve', args=[project.id, order.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == OrderStatus.APPROVED
        assert response.data['approved_by']['display_name'] == 'Sanjay Sharma'

    def test_approve_as_member(self, engineer_client, project, order):
        response = engineer_client.post(reverse('orders:order-approve', args=[project.id, order.id]))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert 'error' in response.data
        assert 'detail' not in response.data

    def test_invalid_transition(self, pm_client, project, order):
        response = pm_client.post(
            reverse('orders:order-status', args=[project.id, order.id]),
            {'status': 'received'},
            format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_unknown_order(self, pm_client, project):
        import uuid
        response = pm_client.get(reverse('orders:order-detail', args=[project.id, uuid.uuid4()]))
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'].startswith('Order with ID')

    def test_attach_invoice(self, engineer_client, project, order):
        response = engineer_client.post(
            reverse('orders:order-invoice', args=[project.id, order.id]),
            {'invoice_url': 'https://files.example.com/bill.pdf'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['invoice_url'] == 'https://files.example.com/bill.pdf'
