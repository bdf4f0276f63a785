import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.inventory.services import create_inventory_item


@pytest.fixture
def diesel(project):
    return create_inventory_item(
        project_id=project.id,
        name='Diesel',
        unit='liters',
        quantity=Decimal('800'),
        threshold=Decimal('200'),
    )


@pytest.mark.django_db
class TestInventoryEndpoints:
    """Tests for /api/projects/{project_id}/inventory/"""

    def test_list(self, engineer_client, project, diesel):
        response = engineer_client.get(reverse('inventory:item-list', args=[project.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['name'] == 'Diesel'
        assert response.data[0]['is_low_stock'] is False

    def test_low_stock_only(self, engineer_client, project, diesel):
        response = engineer_client.get(
            reverse('inventory:item-list', args=[project.id]),
            {'low_stock': 'true'}
        )
        assert response.data == []

    def test_create(self, engineer_client, project):
        response = engineer_client.post(
            reverse('inventory:item-list', args=[project.id]),
            {'name': 'Sand', 'unit': 'cubic meters', 'quantity': '120', 'threshold': '5'},
            format='json'
        )
        assert response.status_code == status.HTTP_201_CREATED

    def test_create_duplicate(self, engineer_client, project, diesel):
        response = engineer_client.post(
            reverse('inventory:item-list', args=[project.id]),
            {'name': 'diesel', 'unit': 'liters'},
            format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_outsider_forbidden(self, outsider_client, project, diesel):
        response = outsider_client.get(reverse('inventory:item-list', args=[project.id]))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_member_cannot_delete(self, engineer_client, project, diesel):
        response = engineer_client.delete(reverse('inventory:item-detail', args=[project.id, diesel.id]))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_log_consumption(self, engineer_client, project, diesel):
        url = reverse('inventory:item-consumption', args=[project.id])
        response = engineer_client.post(url, {
            'item_id': str(diesel.id),
            'quantity': '650',
            'date': '2025-01-15',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        diesel.refresh_from_db()
        assert diesel.quantity == Decimal('150')
        assert diesel.is_low_stock

        response = engineer_client.get(url)
        assert len(response.data) == 1
        assert response.data[0]['item_name'] == 'Diesel'

    def test_log_zero_consumption(self, engineer_client, project, diesel):
        response = engineer_client.post(
            reverse('inventory:item-consumption', args=[project.id]),
            {'item_id': str(diesel.id), 'quantity': '0', 'date': '2025-01-15'},
            format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'quantity' in response.data
