import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestHealthCheck:
    """Tests for GET /api/health/"""

    def test_plain_http_request_is_answered(self, client):
        response = client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok', 'database': 'up'}

