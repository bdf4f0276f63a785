import pytest
from django.urls import reverse
from rest_framework import status
from apps.labor.models import AttendanceStatus


@pytest.mark.django_db
class TestAttendanceEndpoints:
    """Tests for /api/projects/{project_id}/attendance/"""

    def test_record_and_list(self, pm_client, project, engineer):
        url = reverse('labor:attendance-list', args=[project.id])

        response = pm_client.post(url, {
            'member_id': str(engineer.id),
            'date': '2025-01-06',
            'status': AttendanceStatus.PRESENT,
        }, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status_display'] == 'Present'

        response = pm_client.get(url, {'date': '2025-01-06'})
        assert len(response.data) == 1
        assert response.data[0]['member']['id'] == str(engineer.id)

    def test_outside_member(self, pm_client, project, outsider):
        response = pm_client.post(reverse('labor:attendance-list', args=[project.id]), {
            'member_id': str(outsider.id),
            'date': '2025-01-06',
            'status': AttendanceStatus.ABSENT,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_status(self, pm_client, project, engineer):
        response = pm_client.post(reverse('labor:attendance-list', args=[project.id]), {
            'member_id': str(engineer.id),
            'date': '2025-01-06',
            'status': 'sick',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'status' in response.data
