from django.urls import path, include
from rest_framework.routers import SimpleRouter
from apps.projects.mixins import UUID_REGEX
from . import views

app_name = 'labor'

router = SimpleRouter()
router.register(
    f'projects/(?P<project_id>{UUID_REGEX})/attendance',
    views.AttendanceViewSet,
    basename='attendance'
)

urlpatterns = [
    # GET    /api/projects/{project_id}/attendance/   - Attendance (?date=, ?member=)
    # POST   /api/projects/{project_id}/attendance/   - Record attendance (upsert)
    path('', include(router.urls)),
]
