from django.urls import path, include
from rest_framework.routers import SimpleRouter
from apps.projects.mixins import UUID_REGEX
from . import views

app_name = 'documents'

router = SimpleRouter()
router.register(
    f'projects/(?P<project_id>{UUID_REGEX})/documents',
    views.DocumentViewSet,
    basename='document'
)

urlpatterns = [
    # GET    /api/projects/{project_id}/documents/                 - List documents
    # POST   /api/projects/{project_id}/documents/                 - Upload document (multipart)
    # GET    /api/projects/{project_id}/documents/{id}/            - Document details
    # POST   /api/projects/{project_id}/documents/{id}/versions/   - Upload new version
    # DELETE /api/projects/{project_id}/documents/{id}/            - Delete document (manager)
    path('', include(router.urls)),
]
