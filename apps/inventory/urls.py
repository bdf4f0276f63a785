from django.urls import path, include
from rest_framework.routers import SimpleRouter
from apps.projects.mixins import UUID_REGEX
from . import views

app_name = 'inventory'

router = SimpleRouter()
router.register(
    f'projects/(?P<project_id>{UUID_REGEX})/inventory',
    views.InventoryItemViewSet,
    basename='item'
)

urlpatterns = [
    # GET    /api/projects/{project_id}/inventory/               - List items (?low_stock=true)
    # POST   /api/projects/{project_id}/inventory/               - Add item
    # GET    /api/projects/{project_id}/inventory/{id}/          - Item details
    # PATCH  /api/projects/{project_id}/inventory/{id}/          - Update item
    # DELETE /api/projects/{project_id}/inventory/{id}/          - Remove item (manager)
    # GET    /api/projects/{project_id}/inventory/consumption/   - Consumption history
    # POST   /api/projects/{project_id}/inventory/consumption/   - Log consumption
    path('', include(router.urls)),
]
