from django.urls import path, include
from rest_framework.routers import SimpleRouter
from apps.projects.mixins import UUID_REGEX
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(
    f'projects/(?P<project_id>{UUID_REGEX})/orders',
    views.OrderViewSet,
    basename='order'
)

urlpatterns = [
    # GET    /api/projects/{project_id}/orders/                 - List orders (?status=)
    # POST   /api/projects/{project_id}/orders/                 - Create order
    # GET    /api/projects/{project_id}/orders/{id}/            - Order details
    # POST   /api/projects/{project_id}/orders/{id}/approve/    - Approve (manager)
    # POST   /api/projects/{project_id}/orders/{id}/status/     - Change status
    # POST   /api/projects/{project_id}/orders/{id}/invoice/    - Attach supplier invoice
    path('', include(router.urls)),
]
