from django.urls import path, include, re_path
from rest_framework.routers import SimpleRouter
from apps.projects.mixins import UUID_REGEX
from . import views

app_name = 'financials'

router = SimpleRouter()
router.register(
    f'projects/(?P<project_id>{UUID_REGEX})/expenses',
    views.ExpenseViewSet,
    basename='expense'
)
router.register(
    f'projects/(?P<project_id>{UUID_REGEX})/invoices',
    views.ClientInvoiceViewSet,
    basename='invoice'
)

urlpatterns = [
    # GET    /api/projects/{project_id}/expenses/            - List expenses
    # POST   /api/projects/{project_id}/expenses/            - Log expense
    # GET    /api/projects/{project_id}/expenses/{id}/       - Expense details
    # PATCH  /api/projects/{project_id}/expenses/{id}/       - Edit expense
    # DELETE /api/projects/{project_id}/expenses/{id}/       - Delete expense (manager)
    # GET    /api/projects/{project_id}/invoices/            - List client invoices
    # POST   /api/projects/{project_id}/invoices/            - Issue invoice
    # GET    /api/projects/{project_id}/invoices/{id}/       - Invoice details
    # PATCH  /api/projects/{project_id}/invoices/{id}/       - Edit invoice
    # DELETE /api/projects/{project_id}/invoices/{id}/       - Delete invoice (manager)
    # GET    /api/projects/{project_id}/financials/summary/  - Financial summary
    re_path(
        rf'^projects/(?P<project_id>{UUID_REGEX})/financials/summary/$',
        views.FinancialSummaryView.as_view(),
        name='financial-summary'
    ),
    path('', include(router.urls)),
]
