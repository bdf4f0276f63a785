from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('projects/<uuid:project_id>/reports/financial/', views.financial_report, name='financial-report'),
    path('projects/<uuid:project_id>/reports/labor/', views.labor_report, name='labor-report'),
]
