from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'projects'

router = DefaultRouter()
router.register(r'projects', views.ProjectViewSet, basename='project')

urlpatterns = [
    # GET    /api/projects/                          - List projects (?status=active|archived|completed|all)
    # POST   /api/projects/                          - Create project
    # GET    /api/projects/{id}/                     - Project details
    # PATCH  /api/projects/{id}/                     - Update project
    # DELETE /api/projects/{id}/                     - Delete project
    # POST   /api/projects/{id}/archive/             - Archive project
    # GET    /api/projects/{id}/team/                - Team members
    # POST   /api/projects/{id}/team/                - Add team member
    # PATCH  /api/projects/{id}/team/{user_id}/      - Update team member
    # DELETE /api/projects/{id}/team/{user_id}/      - Remove team member
    # GET    /api/projects/{id}/activity/            - Activity log
    path('dashboard/', views.dashboard, name='dashboard'),
    path('', include(router.urls)),
]
