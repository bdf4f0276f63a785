from django.urls import path, include
from rest_framework.routers import SimpleRouter
from apps.projects.mixins import UUID_REGEX
from . import views

app_name = 'tasks'

router = SimpleRouter()
router.register(f'projects/(?P<project_id>{UUID_REGEX})/tasks', views.TaskViewSet, basename='task')

urlpatterns = [
    # GET    /api/projects/{project_id}/tasks/         - List tasks
    # POST   /api/projects/{project_id}/tasks/         - Create task
    # GET    /api/projects/{project_id}/tasks/{id}/    - Task details
    # PATCH  /api/projects/{project_id}/tasks/{id}/    - Update task
    # DELETE /api/projects/{project_id}/tasks/{id}/    - Delete task (manager)
    path('tasks/my/', views.my_tasks, name='my-tasks'),
    path('', include(router.urls)),
]
