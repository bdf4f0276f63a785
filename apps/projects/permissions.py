"""
Permission classes for project-scoped resources.

Nested views (``/api/projects/<project_id>/...``) resolve their project
through ``ProjectScopedMixin.get_project``; a missing project is a 404
before any membership check runs.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

from .models import Project


def _project_for(view, obj=None):
    if obj is not None:
        return obj if isinstance(obj, Project) else obj.project
    if hasattr(view, 'get_project') and 'project_id' in view.kwargs:
        return view.get_project()
    return None


class IsProjectMember(BasePermission):
    """
    User must be on the project team (super admins always pass).

    Usage:
        class TaskViewSet(ProjectScopedMixin, viewsets.ModelViewSet):
            permission_classes = [IsAuthenticated, IsProjectMember]
    """

    message = 'You must be a member of this project.'

    def has_permission(self, request, view):
        project = _project_for(view)
        if project is None:
            return True
        return project.can_view(request.user)

    def has_object_permission(self, request, view, obj):
        return _project_for(view, obj).can_view(request.user)


class IsProjectManager(BasePermission):
    """User must manage the project: a Project Manager on its team, or a super admin."""

    message = 'Only the project manager can perform this action.'

    def has_permission(self, request, view):
        project = _project_for(view)
        if project is None:
            return True
        return project.is_manager(request.user)

    def has_object_permission(self, request, view, obj):
        return _project_for(view, obj).is_manager(request.user)


class IsProjectManagerOrReadOnly(IsProjectManager):
    """Members read, managers write."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return super().has_object_permission(request, view, obj)
