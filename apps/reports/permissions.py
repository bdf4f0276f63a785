"""
Permission classes for reports app.

Permission Classes:
    IsProjectMemberForReports - Requires membership of the reported project
"""

from rest_framework.permissions import BasePermission
from apps.projects.models import Project


class IsProjectMemberForReports(BasePermission):
    """
    Permission check for project report access.

    Access is allowed if the user is on the project team or is a super
    admin. A project that doesn't exist is left to the view, which
    answers 404.
    """

    message = 'You must be a member of this project to view its reports.'

    def has_permission(self, request, view):
        project_id = view.kwargs.get('project_id')
        if not project_id:
            return True

        try:
            project = Project.objects.get(id=project_id)
        except Project.DoesNotExist:
            return True
        return project.can_view(request.user)
