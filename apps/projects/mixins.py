from rest_framework.generics import get_object_or_404
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from .models import Project
from .permissions import IsProjectMember
from .services import InsufficientPermissionsError, ProjectNotFoundError

UUID_REGEX = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'


class ProjectScopedMixin:
    """
    Base for views nested under ``/api/projects/<project_id>/``.

    Resolves the project once per request and maps the projects domain
    errors to HTTP responses.
    """

    permission_classes = [IsAuthenticated, IsProjectMember]
    lookup_value_regex = UUID_REGEX

    def get_project(self):
        if not hasattr(self, '_project'):
            self._project = get_object_or_404(Project, id=self.kwargs['project_id'])
        return self._project

    def handle_exception(self, exc):
        if isinstance(exc, ProjectNotFoundError):
            return Response({'error': str(exc)}, status=status.HTTP_404_NOT_FOUND)
        if isinstance(exc, InsufficientPermissionsError):
            return Response({'error': str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return super().handle_exception(exc)
