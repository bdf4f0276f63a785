from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    ProjectSerializer,
    ProjectListSerializer,
    ProjectCreateSerializer,
    ProjectUpdateSerializer,
    ProjectFilterSerializer,
    TeamMemberSerializer,
    AddTeamMemberSerializer,
    UpdateTeamMemberSerializer,
    ActivityLogSerializer,
    ActivityQuerySerializer,
    DashboardSummarySerializer,
)
from .mixins import UUID_REGEX
from .permissions import IsProjectMember

from apps.projects.services import (
    list_projects,
    create_project,
    update_project,
    archive_project,
    delete_project,
    get_team_members,
    add_team_member,
    update_team_member,
    remove_team_member,
    get_project_activity,
    get_dashboard_summary,
    # Exceptions
    ProjectNotFoundError,
    InsufficientPermissionsError,
    InvalidProjectDataError,
    UserNotFoundError,
    AlreadyTeamMemberError,
    NotTeamMemberError,
)


class ProjectPagination(PageNumberPagination):
    """Custom pagination for projects."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ProjectViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Project CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Projects the user is on (Active unless ?status= is given)
    create: Create a project (project managers only)
    retrieve: Get a project
    partial_update: Update a project (manager only)
    destroy: Delete a project (manager only)
    """

    serializer_class = ProjectSerializer
    permission_classes = [IsAuthenticated, IsProjectMember]
    pagination_class = ProjectPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = UUID_REGEX

    def get_queryset(self):
        """List honours ?status=; every other action sees all visible projects."""
        if self.action == 'list':
            filter_serializer = ProjectFilterSerializer(data=self.request.query_params)
            filter_serializer.is_valid(raise_exception=True)
            project_status = filter_serializer.validated_data['status']
            return list_projects(
                user=self.request.user,
                status=None if project_status == 'all' else project_status
            )
        return list_projects(user=self.request.user, status=None)

    def get_serializer_class(self):
        if self.action == 'list':
            return ProjectListSerializer
        elif self.action == 'create':
            return ProjectCreateSerializer
        elif self.action == 'partial_update':
            return ProjectUpdateSerializer
        return ProjectSerializer

    @extend_schema(request=ProjectCreateSerializer, responses={201: ProjectSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new project."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            project = create_project(
                created_by=request.user,
                **serializer.validated_data
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidProjectDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = ProjectSerializer(project, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProjectUpdateSerializer, responses={200: ProjectSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Update project details."""
        project = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            project = update_project(
                project_id=project.id,
                user=request.user,
                **serializer.validated_data
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidProjectDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProjectSerializer(project, context={'request': request}).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a project."""
        project = self.get_object()
        try:
            delete_project(project_id=project.id, user=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: ProjectSerializer})
    @action(detail=True, methods=['post'])
    def archive(self, request, pk=None):
        """Archive the project (manager only)."""
        project = self.get_object()
        try:
            project = archive_project(project_id=project.id, user=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(ProjectSerializer(project, context={'request': request}).data)

    @extend_schema(
        methods=['GET'],
        responses={200: TeamMemberSerializer(many=True)},
    )
    @extend_schema(
        methods=['POST'],
        request=AddTeamMemberSerializer,
        responses={201: TeamMemberSerializer},
    )
    @action(detail=True, methods=['get', 'post'])
    def team(self, request, pk=None):
        """List team members, or add one (manager only)."""
        project = self.get_object()

        if request.method == 'GET':
            members = get_team_members(project_id=project.id)
            return Response(TeamMemberSerializer(members, many=True).data)

        serializer = AddTeamMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            member = add_team_member(
                project_id=project.id,
                added_by=request.user,
                **serializer.validated_data
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AlreadyTeamMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TeamMemberSerializer(member).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        methods=['PATCH'],
        request=UpdateTeamMemberSerializer,
        responses={200: TeamMemberSerializer},
    )
    @action(
        detail=True,
        methods=['patch', 'delete'],
        url_path=f'team/(?P<user_id>{UUID_REGEX})',
        url_name='team-member',
    )
    def team_member(self, request, pk=None, user_id=None):
        """Change a member's role and wage, or remove them (manager only)."""
        project = self.get_object()

        try:
            if request.method == 'DELETE':
                remove_team_member(
                    project_id=project.id,
                    user_id=user_id,
                    removed_by=request.user
                )
                return Response(status=status.HTTP_204_NO_CONTENT)

            serializer = UpdateTeamMemberSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            member = update_team_member(
                project_id=project.id,
                user_id=user_id,
                updated_by=request.user,
                **serializer.validated_data
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except NotTeamMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(TeamMemberSerializer(member).data)

    @extend_schema(
        parameters=[OpenApiParameter('limit', int, description='Max entries (default 50)')],
        responses={200: ActivityLogSerializer(many=True)},
    )
    @action(detail=True, methods=['get'])
    def activity(self, request, pk=None):
        """Latest activity on the project, newest first."""
        project = self.get_object()
        query = ActivityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            entries = get_project_activity(
                project_id=project.id,
                limit=query.validated_data['limit']
            )
        except ProjectNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        serializer = ActivityLogSerializer(entries, many=True, context={'request': request})
        return Response(serializer.data)


@extend_schema(
    responses={200: DashboardSummarySerializer},
    description="Portfolio summary over the active projects the user can see.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Dashboard summary numbers."""
    summary = get_dashboard_summary(user=request.user)
    return Response(DashboardSummarySerializer(summary).data)
