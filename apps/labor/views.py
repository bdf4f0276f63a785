from rest_framework import viewsets, status
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.projects.mixins import ProjectScopedMixin
from .serializers import (
    AttendanceRecordSerializer,
    UpdateAttendanceSerializer,
    AttendanceFilterSerializer,
)
from . import services
from .exceptions import InvalidAttendanceStatusError, MemberNotOnTeamError


class AttendanceViewSet(ProjectScopedMixin, viewsets.ViewSet):
    """
    Daily attendance of a project's team.

    list: Attendance records (?date=YYYY-MM-DD, ?member=)
    create: Record attendance; an existing entry for the same day is replaced
    """

    @extend_schema(
        parameters=[
            OpenApiParameter('date', str, description='YYYY-MM-DD'),
            OpenApiParameter('member', str, description='User UUID'),
        ],
        responses={200: AttendanceRecordSerializer(many=True)},
    )
    def list(self, request, project_id=None):
        filters = AttendanceFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        records = services.get_attendance(
            project_id=self.get_project().id,
            date=filters.validated_data.get('date'),
            member_id=filters.validated_data.get('member'),
        )
        return Response(AttendanceRecordSerializer(records, many=True).data)

    @extend_schema(request=UpdateAttendanceSerializer, responses={200: AttendanceRecordSerializer})
    def create(self, request, project_id=None):
        serializer = UpdateAttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            record = services.update_attendance(
                project_id=self.get_project().id,
                recorded_by=request.user,
                **serializer.validated_data
            )
        except MemberNotOnTeamError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InvalidAttendanceStatusError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AttendanceRecordSerializer(record).data)
