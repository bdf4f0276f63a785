from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.projects.models import Project
from .reports import ReportQueries
from .serializers import (
    ReportPeriodQuerySerializer,
    FinancialReportSerializer,
    LaborReportSerializer,
)
from .permissions import IsProjectMemberForReports
from .exceptions import InvalidDateRangeError

PERIOD_PARAMETERS = [
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date, inclusive (YYYY-MM-DD)'),
]


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: FinancialReportSerializer},
    description="Revenue, expenses and net profit of a project for a period.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsProjectMemberForReports])
def financial_report(request, project_id):
    """Financial report - thin HTTP handler."""
    project = get_object_or_404(Project, id=project_id)

    query_serializer = ReportPeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = ReportQueries.financial_report(
            project_id=project.id,
            start_date=params['start_date'],
            end_date=params['end_date'],
        )
    except InvalidDateRangeError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(FinancialReportSerializer(data).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: LaborReportSerializer},
    description="Attendance counts and wages per team member for a period.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsProjectMemberForReports])
def labor_report(request, project_id):
    """Labor report - thin HTTP handler."""
    project = get_object_or_404(Project, id=project_id)

    query_serializer = ReportPeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = ReportQueries.labor_report(
            project_id=project.id,
            start_date=params['start_date'],
            end_date=params['end_date'],
        )
    except InvalidDateRangeError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(LaborReportSerializer(data).data)
