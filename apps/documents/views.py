from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.projects.mixins import ProjectScopedMixin
from .models import DocumentType
from .serializers import (
    DocumentSerializer,
    DocumentUploadSerializer,
    DocumentVersionSerializer,
    DocumentFilterSerializer,
)
from . import services
from .exceptions import DocumentNotFoundError, InvalidDocumentError


class DocumentViewSet(ProjectScopedMixin, viewsets.ViewSet):
    """
    Documents of one project. Uploads are multipart.

    list: Documents (?doc_type=)
    create: Upload a document
    retrieve: Get a document
    new_version: Upload a new version of a document
    destroy: Delete a document (manager only)
    """

    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        parameters=[OpenApiParameter('doc_type', str, enum=DocumentType.values)],
        responses={200: DocumentSerializer(many=True)},
    )
    def list(self, request, project_id=None):
        filters = DocumentFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        documents = services.get_project_documents(
            project_id=self.get_project().id,
            doc_type=filters.validated_data.get('doc_type'),
        )
        serializer = DocumentSerializer(documents, many=True, context={'request': request})
        return Response(serializer.data)

    @extend_schema(request=DocumentUploadSerializer, responses={201: DocumentSerializer})
    def create(self, request, project_id=None):
        serializer = DocumentUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            document = services.add_document(
                project_id=self.get_project().id,
                uploaded_by=request.user,
                **serializer.validated_data
            )
        except InvalidDocumentError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            DocumentSerializer(document, context={'request': request}).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: DocumentSerializer})
    def retrieve(self, request, project_id=None, pk=None):
        try:
            document = services.get_document(project_id=self.get_project().id, document_id=pk)
        except DocumentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(DocumentSerializer(document, context={'request': request}).data)

    @extend_schema(request=DocumentVersionSerializer, responses={200: DocumentSerializer})
    @action(detail=True, methods=['post'], url_path='versions', url_name='versions')
    def new_version(self, request, project_id=None, pk=None):
        """Upload a new version; the version number goes up by one."""
        serializer = DocumentVersionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            document = services.update_document_version(
                project_id=self.get_project().id,
                document_id=pk,
                uploaded_by=request.user,
                file=serializer.validated_data['file'],
            )
        except DocumentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidDocumentError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(DocumentSerializer(document, context={'request': request}).data)

    def destroy(self, request, project_id=None, pk=None):
        try:
            services.delete_document(
                project_id=self.get_project().id,
                document_id=pk,
                user=request.user
            )
        except DocumentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
