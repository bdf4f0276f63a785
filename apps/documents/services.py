"""
Document services.

Uploading a new version replaces the stored file, bumps the version and
records the new uploader. Every mutation is written to the activity log.
"""

import logging
import os
from typing import Optional
from uuid import UUID

from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.projects.models import ActivityAction
from apps.projects.services import (
    ensure_project_manager,
    get_project_by_id,
    record_activity,
)

from .exceptions import DocumentNotFoundError, InvalidDocumentError
from .models import Document, DocumentType

logger = logging.getLogger('apps.documents')


def _delete_file_on_commit(storage, name):
    """Remove a stored file once the surrounding transaction commits."""
    transaction.on_commit(lambda: storage.delete(name))

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.webp', '.heic'}
DRAWING_EXTENSIONS = {'.dwg', '.dxf', '.dwf'}


def guess_document_type(filename: str) -> str:
    """Document type from a file extension; anything unrecognised is a drawing."""
    extension = os.path.splitext(filename)[1].lower()
    if extension == '.pdf':
        return DocumentType.PDF
    if extension in IMAGE_EXTENSIONS:
        return DocumentType.IMAGE
    return DocumentType.DRAWING


def get_project_documents(*, project_id: UUID, doc_type: Optional[str] = None) -> QuerySet:
    """
    Documents of a project, most recently uploaded first.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = get_project_by_id(project_id=project_id)
    queryset = Document.objects.filter(project=project).select_related('uploaded_by')
    if doc_type:
        queryset = queryset.filter(doc_type=doc_type)
    return queryset


def get_document(*, project_id: UUID, document_id: UUID) -> Document:
    """
    Raises:
        DocumentNotFoundError: If document doesn't exist in the project
    """
    try:
        return Document.objects.select_related('uploaded_by').get(
            id=document_id,
            project_id=project_id,
        )
    except Document.DoesNotExist:
        raise DocumentNotFoundError(f"Document with ID {document_id} not found")


@transaction.atomic
def add_document(
    *,
    project_id: UUID,
    uploaded_by: User,
    file: UploadedFile,
    name: str = '',
    doc_type: Optional[str] = None,
) -> Document:
    """
    Store a new document at version 1.

    Args:
        project_id: UUID of the project
        uploaded_by: Uploading user
        file: Uploaded file
        name: Display name; defaults to the file name
        doc_type: DocumentType value; guessed from the extension if omitted

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InvalidDocumentError: If no file is given or doc_type is unknown
    """
    if not file:
        raise InvalidDocumentError("A file is required")

    doc_type = doc_type or guess_document_type(file.name)
    if doc_type not in DocumentType.values:
        raise InvalidDocumentError(f"Unknown document type: {doc_type}")

    project = get_project_by_id(project_id=project_id)
    document = Document.objects.create(
        project=project,
        name=name or os.path.basename(file.name),
        file=file,
        doc_type=doc_type,
        version=1,
        uploaded_by=uploaded_by,
    )

    record_activity(
        project=project,
        user=uploaded_by,
        action=ActivityAction.DOCUMENT_UPLOAD,
        details=f"Uploaded a new document: {document.name}",
    )

    logger.info(f"Document {document.id} ({document.name}) uploaded to project {project.id}")
    return document


@transaction.atomic
def update_document_version(
    *,
    project_id: UUID,
    document_id: UUID,
    uploaded_by: User,
    file: UploadedFile,
) -> Document:
    """
    Replace a document's file with a new version.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        DocumentNotFoundError: If document doesn't exist in the project
        InvalidDocumentError: If no file is given
    """
    if not file:
        raise InvalidDocumentError("A file is required")

    project = get_project_by_id(project_id=project_id)

    try:
        document = Document.objects.select_for_update().get(id=document_id, project=project)
    except Document.DoesNotExist:
        raise DocumentNotFoundError(f"Document with ID {document_id} not found")

    previous_file = document.file.name
    document.file = file
    document.version += 1
    document.uploaded_by = uploaded_by
    document.uploaded_at = timezone.now()
    document.save()

    if previous_file and previous_file != document.file.name:
        _delete_file_on_commit(document.file.storage, previous_file)

    record_activity(
        project=project,
        user=uploaded_by,
        action=ActivityAction.DOCUMENT_UPDATE,
        details=f"Uploaded a new version (v{document.version}) for document: {document.name}",
    )

    logger.info(f"Document {document.id} updated to version {document.version}")
    return document


@transaction.atomic
def delete_document(*, project_id: UUID, document_id: UUID, user: User) -> None:
    """
    Delete a document and its stored file (manager only).

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InsufficientPermissionsError: If user is not a manager
        DocumentNotFoundError: If document doesn't exist in the project
    """
    project = get_project_by_id(project_id=project_id)
    ensure_project_manager(project=project, user=user)

    try:
        document = Document.objects.get(id=document_id, project=project)
    except Document.DoesNotExist:
        raise DocumentNotFoundError(f"Document with ID {document_id} not found")

    name, version = document.name, document.version
    _delete_file_on_commit(document.file.storage, document.file.name)
    document.delete()

    record_activity(
        project=project,
        user=user,
        action=ActivityAction.DOCUMENT_DELETION,
        details=f"Deleted document: {name} (v{version})",
    )

    logger.info(f"Document {document_id} deleted from project {project.id}")
