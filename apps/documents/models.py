import uuid

from django.db import models


class DocumentType(models.TextChoices):
    DRAWING = 'drawing', 'Drawing'
    PDF = 'pdf', 'PDF'
    IMAGE = 'image', 'Image'
    PERMIT = 'permit', 'Permit'


def document_upload_path(instance, filename):
    return f'projects/{instance.project_id}/documents/{filename}'


class Document(models.Model):
    """Versioned project file (drawings, permits, site photos)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='documents'
    )
    name = models.CharField(max_length=255)
    file = models.FileField(upload_to=document_upload_path, max_length=500)
    doc_type = models.CharField(max_length=20, choices=DocumentType.choices)
    version = models.PositiveIntegerField(default=1)
    uploaded_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='uploaded_documents'
    )
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'documents'
        indexes = [
            models.Index(fields=['project', 'uploaded_at']),
        ]
        ordering = ['-uploaded_at']

    def __str__(self):
        return f"{self.name} (v{self.version})"
