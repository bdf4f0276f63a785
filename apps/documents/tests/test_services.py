import pytest
import uuid
from django.core.files.uploadedfile import SimpleUploadedFile
from apps.documents.models import Document, DocumentType
from apps.documents.services import (
    add_document,
    update_document_version,
    delete_document,
    get_project_documents,
    guess_document_type,
)
from apps.documents.exceptions import DocumentNotFoundError
from apps.projects.models import ActivityAction
from apps.projects.services import InsufficientPermissionsError


@pytest.mark.django_db
class TestAddDocument:

    def test_starts_at_version_one(self, project, engineer, blueprint):
        document = add_document(
            project_id=project.id,
            uploaded_by=engineer,
            file=blueprint,
            doc_type=DocumentType.DRAWING,
        )

        assert document.version == 1
        assert document.name == 'Foundation Blueprint v2.pdf'
        assert document.doc_type == DocumentType.DRAWING
        assert document.file.storage.exists(document.file.name)

        entry = project.activity_logs.get(action=ActivityAction.DOCUMENT_UPLOAD)
        assert entry.details == 'Uploaded a new document: Foundation Blueprint v2.pdf'

    def test_type_guessed_from_extension(self, project, engineer, site_photo):
        document = add_document(project_id=project.id, uploaded_by=engineer, file=site_photo)
        assert document.doc_type == DocumentType.IMAGE

    @pytest.mark.parametrize('filename, expected', [
        ('permit.PDF', DocumentType.PDF),
        ('photo.jpeg', DocumentType.IMAGE),
        ('plan.dwg', DocumentType.DRAWING),
    ])
    def test_guess_document_type(self, filename, expected):
        assert guess_document_type(filename) == expected


@pytest.mark.django_db
class TestDocumentVersions:

    def test_new_version(self, project, pm, engineer, blueprint, django_capture_on_commit_callbacks):
        document = add_document(project_id=project.id, uploaded_by=engineer, file=blueprint)
        old_file = document.file.name

        revised = SimpleUploadedFile('Foundation Blueprint v3.pdf', b'%PDF-1.4 revised')
        with django_capture_on_commit_callbacks(execute=True):
            document = update_document_version(
                project_id=project.id,
                document_id=document.id,
                uploaded_by=pm,
                file=revised,
            )

        assert document.version == 2
        assert document.uploaded_by == pm
        assert not document.file.storage.exists(old_file)

        entry = project.activity_logs.get(action=ActivityAction.DOCUMENT_UPDATE)
        assert entry.details == (
            'Uploaded a new version (v2) for document: Foundation Blueprint v2.pdf'
        )

    def test_failed_update_keeps_previous_file(self, project, pm, engineer, blueprint, monkeypatch, django_capture_on_commit_callbacks):
        document = add_document(project_id=project.id, uploaded_by=engineer, file=blueprint)
        old_file = document.file.name

        def broken_log(**kwargs):
            raise RuntimeError('activity log unavailable')

        monkeypatch.setattr('apps.documents.services.record_activity', broken_log)
        revised = SimpleUploadedFile('Foundation Blueprint v3.pdf', b'%PDF-1.4 revised')

        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(RuntimeError):
                update_document_version(
                    project_id=project.id,
                    document_id=document.id,
                    uploaded_by=pm,
                    file=revised,
                )

        document.refresh_from_db()
        assert document.version == 1
        assert document.file.name == old_file
        assert document.file.storage.exists(old_file)

    def test_unknown_document(self, project, pm, blueprint):
        with pytest.raises(DocumentNotFoundError):
            update_document_version(
                project_id=project.id,
                document_id=uuid.uuid4(),
                uploaded_by=pm,
                file=blueprint,
            )


@pytest.mark.django_db
class TestDeleteDocument:

    def test_manager_deletes(self, project, pm, blueprint, django_capture_on_commit_callbacks):
        document = add_document(project_id=project.id, uploaded_by=pm, file=blueprint)
        stored = document.file.name

        with django_capture_on_commit_callbacks(execute=True):
            delete_document(project_id=project.id, document_id=document.id, user=pm)

        assert not Document.objects.filter(id=document.id).exists()
        assert not document.file.storage.exists(stored)
        entry = project.activity_logs.get(action=ActivityAction.DOCUMENT_DELETION)
        assert entry.details == 'Deleted document: Foundation Blueprint v2.pdf (v1)'

    def test_member_cannot_delete(self, project, engineer, blueprint):
        document = add_document(project_id=project.id, uploaded_by=engineer, file=blueprint)

        with pytest.raises(InsufficientPermissionsError):
            delete_document(project_id=project.id, document_id=document.id, user=engineer)

    def test_missing_document(self, project, pm):
        with pytest.raises(DocumentNotFoundError):
            delete_document(project_id=project.id, document_id=uuid.uuid4(), user=pm)

    def test_filter_by_type(self, project, engineer, blueprint, site_photo):
        add_document(project_id=project.id, uploaded_by=engineer, file=blueprint)
        add_document(project_id=project.id, uploaded_by=engineer, file=site_photo)

        images = get_project_documents(project_id=project.id, doc_type=DocumentType.IMAGE)
        assert [d.name for d in images] == ['Site-Photo-Week-4.jpg']

    def test_failed_delete_keeps_file(self, project, pm, blueprint, monkeypatch, django_capture_on_commit_callbacks):
        document = add_document(project_id=project.id, uploaded_by=pm, file=blueprint)
        stored = document.file.name

        def broken_log(**kwargs):
            raise RuntimeError('activity log unavailable')

        monkeypatch.setattr('apps.documents.services.record_activity', broken_log)

        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(RuntimeError):
                delete_document(project_id=project.id, document_id=document.id, user=pm)

        assert Document.objects.filter(id=document.id).exists()
        assert document.file.storage.exists(stored)
