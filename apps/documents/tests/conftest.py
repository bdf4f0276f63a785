import pytest
from django.core.files.uploadedfile import SimpleUploadedFile


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploads out of the real media directory."""
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


@pytest.fixture
def blueprint():
    return SimpleUploadedFile(
        'Foundation Blueprint v2.pdf',
        b'%PDF-1.4 blueprint',
        content_type='application/pdf',
    )


@pytest.fixture
def site_photo():
    return SimpleUploadedFile(
        'Site-Photo-Week-4.jpg',
        b'\xff\xd8\xff\xe0 photo',
        content_type='image/jpeg',
    )
