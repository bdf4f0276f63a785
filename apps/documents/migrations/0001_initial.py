# Generated manually for the documents app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import apps.documents.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Document',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('file', models.FileField(max_length=500, upload_to=apps.documents.models.document_upload_path)),
                ('doc_type', models.CharField(choices=[('drawing', 'Drawing'), ('pdf', 'PDF'), ('image', 'Image'), ('permit', 'Permit')], max_length=20)),
                ('version', models.PositiveIntegerField(default=1)),
                ('uploaded_at', models.DateTimeField(auto_now_add=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documents', to='projects.project')),
                ('uploaded_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploaded_documents', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'documents',
                'ordering': ['-uploaded_at'],
                'indexes': [
                    models.Index(fields=['project', 'uploaded_at'], name='documents_project_4a694f_idx'),
                ],
            },
        ),
    ]
