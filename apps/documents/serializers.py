from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Document, DocumentType


class DocumentSerializer(serializers.ModelSerializer):
    uploaded_by = UserPublicSerializer(read_only=True)
    doc_type_display = serializers.CharField(source='get_doc_type_display', read_only=True)
    file_url = serializers.SerializerMethodField()

    class Meta:
        model = Document
        fields = [
            'id',
            'project',
            'name',
            'doc_type',
            'doc_type_display',
            'version',
            'file_url',
            'uploaded_by',
            'uploaded_at',
        ]
        read_only_fields = fields

    def get_file_url(self, obj):
        if not obj.file:
            return None
        request = self.context.get('request')
        url = obj.file.url
        return request.build_absolute_uri(url) if request else url


class DocumentUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    doc_type = serializers.ChoiceField(choices=DocumentType.choices, required=False)


class DocumentVersionSerializer(serializers.Serializer):
    file = serializers.FileField()


class DocumentFilterSerializer(serializers.Serializer):
    doc_type = serializers.ChoiceField(choices=DocumentType.choices, required=False)
