from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import AttendanceRecord, AttendanceStatus


class AttendanceRecordSerializer(serializers.ModelSerializer):
    member = UserPublicSerializer(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = ['id', 'project', 'member', 'date', 'status', 'status_display', 'updated_at']
        read_only_fields = fields


class UpdateAttendanceSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    date = serializers.DateField()
    status = serializers.ChoiceField(choices=AttendanceStatus.choices)


class AttendanceFilterSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    member = serializers.UUIDField(required=False)
