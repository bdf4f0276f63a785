from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import Currency, Role, Theme, User


class UserSerializer(serializers.ModelSerializer):
    """User profile as shown to the user themselves."""

    role_display = serializers.CharField(source='get_role_display', read_only=True)
    preferences = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'role',
            'role_display',
            'avatar_url',
            'email_verified',
            'created_at',
            'last_login',
            'preferences',
        ]
        read_only_fields = [
            'id', 'email', 'role', 'email_verified', 'created_at', 'last_login',
        ]

    def get_preferences(self, obj):
        return {**User.DEFAULT_PREFERENCES, **(obj.preferences or {})}


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for user registration."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=Role.choices, required=False)

    class Meta:
        model = User
        fields = ['email', 'password', 'password_confirm', 'display_name', 'role']

    def validate_role(self, value):
        if value == Role.SUPER_ADMIN:
            raise serializers.ValidationError('Super Admin accounts cannot be self-registered')
        return value

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class PreferencesSerializer(serializers.Serializer):
    """Theme and display currency."""

    theme = serializers.ChoiceField(choices=Theme.choices, required=False)
    currency = serializers.ChoiceField(choices=Currency.choices, required=False)


class PasswordResetRequestSerializer(serializers.Serializer):
    """Serializer for password reset request."""

    email = serializers.EmailField(required=True)


class PasswordResetConfirmSerializer(serializers.Serializer):
    """Serializer for password reset confirmation."""

    token = serializers.CharField(required=True)
    new_password = serializers.CharField(
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError({
                'new_password_confirm': 'Passwords do not match'
            })
        return attrs


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (team pickers, task assignees, log authors)."""

    role_display = serializers.CharField(source='get_role_display', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'display_name', 'email', 'role', 'role_display', 'avatar_url']
        read_only_fields = fields
