# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import Role, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for site users.

    Lists users with their site role, filters by role and status, and
    offers bulk role changes and GDPR anonymization.
    """

    list_display = [
        'email',
        'display_name',
        'role',
        'is_active_badge',
        'email_verified_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'email_verified',
        'created_at',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'avatar_url', 'password')
        }),
        ('Role & Permissions', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser'),
        }),
        ('Verification', {
            'fields': ('email_verified', 'verification_token', 'password_reset_token'),
            'classes': ('collapse',),
        }),
        ('Preferences', {
            'fields': ('preferences',),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
        ('GDPR', {
            'fields': ('gdpr_deleted_at',),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
        'gdpr_deleted_at',
    ]

    filter_horizontal = []

    def is_active_badge(self, obj):
        """Active status as colored badge."""
        color, label = ('#2E7D32', 'Active') if obj.is_active else ('#C62828', 'Inactive')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color, label
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    def email_verified_badge(self, obj):
        color, label = ('#2E7D32', 'Verified') if obj.email_verified else ('#F9A825', 'Pending')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color, label
        )
    email_verified_badge.short_description = 'Email'
    email_verified_badge.admin_order_field = 'email_verified'

    actions = [
        'activate_users',
        'deactivate_users',
        'make_project_managers',
        'anonymize_users',
    ]

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users, superusers excluded."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    @admin.action(description='Make selected users project managers')
    def make_project_managers(self, request, queryset):
        count = queryset.exclude(role=Role.SUPER_ADMIN).update(role=Role.PROJECT_MANAGER)
        self.message_user(request, f'{count} user(s) can now create projects.')

    @admin.action(description='GDPR: Anonymize selected users (IRREVERSIBLE)')
    def anonymize_users(self, request, queryset):
        safe_queryset = queryset.filter(is_superuser=False, is_staff=False)
        count = 0
        for user in safe_queryset:
            user.anonymize()
            count += 1

        skipped = queryset.count() - count
        msg = f'Anonymized {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} staff/superuser(s).'
        self.message_user(request, msg)
