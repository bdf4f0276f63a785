from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
import uuid


class Role(models.TextChoices):
    SUPER_ADMIN = 'super_admin', 'Super Admin'
    PROJECT_MANAGER = 'project_manager', 'Project Manager'
    SITE_ENGINEER = 'site_engineer', 'Site Engineer'
    STORE_KEEPER = 'store_keeper', 'Store Keeper'
    ACCOUNTANT = 'accountant', 'Accountant'
    CLIENT = 'client', 'Client'
    VENDOR = 'vendor', 'Vendor'


class Theme(models.TextChoices):
    LIGHT = 'light', 'Light'
    DARK = 'dark', 'Dark'
    SYSTEM = 'system', 'System'


class Currency(models.TextChoices):
    USD = 'USD', 'US Dollar'
    NPR = 'NPR', 'Nepalese Rupee'
    INR = 'INR', 'Indian Rupee'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('email_verified', True)
        extra_fields.setdefault('role', Role.SUPER_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Custom user model with email authentication and a site role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.SITE_ENGINEER)
    avatar_url = models.URLField(max_length=500, blank=True)

    # Authentication & verification
    email_verified = models.BooleanField(default=False)
    verification_token = models.CharField(max_length=64, blank=True, null=True)
    password_reset_token = models.CharField(max_length=64, blank=True, null=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    # GDPR compliance
    gdpr_deleted_at = models.DateTimeField(null=True, blank=True)

    # Theme and currency live here (see DEFAULT_PREFERENCES)
    preferences = models.JSONField(default=dict, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    DEFAULT_PREFERENCES = {
        'theme': Theme.SYSTEM.value,
        'currency': Currency.USD.value,
    }

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email']),
            models.Index(fields=['role']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]

    @property
    def is_super_admin(self):
        return self.is_superuser or self.role == Role.SUPER_ADMIN

    def get_preference(self, key):
        """Return a stored preference, falling back to the default."""
        return (self.preferences or {}).get(key, self.DEFAULT_PREFERENCES.get(key))

    def anonymize(self):
        """GDPR-compliant anonymization."""
        self.email = f"deleted_{self.id}@anonymized.local"
        self.display_name = "Deleted User"
        self.avatar_url = ''
        self.is_active = False
        self.gdpr_deleted_at = timezone.now()
        self.set_unusable_password()
        self.preferences = {}
        self.save()
