"""User registration service."""

import logging
import secrets

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from apps.accounts.models import Role
from .exceptions import UserRegistrationError
from .notifications import send_verification_email

User = get_user_model()
logger = logging.getLogger('apps.accounts')


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    role: str = Role.SITE_ENGINEER,
) -> User:
    """
    Register a new user and email them a verification token.

    Args:
        email: User's email address (login name)
        password: User's password (will be hashed)
        display_name: Optional display name
        role: Site role, Site Engineer unless given

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the role is unknown or the email is taken
    """
    if role not in Role.values:
        raise UserRegistrationError(f"Unknown role: {role}")

    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("A user with this email already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            role=role,
            verification_token=secrets.token_urlsafe(32),
        )
    except IntegrityError as e:
        raise UserRegistrationError(f"Registration failed: {e}")

    send_verification_email(user=user)

    logger.info(f"Registered user {user.email} as {user.get_role_display()}")
    return user
