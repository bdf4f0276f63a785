"""Password reset service."""

import logging
import secrets

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import UserNotFoundError, InvalidTokenError
from .notifications import send_password_reset_email

User = get_user_model()
logger = logging.getLogger('apps.accounts')


@transaction.atomic
def request_password_reset(*, email: str) -> str:
    """
    Generate a password reset token for an active user and email it.

    The reset token is kept apart from the email verification token, so a
    reset request leaves a pending verification untouched.

    Raises:
        UserNotFoundError: If no active user has this email
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email, is_active=True)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"No active user with email: {email}")

    reset_token = secrets.token_urlsafe(32)
    user.password_reset_token = reset_token
    user.save(update_fields=['password_reset_token'])

    send_password_reset_email(user=user, token=reset_token)

    logger.info(f"Password reset requested for {user.email}")
    return reset_token


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Set a new password using a reset token. The token is single-use.

    Raises:
        InvalidTokenError: If token is unknown or already used
    """
    if not token:
        raise InvalidTokenError("Invalid or expired reset token")

    try:
        user = (
            User.objects
            .select_for_update()
            .get(password_reset_token=token, is_active=True)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    user.set_password(new_password)
    user.password_reset_token = None
    user.save(update_fields=['password', 'password_reset_token'])

    logger.info(f"Password reset completed for {user.email}")
    return user
