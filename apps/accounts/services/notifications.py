"""Account emails: verification and password reset tokens."""

import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger('apps.accounts')


def send_verification_email(*, user) -> None:
    """Email the user the token that confirms their address."""
    send_mail(
        subject='Verify your Banai Suite email address',
        message=(
            f"Hello {user.get_display_name()},\n\n"
            f"Use this code to verify your email address:\n\n"
            f"{user.verification_token}\n"
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )
    logger.info(f"Verification email sent to {user.email}")


def send_password_reset_email(*, user, token: str) -> None:
    """Email the user a single-use password reset token."""
    send_mail(
        subject='Reset your Banai Suite password',
        message=(
            f"Hello {user.get_display_name()},\n\n"
            f"Use this code to set a new password:\n\n"
            f"{token}\n\n"
            f"If you did not ask for a reset, you can ignore this email.\n"
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )
    logger.info(f"Password reset email sent to {user.email}")
