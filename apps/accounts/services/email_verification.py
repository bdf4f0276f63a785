"""Confirm a user's email address with the token sent at registration."""

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils.crypto import constant_time_compare

from .exceptions import EmailAlreadyVerifiedError, InvalidTokenError, UserNotFoundError

User = get_user_model()
logger = logging.getLogger('apps.accounts')


@transaction.atomic
def verify_user_email(*, user_id: UUID, token: str) -> User:
    """
    Mark the user's email as verified and spend the token.

    Raises:
        UserNotFoundError: If the user does not exist
        EmailAlreadyVerifiedError: If the email was verified before
        InvalidTokenError: If the token does not match
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if user.email_verified:
        raise EmailAlreadyVerifiedError("Email is already verified")

    if not token or not constant_time_compare(user.verification_token or '', token):
        logger.info(f"Rejected verification token for user {user.id}")
        raise InvalidTokenError("Invalid verification token")

    user.email_verified = True
    user.verification_token = None
    user.save(update_fields=['email_verified', 'verification_token'])

    logger.info(f"Email verified for user {user.id}")
    return user
