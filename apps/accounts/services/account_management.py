"""Account management service: deletion, preferences, user directory."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.contrib.auth import get_user_model

from apps.accounts.models import Currency, Theme
from .exceptions import (
    InvalidPreferenceError,
    PasswordConfirmationError,
    UserNotFoundError,
)

User = get_user_model()
logger = logging.getLogger('apps.accounts')


@transaction.atomic
def delete_user_account(*, user_id: UUID, password: str) -> None:
    """
    GDPR-compliant account deletion (anonymization).

    Args:
        user_id: User's ID
        password: User's password for confirmation

    Raises:
        UserNotFoundError: If user does not exist
        PasswordConfirmationError: If password is incorrect
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    user.anonymize()
    logger.info(f"Anonymized account {user_id}")


@transaction.atomic
def update_preferences(
    *,
    user: User,
    theme: Optional[str] = None,
    currency: Optional[str] = None,
) -> dict:
    """
    Update the user's theme and/or display currency.

    Args:
        user: User whose preferences change
        theme: 'light', 'dark' or 'system'
        currency: 'USD', 'NPR' or 'INR'

    Returns:
        Full preferences dict with defaults filled in

    Raises:
        InvalidPreferenceError: If a value is not supported
    """
    if theme is not None and theme not in Theme.values:
        raise InvalidPreferenceError(f"Unsupported theme: {theme}")
    if currency is not None and currency not in Currency.values:
        raise InvalidPreferenceError(f"Unsupported currency: {currency}")

    user = User.objects.select_for_update().get(id=user.id)
    preferences = dict(user.preferences or {})
    if theme is not None:
        preferences['theme'] = theme
    if currency is not None:
        preferences['currency'] = currency

    user.preferences = preferences
    user.save(update_fields=['preferences'])

    return {**User.DEFAULT_PREFERENCES, **preferences}


def list_users() -> QuerySet:
    """Active users, for picking team members."""
    return (
        User.objects
        .filter(is_active=True, gdpr_deleted_at__isnull=True)
        .order_by('display_name', 'email')
    )
