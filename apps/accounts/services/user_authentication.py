"""Email and password login."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()
logger = logging.getLogger('apps.accounts')


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check the credentials of a site user and stamp ``last_login``.

    The email match is case-insensitive. An unknown email and a wrong
    password fail with the same message.

    Raises:
        InvalidCredentialsError: If the credentials do not match
        InactiveAccountError: If the account was deactivated
    """
    user = User.objects.select_for_update().filter(email__iexact=email).first()

    if user is None:
        # Hash anyway so an unknown email takes as long as a wrong password
        User().set_password(password)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        logger.info(f"Failed login attempt for {email}")
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        logger.warning(f"Login attempt on deactivated account {user.id}")
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    logger.debug(f"User {user.id} logged in")
    return user
