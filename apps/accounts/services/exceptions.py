"""
Errors raised by the accounts services.

Views translate each of them into an ``{"error": ...}`` response; none of
them carries an HTTP status of its own.
"""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Email already registered, or the new account failed validation."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Unknown email or wrong password. The message never says which."""
    pass


class InactiveAccountError(AccountsServiceError):
    pass


class InvalidTokenError(AccountsServiceError):
    """
    A verification or password reset token did not match.

    The two tokens live in separate fields, so one never satisfies the
    other's check.
    """
    pass


class EmailAlreadyVerifiedError(InvalidTokenError):
    """The account's email was verified before; its token is spent."""
    pass


class UserNotFoundError(AccountsServiceError):
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Current password did not match on account deletion."""
    pass


class InvalidPreferenceError(AccountsServiceError):
    """Raised when a theme or currency preference is not supported."""
    pass
