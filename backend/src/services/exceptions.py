"""Shared exceptions for service layer operations."""


class DuplicateEmailError(Exception):
    """Raised when a signup or profile edit uses an email that is already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already exists")


class InvalidCredentialsError(Exception):
    """
    Raised when an email/password pair does not authenticate.

    Used for an unknown email, a wrong password, and a wrong old password on
    password change. The message is identical in every case so callers cannot
    tell whether an account exists.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class MissingOldPasswordError(Exception):
    """Raised when a password change is requested without the current password."""

    def __init__(self) -> None:
        super().__init__("old_password is required")


class NotFoundError(Exception):
    """
    Raised when a resource does not exist or is not owned by the requesting user.

    The two cases are deliberately not distinguished.
    """

    def __init__(self, resource: str, resource_id: int) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")
