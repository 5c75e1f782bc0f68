"""
Exception hierarchy shared by the storage, service and API layers.

Routers translate these into HTTP errors; services raise them and never retry.
"""


class DonorLinkError(Exception):
    """Base class for every error raised by the service."""


class NotFoundError(DonorLinkError):
    """Raised when an operation targets a record that does not exist."""

    def __init__(self, message: str, record_id: str | None = None):
        super().__init__(message)
        self.record_id = record_id


class DuplicateEmailError(DonorLinkError):
    """Raised when creating an account whose email is already registered."""

    def __init__(self, email: str):
        super().__init__("An account with this email already exists.")
        self.email = email


class InvalidCredentialError(DonorLinkError):
    """Raised when a login names a missing account or the wrong password."""


class PendingApprovalError(InvalidCredentialError):
    """Raised when a donor logs in before an admin has verified the account."""

    def __init__(self):
        super().__init__("Your account is pending admin approval. Please wait to be verified.")


class StorageError(DonorLinkError):
    """Raised when the key-value backend fails a read or write."""

    def __init__(self, message: str, operation: str = "unknown", key: str | None = None):
        super().__init__(message)
        self.operation = operation
        self.key = key


class PasswordPolicyError(DonorLinkError):
    """Raised when a new password does not meet the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(f"Password must be at least {min_length} characters.")
        self.min_length = min_length
