"""Errors raised by the user store."""


class UserStoreError(Exception):
    """Base exception for user storage operations."""

    pass


class MalformedIdentifierError(UserStoreError):
    """Raised when an identifier is not in the storage engine's id format."""

    def __init__(self, user_id: str):
        super().__init__(f"Malformed user id: {user_id!r}")
        self.user_id = user_id


class UserNotFoundError(UserStoreError):
    """Raised when a well-formed identifier matches no stored user."""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class StorageError(UserStoreError):
    """Raised when the database fails for any other reason."""

    pass


class DuplicateEmailError(StorageError):
    """Raised when the email unique index rejects a write."""

    pass
