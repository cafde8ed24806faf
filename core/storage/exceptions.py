"""Exceptions raised by the storage core."""


class StorageError(Exception):
    """Base class for user-facing storage failures."""

    status_code = 500


class InvalidPathError(StorageError):
    """Raised when a path resolves outside the user's directory."""

    status_code = 400

    def __init__(self, path: str = "") -> None:
        self.path = path
        super().__init__("invalid path")


class InvalidNameError(StorageError):
    """Raised for empty names or names containing path separators."""

    status_code = 400


class ItemNotFoundError(StorageError):
    """Raised when a file or folder does not exist."""

    status_code = 404

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name}: not found")


class InvalidUserError(StorageError):
    """Raised when registration input is rejected."""

    status_code = 400


class UserExistsError(InvalidUserError):
    """Raised when the username is already taken (case-insensitive)."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("user already exists")
