"""Infrastructure layer exceptions."""

from typing import Any


class InfrastructureError(Exception):
    """Base exception for infrastructure failures."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class DatabaseError(InfrastructureError):
    """Raised when a database operation fails."""


class UpdateError(DatabaseError):
    """Raised when the row to update does not exist."""


class DeleteError(DatabaseError):
    """Raised when the row to delete does not exist."""


class ConfigurationError(InfrastructureError):
    """Raised for missing or malformed settings."""


class StorageError(InfrastructureError):
    """Raised when a file cannot be stored."""
