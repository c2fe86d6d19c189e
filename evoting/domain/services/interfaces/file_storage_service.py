"""File storage interface."""

from typing import Protocol


class IFileStorageService(Protocol):
    async def save(self, filename: str, content: bytes) -> str:
        """Store the content and return a stable reference to it."""
        ...

    async def delete(self, reference: str) -> None:
        """Remove a stored file; a missing file is not an error."""
        ...
