"""Local filesystem storage for uploaded files."""

import asyncio
import logging
import uuid

from pathlib import Path

from evoting.domain.exceptions import ValidationError
from evoting.infrastructure.exceptions import StorageError


logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})


class LocalFileStorageService:
    """Stores uploads under a base directory.

    The returned reference is the stored file name, which is unique per
    upload and stable for the file's lifetime.
    """

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    async def save(self, filename: str, content: bytes) -> str:
        extension = Path(filename).suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                "Unsupported file type", {"filename": filename, "extension": extension}
            )
        reference = f"{uuid.uuid4().hex}{extension}"
        target = self.base_dir / reference
        try:
            await asyncio.to_thread(self._write, target, content)
        except OSError as e:
            logger.error(f"Failed to store upload {filename}: {e}")
            raise StorageError(
                "Failed to store file", {"filename": filename, "error": str(e)}
            ) from e
        logger.info(f"Stored upload {filename} as {reference}")
        return reference

    async def delete(self, reference: str) -> None:
        target = self.base_dir / Path(reference).name
        try:
            await asyncio.to_thread(target.unlink, missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to remove stored file {reference}: {e}")
            return
        logger.info(f"Removed stored file {reference}")

    @staticmethod
    def _write(target: Path, content: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
