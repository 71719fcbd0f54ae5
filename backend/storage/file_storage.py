"""
File storage abstraction.

Provides a simple interface for storing and removing cover images.
Currently uses local filesystem, can be extended to S3 or other backends.
"""
import logging
import secrets
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)


class FileStorage:
    """
    Local file storage for cover images.

    Files live flat in ``uploads_root`` and are published under
    ``url_prefix``, e.g. ``/uploads/coverImage-1718000000000-3fa2c1.jpg``.
    """

    def __init__(self, uploads_root: str | Path = "uploads", url_prefix: str = "/uploads"):
        self.uploads_root = Path(uploads_root)
        self.uploads_root.mkdir(parents=True, exist_ok=True)
        self.url_prefix = "/" + url_prefix.strip("/")

    def save_cover(
        self,
        file: BinaryIO,
        filename: str,
        field_name: str = "coverImage",
        default_ext: str = "",
    ) -> str:
        """
        Save an uploaded cover image.

        Args:
            file: File-like object with the image data
            filename: Original filename, only its extension is kept
            field_name: Multipart field the file came from (name prefix)
            default_ext: Extension to use when the filename has none

        Returns:
            Name of the stored file, relative to the uploads root
        """
        ext = Path(filename or "").suffix.lower() or default_ext
        new_filename = f"{field_name}-{int(time.time() * 1000)}-{secrets.token_hex(3)}{ext}"
        file_path = self.uploads_root / new_filename

        with open(file_path, "wb") as f:
            shutil.copyfileobj(file, f)

        return new_filename

    def public_url(self, stored_name: str) -> str:
        """Public path clients use to fetch a stored file."""
        return f"{self.url_prefix}/{stored_name}"

    def resolve_url(self, url: str) -> Optional[Path]:
        """Map a public path back to a file under the uploads root.

        Returns None for paths outside the prefix or outside the root.
        """
        prefix = self.url_prefix + "/"
        if not url or not url.startswith(prefix):
            return None
        candidate = (self.uploads_root / url[len(prefix):]).resolve()
        root = self.uploads_root.resolve()
        if root not in candidate.parents:
            return None
        return candidate

    def delete_file(self, stored_name: str) -> bool:
        """Delete a file. Returns True if deleted."""
        path = self.uploads_root / stored_name
        if path.exists():
            path.unlink()
            return True
        return False

    def discard(self, stored_name: str) -> None:
        """Advisory delete of a stored file. Failures are logged, never raised."""
        try:
            self.delete_file(stored_name)
        except OSError:
            logger.exception("Error deleting upload %s", stored_name)

    def discard_url(self, url: Optional[str], missing_ok: bool = True) -> None:
        """Advisory delete of the file behind a public path.

        With ``missing_ok`` a file that is already gone is not reported;
        otherwise it is logged like any other failed delete.
        """
        path = self.resolve_url(url) if url else None
        if path is None:
            if url:
                logger.warning("Cover path %s is not inside %s, not deleting", url, self.uploads_root)
            return
        try:
            path.unlink()
        except FileNotFoundError:
            if not missing_ok:
                logger.error("Failed to delete cover image %s: file not found", path)
            return
        except OSError:
            logger.exception("Failed to delete cover image %s", path)
            return
        logger.info("Deleted cover image: %s", path)
