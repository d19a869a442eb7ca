"""Storage abstraction for game picture attachments.

Pictures are referenced from game records by file name. Files are written
with owner-only permissions (0o600) inside an owner-only directory (0o700).
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Protocol
from uuid import uuid4

import structlog

logger = structlog.get_logger()

_PICTURE_DIR_MODE = 0o700
_PICTURE_FILE_MODE = 0o600

ALLOWED_PICTURE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".webp", ".heic"})


class PictureStorage(Protocol):
    """Protocol for persisting picture attachments."""

    def save_picture(self, content: bytes, suffix: str = ".jpg") -> str: ...

    def has_picture(self, ref: str) -> bool: ...

    def delete_pictures(self, refs: list[str]) -> None: ...


class LocalPictureStorage:
    """Writes picture files to the local filesystem."""

    def __init__(self, picture_dir: str) -> None:
        self._picture_dir = Path(picture_dir).resolve()

    def _resolve(self, ref: str) -> Path:
        target = (self._picture_dir / ref).resolve()
        if not target.is_relative_to(self._picture_dir) or target == self._picture_dir:
            raise ValueError(f"Path traversal rejected: '{ref}' resolves outside picture directory")
        return target

    def save_picture(self, content: bytes, suffix: str = ".jpg") -> str:
        """Save picture bytes under a fresh name and return its reference.

        Creates the directory lazily with owner-only permissions and writes
        atomically via temp-file-then-rename.
        """
        suffix = suffix.lower()
        if suffix not in ALLOWED_PICTURE_SUFFIXES:
            raise ValueError(f"Unsupported picture type: '{suffix}'")
        if not content:
            raise ValueError("Picture content must not be empty")

        ref = f"{uuid4().hex}{suffix}"
        target = self._resolve(ref)

        self._picture_dir.mkdir(mode=_PICTURE_DIR_MODE, parents=True, exist_ok=True)
        self._picture_dir.chmod(_PICTURE_DIR_MODE)

        fd, tmp_path = tempfile.mkstemp(dir=str(self._picture_dir), suffix=".tmp", prefix=".picture_")
        fd_owned = True
        try:
            with os.fdopen(fd, "wb") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _PICTURE_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.info("saved picture", ref=ref, size=len(content))
        return ref

    def has_picture(self, ref: str) -> bool:
        """Whether ref names a stored file inside the picture directory."""
        try:
            return self._resolve(ref).is_file()
        except ValueError:
            return False

    def delete_pictures(self, refs: list[str]) -> None:
        """Remove picture files. Missing files are ignored; failures are logged and skipped."""
        for ref in refs:
            try:
                self._resolve(ref).unlink(missing_ok=True)
            except (OSError, ValueError) as exc:
                logger.warning("could not delete picture", ref=ref, error=str(exc))
