"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Cross-platform file removal: permanent deletion or move to the system trash.
"""
import os
import logging
from pathlib import Path
from send2trash import send2trash

logger = logging.getLogger(__name__)


class FileService:
    """
    File removal primitives used by the deletion service.
    OS failures are wrapped in RuntimeError with a readable message.
    """

    @staticmethod
    def is_regular_file(file_path: str) -> bool:
        """True for an existing regular file that is not a symbolic link."""
        path = Path(file_path)
        try:
            return path.is_file() and not path.is_symlink()
        except OSError:
            return False

    @staticmethod
    def delete_file(file_path: str):
        """Permanently removes a file."""
        if not os.path.lexists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            os.remove(file_path)
        except OSError as e:
            raise RuntimeError(f"Failed to delete file: {e}") from e

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).absolute()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @classmethod
    def remove(cls, file_path: str, use_trash: bool = False):
        """Deletes permanently or moves to trash depending on use_trash."""
        if use_trash:
            cls.move_to_trash(file_path)
        else:
            cls.delete_file(file_path)
        logger.debug(f"Removed {file_path} (trash={use_trash})")

