from .deletion_service import DeletionService
from .file_service import FileService

__all__ = ["DeletionService", "FileService"]
