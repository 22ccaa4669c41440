"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/deletion_service.py
Applies a "files to remove" index to a target index and to the filesystem.
"""
import logging
from typing import Optional

from fsum.core.interfaces import PathCallback
from fsum.core.models import ChecksumIndex, DeletionReport
from fsum.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeletionService:
    """
    Deletes from disk, and from the target index, every path listed in a
    removal index.

    The filesystem delete happens first; the entry leaves the target index
    and `on_deleted` fires only once the file is actually gone. A failed
    delete keeps the entry and is reported through `on_error`.
    """

    def __init__(self, file_service: Optional[FileService] = None, use_trash: bool = False):
        self.file_service = file_service or FileService()
        self.use_trash = use_trash

    def apply_deletion(
            self,
            target: ChecksumIndex,
            to_remove: ChecksumIndex,
            on_deleted: Optional[PathCallback] = None,
            on_error: Optional[PathCallback] = None
    ) -> DeletionReport:
        """
        Args:
            target: Index whose files are deleted; mutated in place
            to_remove: Index listing the paths to delete (may be `target` itself)
            on_deleted: Called with each path once it is removed
            on_error: Called with each path that could not be removed

        Returns:
            DeletionReport with deleted and failed paths in processing order
        """
        report = DeletionReport()

        # Snapshot first: to_remove may be the very index we are mutating
        paths = to_remove.paths()
        logger.debug(f"Applying deletion of {len(paths)} paths (trash={self.use_trash})")

        for path in paths:
            if path not in target:
                logger.debug(f"Not in target index: {path}")
                self._report_error(report, path, on_error)
                continue

            if not self.file_service.is_regular_file(path):
                logger.debug(f"Not a regular file on disk: {path}")
                self._report_error(report, path, on_error)
                continue

            try:
                self.file_service.remove(path, use_trash=self.use_trash)
            except (OSError, RuntimeError) as e:
                logger.warning(f"Failed to delete {path}: {e}")
                self._report_error(report, path, on_error)
                continue

            target.remove(path)
            report.deleted.append(path)
            if on_deleted:
                on_deleted(path)

        logger.debug(f"Deletion finished: {len(report.deleted)} deleted, {len(report.errors)} errors")
        return report

    @staticmethod
    def _report_error(report: DeletionReport, path: str, on_error: Optional[PathCallback]) -> None:
        report.errors.append(path)
        if on_error:
            on_error(path)
