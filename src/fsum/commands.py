"""
Command orchestrators for indexing and index actions.
This is the SINGLE source of business workflow — used by the CLI and by library callers.
No console output here — results are returned to the caller.
"""
import os
import logging
from dataclasses import dataclass
from typing import List, Optional

from fsum.core.codec import export_to_file, import_from_file
from fsum.core.crawler import FileCrawlerImpl
from fsum.core.errors import CrawlError, OutputConflictError
from fsum.core.interfaces import FileProcessedCallback, PathCallback, TotalSizeCallback
from fsum.core.models import (
    ActionMode, ActionParams, ChecksumIndex, DeletionReport, IndexConfig, IndexParams
)
from fsum.core.set_algebra import distinct, duplicates, unique
from fsum.services.deletion_service import DeletionService

logger = logging.getLogger(__name__)


@dataclass
class IndexResult:
    root: str
    output_path: str
    index: ChecksumIndex


@dataclass
class ActionResult:
    mode: ActionMode
    output_path: str
    index: ChecksumIndex
    report: Optional[DeletionReport] = None


class IndexCommand:
    """
    Crawls each root directory and exports one .fsum file per root.

    Usage:
        params = IndexParams(root_dirs=["photos", "backup"])
        results = IndexCommand().execute(
            params,
            on_total_size=progress.start,
            on_file_processed=progress.advance
        )
    """

    def __init__(self, crawler: Optional[FileCrawlerImpl] = None):
        self._crawler = crawler

    def execute(
            self,
            params: IndexParams,
            on_total_size: Optional[TotalSizeCallback] = None,
            on_file_processed: Optional[FileProcessedCallback] = None
    ) -> List[IndexResult]:
        """
        Raises:
            CrawlError: If any root is missing or not a directory (checked before any work)
            OutputConflictError: If two roots share a directory name and would overwrite each other
        """
        for root in params.root_dirs:
            if not os.path.isdir(root):
                raise CrawlError(f"{root} is not a directory")

        seen = {}
        for root in params.root_dirs:
            output_path = self.output_path(root, params.output_dir)
            if output_path in seen:
                raise OutputConflictError(
                    f"{seen[output_path]} and {root} would both be saved as {output_path}"
                )
            seen[output_path] = root

        crawler = self._crawler or FileCrawlerImpl(sort_paths=params.sort_paths)
        results = []
        for root in params.root_dirs:
            index = ChecksumIndex(params.algorithm)
            crawler.crawl(
                root,
                index=index,
                on_total_size=on_total_size,
                on_file_processed=on_file_processed
            )
            output_path = self.output_path(root, params.output_dir)
            export_to_file(index, output_path)
            logger.debug(f"Indexed {root}: {len(index)} files -> {output_path}")
            results.append(IndexResult(root=root, output_path=output_path, index=index))
        return results

    @staticmethod
    def output_path(root: str, output_dir: str) -> str:
        """'<output_dir>/<directory name>.fsum' for a crawled root."""
        name = os.path.basename(os.path.normpath(os.path.abspath(root))) or "root"
        return os.path.join(output_dir, name + IndexConfig.FILE_EXTENSION)


class ActionCommand:
    """
    Loads a working index (and optionally a second index) and applies one
    ActionMode, exporting the resulting index next to the working file.
    """

    def __init__(self, deletion_service: Optional[DeletionService] = None):
        self._deletion_service = deletion_service

    def execute(
            self,
            params: ActionParams,
            on_deleted: Optional[PathCallback] = None,
            on_error: Optional[PathCallback] = None,
            on_total: Optional[TotalSizeCallback] = None
    ) -> ActionResult:
        """
        `on_total` receives the number of paths a deletion will process,
        before the first `on_deleted` / `on_error` call.

        Raises:
            IndexDecodeError: If an input file is malformed
            AlgorithmMismatchError: If the two indexes use different algorithms
        """
        working = import_from_file(params.working_file)
        against = working if params.is_self_comparison else import_from_file(params.against_file)

        report = None
        if params.mode == ActionMode.DELETE:
            service = self._deletion_service or DeletionService(use_trash=params.use_trash)
            if on_total:
                on_total(len(against))
            report = service.apply_deletion(working, against, on_deleted=on_deleted, on_error=on_error)
            result_index = working
        else:
            baseline = None if params.is_self_comparison else against
            operation = {
                ActionMode.DISTINCT: distinct,
                ActionMode.DUPLICATE: duplicates,
                ActionMode.UNIQUE: unique,
            }[params.mode]
            result_index = operation(working, baseline)

        output_path = params.output_path()
        export_to_file(result_index, output_path)
        logger.debug(f"{params.mode.display_name}: {len(result_index)} entries -> {output_path}")
        return ActionResult(mode=params.mode, output_path=output_path, index=result_index, report=report)
