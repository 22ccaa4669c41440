"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/crawler.py
Implements directory crawling that populates a ChecksumIndex.
Features:
- Two passes over the tree: size total first, then hashing
- Never follows symlinked directories, never hashes symlinks or special files
- Skips unreadable files and directories without aborting the walk
- Optional sorted traversal for reproducible "first occurrence" choices
"""

import os
import stat
import time
import logging
from typing import Iterator, Optional, Tuple

from fsum.core.errors import CrawlError
from fsum.core.hasher import DigestComputerImpl
from fsum.core.interfaces import (
    DigestComputer, FileCrawler, FileProcessedCallback, TotalSizeCallback
)
from fsum.core.models import ChecksumIndex

logger = logging.getLogger(__name__)


class FileCrawlerImpl(FileCrawler):
    """
    Walks a directory tree recursively and fingerprints every regular file.

    Attributes:
        digest_computer: Computes one Fingerprint per file
        sort_paths: Visit directories and files in sorted order when True
    """

    def __init__(
        self,
        digest_computer: Optional[DigestComputer] = None,
        sort_paths: bool = True
    ):
        self.digest_computer = digest_computer or DigestComputerImpl()
        self.sort_paths = sort_paths

    def crawl(
        self,
        root_path: str,
        index: Optional[ChecksumIndex] = None,
        on_total_size: Optional[TotalSizeCallback] = None,
        on_file_processed: Optional[FileProcessedCallback] = None
    ) -> ChecksumIndex:
        """
        (Re)populates `index` from the live content of `root_path`.
        Previous entries of the index are discarded.
        """
        if index is None:
            index = ChecksumIndex()

        logger.debug("Starting crawl operation")
        logger.debug(f"Root directory: {root_path}, algorithm: {index.algorithm}")

        self._validate_root(root_path)
        start_time = time.time()

        # Pass 1: total size, reported before any hashing
        total_size = sum(size for _, size in self._iter_regular_files(root_path))
        logger.debug(f"Total size to hash: {total_size} bytes")
        if on_total_size:
            on_total_size(total_size)

        # Pass 2: hashing
        index.clear()
        hashed = 0
        skipped = 0
        for path, size in self._iter_regular_files(root_path):
            fingerprint = self.digest_computer.compute_fingerprint(index.algorithm, path)
            if fingerprint is not None:
                index.add(path, fingerprint)
                hashed += 1
            else:
                logger.debug(f"Skipping unreadable file: {path}")
                skipped += 1
            if on_file_processed:
                on_file_processed(path, size)

        elapsed_time = time.time() - start_time
        logger.debug(f"Total crawl time: {elapsed_time:.2f} seconds")
        logger.debug(f"Crawl completed. Hashed {hashed} files, skipped {skipped}.")
        return index

    @staticmethod
    def _validate_root(root_path: str) -> None:
        if not os.path.exists(root_path):
            error_msg = f"Directory does not exist: {root_path}"
            logger.error(error_msg)
            raise CrawlError(error_msg)
        if not os.path.isdir(root_path):
            error_msg = f"Not a directory: {root_path}"
            logger.error(error_msg)
            raise CrawlError(error_msg)

    def _iter_regular_files(self, root_path: str) -> Iterator[Tuple[str, int]]:
        """
        Yields (path, size) for every regular, non-symlink file under root_path.
        Size comes from lstat at visit time.
        """
        for root, dirs, files in os.walk(root_path, onerror=self._on_walk_error, followlinks=False):
            if self.sort_paths:
                dirs.sort()
                files = sorted(files)

            for filename in files:
                path = os.path.join(root, filename)
                size = self._regular_file_size(path)
                if size is not None:
                    yield path, size

    @staticmethod
    def _regular_file_size(path: str) -> Optional[int]:
        """Size of a regular file, None for symlinks, special files or vanished entries."""
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if stat.S_ISLNK(st.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None
        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None
        return st.st_size

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Permission denied or unreadable directory during crawl: {error}")
