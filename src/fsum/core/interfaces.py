"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the index engine.
These protocols enforce structural typing using Python's `typing.Protocol` so
that hash functions, digest computers and crawlers can be swapped in tests or
by library callers.

Key Components:
---------------
- HashState: Running digest accumulator (hashlib / xxhash objects fit as is).
- HashAlgorithm: Named factory of HashState objects (SHA-256, MD5, XXH64, ...).
- DigestComputer: Streams a file through an algorithm into a Fingerprint.
- FileCrawler: Walks a directory tree and populates a ChecksumIndex.
"""

from typing import Protocol, Optional, Callable
from fsum.core.models import Fingerprint, ChecksumIndex


TotalSizeCallback = Callable[[int], None]
FileProcessedCallback = Callable[[str, int], None]
PathCallback = Callable[[str], None]


# ===== Interfaces =====

class HashState(Protocol):
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the index logic.
    """
    name: str

    def new(self) -> HashState:
        """Returns a fresh accumulator."""
        ...


class DigestComputer(Protocol):
    """Interface for computing the content fingerprint of a single file."""
    def compute_fingerprint(self, algorithm: str, path: str) -> Optional[Fingerprint]:
        """
        Returns None when the file cannot be read or the algorithm is unknown.
        """
        ...


class FileCrawler(Protocol):
    """
    Interface for walking file systems and collecting fingerprints.
    """
    def crawl(
        self,
        root_path: str,
        index: Optional[ChecksumIndex] = None,
        on_total_size: Optional[TotalSizeCallback] = None,
        on_file_processed: Optional[FileProcessedCallback] = None
    ) -> ChecksumIndex:
        """
        Crawl the directory tree and (re)populate an index.

        Args:
            root_path: Directory to walk.
            index: Index to repopulate; a fresh default index when omitted.
            on_total_size: Called once with the total byte count before hashing.
            on_file_processed: Called once per regular file with (path, size).

        Returns:
            The populated index.
        """
        ...
