"""
Core index engine — models, hashing, crawling, set algebra and the .fsum codec.

This package contains the whole checksum index engine:
- Fingerprint / ChecksumIndex: content identity and path -> fingerprint mapping
- DigestComputerImpl: streaming digests (hashlib and xxHash algorithms)
- FileCrawlerImpl: two-pass directory walk with progress callbacks
- duplicates / distinct / unique: pure set operations between indexes
- encode / decode: the line-based .fsum format

All components are pure Python with no console output — suitable for CLI and library usage.
"""

from .models import (
    Fingerprint, ChecksumIndex, DeletionReport, ActionMode, IndexParams, ActionParams, IndexConfig)
from .errors import (
    FsumError, UnsupportedAlgorithmError, AlgorithmMismatchError,
    IndexDecodeError, IndexEncodeError, CrawlError, OutputConflictError)
from .hasher import DigestComputerImpl, get_algorithm, supported_algorithms
from .crawler import FileCrawlerImpl
from .set_algebra import duplicates, distinct, unique
from .codec import encode, decode, export_to_file, import_from_file

__all__ = [
    "Fingerprint",
    "ChecksumIndex",
    "DeletionReport",
    "ActionMode",
    "IndexParams",
    "ActionParams",
    "IndexConfig",
    "FsumError",
    "UnsupportedAlgorithmError",
    "AlgorithmMismatchError",
    "IndexDecodeError",
    "IndexEncodeError",
    "CrawlError",
    "OutputConflictError",
    "DigestComputerImpl",
    "get_algorithm",
    "supported_algorithms",
    "FileCrawlerImpl",
    "duplicates",
    "distinct",
    "unique",
    "encode",
    "decode",
    "export_to_file",
    "import_from_file",
]
