"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception types raised by the index engine.
"""


class FsumError(Exception):
    """Base class for all fsum errors."""


class UnsupportedAlgorithmError(FsumError, ValueError):
    """Digest algorithm name is not known."""


class AlgorithmMismatchError(FsumError, ValueError):
    """Two indexes built with different digest algorithms were combined."""

    def __init__(self, left: str, right: str):
        super().__init__(
            f"Cannot combine indexes built with different algorithms: '{left}' vs '{right}'"
        )
        self.left = left
        self.right = right


class IndexDecodeError(FsumError, ValueError):
    """Persisted index is truncated or malformed."""


class IndexEncodeError(FsumError, ValueError):
    """Index holds a value that cannot be written to the line-based format."""


class CrawlError(FsumError, RuntimeError):
    """Root path of a crawl is missing or not a directory."""


class OutputConflictError(FsumError, ValueError):
    """Two inputs would be written to the same output file."""
