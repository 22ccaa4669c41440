"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file fingerprinting with pluggable hash algorithms.

Algorithm identifiers are the names written on the first line of a .fsum
file ("SHA-256", "MD5", "XXH64", ...). DigestComputerImpl streams a file
through the selected algorithm in fixed-size chunks and returns a Fingerprint
holding the byte count and the base64-encoded digest.
"""

import base64
import hashlib
import logging
from typing import Callable, Dict, List, Optional

import xxhash

from fsum.core.errors import UnsupportedAlgorithmError
from fsum.core.interfaces import HashAlgorithm, HashState
from fsum.core.models import Fingerprint, IndexConfig

logger = logging.getLogger(__name__)


class HashlibAlgorithmImpl(HashAlgorithm):
    """Any algorithm available through hashlib."""

    def __init__(self, name: str, hashlib_name: str):
        self.name = name
        self.hashlib_name = hashlib_name

    def new(self) -> HashState:
        return hashlib.new(self.hashlib_name)


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    """Non-cryptographic xxHash family, much faster on large trees."""

    def __init__(self, name: str, factory: Callable[[], HashState]):
        self.name = name
        self.factory = factory

    def new(self) -> HashState:
        return self.factory()


ALGORITHMS: Dict[str, HashAlgorithm] = {
    algo.name: algo for algo in (
        HashlibAlgorithmImpl("MD5", "md5"),
        HashlibAlgorithmImpl("SHA-1", "sha1"),
        HashlibAlgorithmImpl("SHA-224", "sha224"),
        HashlibAlgorithmImpl("SHA-256", "sha256"),
        HashlibAlgorithmImpl("SHA-384", "sha384"),
        HashlibAlgorithmImpl("SHA-512", "sha512"),
        XXHashAlgorithmImpl("XXH64", xxhash.xxh64),
        XXHashAlgorithmImpl("XXH3-128", xxhash.xxh3_128),
    )
}


def supported_algorithms() -> List[str]:
    return list(ALGORITHMS)


def get_algorithm(name: str) -> HashAlgorithm:
    """Look up an algorithm by identifier (case-insensitive)."""
    algorithm = ALGORITHMS.get(name) or ALGORITHMS.get(name.upper())
    if algorithm is None:
        raise UnsupportedAlgorithmError(
            f"Unsupported digest algorithm: '{name}'. "
            f"Supported: {', '.join(supported_algorithms())}"
        )
    return algorithm


def encode_digest(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


class DigestComputerImpl:
    """
    Streams whole files through a hash algorithm.
    Failures never raise: the caller gets None and skips the file.
    """

    def __init__(self, chunk_size: int = IndexConfig.CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def compute_fingerprint(self, algorithm: str, path: str) -> Optional[Fingerprint]:
        try:
            state = get_algorithm(algorithm).new()
        except UnsupportedAlgorithmError as e:
            logger.error(f"Cannot hash {path}: {e}")
            return None

        size = 0
        try:
            with open(path, 'rb') as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    state.update(chunk)
                    size += len(chunk)
        except OSError as e:
            logger.warning(f"Error reading {path}: {e}")
            return None

        return Fingerprint(size=size, digest=encode_digest(state.digest()))
