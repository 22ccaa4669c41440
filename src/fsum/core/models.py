"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for content-addressable file indexes.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Tuple


# =============================
# Config
# =============================

class IndexConfig:
    DEFAULT_ALGORITHM = "SHA-256"
    CHUNK_SIZE = 8 * 1024  # Read buffer for streaming digests
    FILE_EXTENSION = ".fsum"
    # Canonical names of the digest algorithms fsum can compute
    ALGORITHM_NAMES = ("MD5", "SHA-1", "SHA-224", "SHA-256", "SHA-384", "SHA-512", "XXH64", "XXH3-128")

    @classmethod
    def canonical_algorithm(cls, name: str) -> str:
        """Upper-case spelling of a known algorithm; unknown names are kept as given."""
        upper = name.upper()
        return upper if upper in cls.ALGORITHM_NAMES else name


# =============================
# Enums
# =============================

class ActionMode(Enum):
    """
    Operation applied by the `action` command to a working index.
    """
    DISTINCT = "distinct"
    DUPLICATE = "duplicate"
    UNIQUE = "unique"
    DELETE = "delete"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            ActionMode.DISTINCT: "Distinct",
            ActionMode.DUPLICATE: "Duplicate",
            ActionMode.UNIQUE: "Unique",
            ActionMode.DELETE: "Delete",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            ActionMode.DISTINCT:
                "One file per content (first occurrence), minus contents of the second index",
            ActionMode.DUPLICATE:
                "Every second-or-later occurrence of a content (second index counts as first)",
            ActionMode.UNIQUE:
                "Files whose content appears exactly once and never in the second index",
            ActionMode.DELETE:
                "Delete from disk the files of the first index listed in the second index",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class Fingerprint:
    """
    Content identity of a file: byte length plus encoded digest.
    Two files with equal fingerprints are duplicates.
    """
    size: int  # bytes actually read while hashing
    digest: str

    def __post_init__(self):
        if not isinstance(self.size, int) or self.size < 0:
            raise ValueError(f"Fingerprint size must be a non-negative integer, got {self.size!r}")
        if not isinstance(self.digest, str):
            raise ValueError("Fingerprint digest must be a string")

    def __repr__(self):
        return f"<Fingerprint size={self.size}, digest={self.digest}>"


class ChecksumIndex:
    """
    Mapping from file path to Fingerprint, tagged with the digest algorithm
    used to compute every fingerprint it holds.

    Entries keep insertion order, which is the enumeration order used by the
    set-algebra operations to pick "first occurrences". Paths are stored
    verbatim; two spellings of the same file are two entries.
    """

    def __init__(self, algorithm: str = IndexConfig.DEFAULT_ALGORITHM,
                 entries: Optional[Dict[str, Fingerprint]] = None):
        if not algorithm:
            raise ValueError("Algorithm name cannot be empty")
        self.algorithm = IndexConfig.canonical_algorithm(algorithm)
        self._entries: Dict[str, Fingerprint] = dict(entries) if entries else {}

    @property
    def entries(self) -> Dict[str, Fingerprint]:
        """Read-only view of the path -> fingerprint mapping (a copy)."""
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[Tuple[str, Fingerprint]]:
        return iter(list(self._entries.items()))

    def __eq__(self, other):
        if not isinstance(other, ChecksumIndex):
            return NotImplemented
        return self.algorithm == other.algorithm and self._entries == other._entries

    def __repr__(self):
        return f"<ChecksumIndex algorithm={self.algorithm}, entries={len(self._entries)}>"

    def get(self, path: str) -> Optional[Fingerprint]:
        return self._entries.get(path)

    def paths(self) -> List[str]:
        """Paths in enumeration order, without duplicates."""
        return list(self._entries)

    def fingerprints(self) -> Set[Fingerprint]:
        """Set of distinct fingerprints present in the index."""
        return set(self._entries.values())

    def total_size(self) -> int:
        return sum(fp.size for fp in self._entries.values())

    def sorted_by_path(self) -> "ChecksumIndex":
        """New index with the same entries, ordered lexicographically by path."""
        return ChecksumIndex(self.algorithm, dict(sorted(self._entries.items())))

    # Mutators below are used by the crawler, the codec and the deletion service.

    def add(self, path: str, fingerprint: Fingerprint) -> None:
        self._entries[path] = fingerprint

    def remove(self, path: str) -> Optional[Fingerprint]:
        return self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries.clear()

    def replace(self, algorithm: str, entries: Dict[str, Fingerprint]) -> None:
        """Replace algorithm and all entries at once."""
        if not algorithm:
            raise ValueError("Algorithm name cannot be empty")
        self.algorithm = IndexConfig.canonical_algorithm(algorithm)
        self._entries = dict(entries)


@dataclass
class DeletionReport:
    """
    Outcome of applying a deletion index to a target index.
    """
    deleted: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def processed_count(self) -> int:
        return len(self.deleted) + len(self.errors)


"""
DTOs for command parameters with built-in validation.
Interface-agnostic — used by the CLI and by library callers.
"""

@dataclass
class IndexParams:
    """Parameters for the index command with validation."""
    root_dirs: List[str]
    algorithm: str = IndexConfig.DEFAULT_ALGORITHM
    output_dir: str = "."
    sort_paths: bool = True

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dirs:
            raise ValueError("At least one directory is required")

        if any(not root for root in self.root_dirs):
            raise ValueError("Root directory cannot be empty")

        if not self.algorithm:
            raise ValueError("Algorithm name cannot be empty")

        if not self.output_dir:
            raise ValueError("Output directory cannot be empty")


@dataclass
class ActionParams:
    """Parameters for the action command with validation."""
    mode: ActionMode
    working_file: str
    against_file: Optional[str] = None
    output_dir: Optional[str] = None
    use_trash: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not isinstance(self.mode, ActionMode):
            raise ValueError(f"Unknown action mode: {self.mode!r}")

        if self.against_file is None:
            self.against_file = self.working_file

        for name in (self.working_file, self.against_file):
            if not name or not name.endswith(IndexConfig.FILE_EXTENSION):
                raise ValueError(f"{name} must be a {IndexConfig.FILE_EXTENSION} file")
            if not os.path.isfile(name):
                raise ValueError(f"Index file not found: {name}")

    @property
    def is_self_comparison(self) -> bool:
        """True when the working file is compared against itself."""
        return self.against_file == self.working_file

    def output_path(self) -> str:
        """Export path: '<working stem>-<mode><ext>' next to the working file or in output_dir."""
        stem, _ = os.path.splitext(self.working_file)
        if self.output_dir:
            stem = os.path.join(self.output_dir, os.path.basename(stem))
        return f"{stem}-{self.mode.value}{IndexConfig.FILE_EXTENSION}"
