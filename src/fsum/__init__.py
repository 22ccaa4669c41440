"""
fsum — content checksum indexes of directory trees.

Core features:
- Index directory trees into portable .fsum files (SHA-256 by default, xxHash optional)
- Duplicate / distinct / unique sub-indexes, optionally relative to a second index
- Guarded deletion of the files listed in an index (permanent or to system trash via send2trash)
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("fsum")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API: only what users should import directly
from fsum.commands import IndexCommand, ActionCommand, IndexResult, ActionResult
from fsum.core import (
    Fingerprint, ChecksumIndex, DeletionReport, ActionMode, IndexParams, ActionParams,
    FileCrawlerImpl, DigestComputerImpl, duplicates, distinct, unique,
    encode, decode, export_to_file, import_from_file)
from fsum.services import DeletionService, FileService

__all__ = [
    "IndexCommand",
    "ActionCommand",
    "IndexResult",
    "ActionResult",
    "Fingerprint",
    "ChecksumIndex",
    "DeletionReport",
    "ActionMode",
    "IndexParams",
    "ActionParams",
    "FileCrawlerImpl",
    "DigestComputerImpl",
    "duplicates",
    "distinct",
    "unique",
    "encode",
    "decode",
    "export_to_file",
    "import_from_file",
    "DeletionService",
    "FileService",
    "__version__",
]
