"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/codec.py
Reads and writes the .fsum text format.

Layout (UTF-8, one field per line, no escaping):
    <algorithm>
    <entry count>
    <path>      \
    <digest>     > repeated <entry count> times
    <size>      /
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from fsum.core.errors import IndexDecodeError, IndexEncodeError
from fsum.core.models import ChecksumIndex, Fingerprint, IndexConfig

logger = logging.getLogger(__name__)

FILE_EXTENSION = IndexConfig.FILE_EXTENSION
ENCODING = "utf-8"
# Bytes that are not valid UTF-8 decode to surrogate escapes and encode back unchanged
ENCODING_ERRORS = "surrogateescape"

_FORBIDDEN = ("\n", "\r")


def encode(index: ChecksumIndex) -> bytes:
    """Serializes an index; raises IndexEncodeError for values containing line breaks."""
    _check_field("algorithm", index.algorithm)
    lines = [index.algorithm, str(len(index))]
    for path, fingerprint in index:
        _check_field("path", path)
        _check_field("digest", fingerprint.digest)
        lines.extend((path, fingerprint.digest, str(fingerprint.size)))
    text = "\n".join(lines) + "\n"
    return text.encode(ENCODING, ENCODING_ERRORS)


def decode(data: bytes, index: Optional[ChecksumIndex] = None) -> ChecksumIndex:
    """
    Parses .fsum content into `index` (replacing its algorithm and entries)
    or into a new index. The target is cleared before parsing starts, so a
    failed decode leaves it empty.
    """
    if index is None:
        index = ChecksumIndex()
    index.clear()

    text = data.decode(ENCODING, ENCODING_ERRORS)
    lines = _split_lines(text)
    if len(lines) < 2 or not lines[0]:
        raise IndexDecodeError("Missing index header (algorithm and entry count)")

    algorithm = lines[0]
    count = _parse_non_negative(lines[1], "entry count")

    expected = 2 + 3 * count
    if len(lines) < expected:
        raise IndexDecodeError(
            f"Truncated index: {count} entries declared, "
            f"only {(len(lines) - 2) // 3} complete entries found"
        )

    entries = {}
    for i in range(count):
        base = 2 + 3 * i
        path = lines[base]
        digest = lines[base + 1]
        size = _parse_non_negative(lines[base + 2], f"size of entry {i + 1}")
        entries[path] = Fingerprint(size=size, digest=digest)

    if len(entries) != count:
        logger.warning(f"Index declares {count} entries but holds {len(entries)} distinct paths")

    index.replace(algorithm, entries)
    return index


def export_to_file(index: ChecksumIndex, file_path: Union[str, Path]) -> None:
    """Writes the index, creating or truncating the file."""
    data = encode(index)
    Path(file_path).write_bytes(data)
    logger.debug(f"Exported {len(index)} entries to {file_path}")


def import_from_file(file_path: Union[str, Path], index: Optional[ChecksumIndex] = None) -> ChecksumIndex:
    """Reads an index file. OSError propagates; malformed content raises IndexDecodeError."""
    data = Path(file_path).read_bytes()
    try:
        index = decode(data, index)
    except IndexDecodeError as e:
        raise IndexDecodeError(f"{file_path}: {e}") from e
    logger.debug(f"Imported {len(index)} entries from {file_path}")
    return index


def _split_lines(text: str) -> List[str]:
    # Only \n separates fields; other Unicode line breaks may appear in paths
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def _parse_non_negative(value: str, what: str) -> int:
    # Plain ASCII decimal only: no sign, padding or underscores
    if _is_decimal(value):
        return int(value)
    if value.startswith("-") and _is_decimal(value[1:]):
        raise IndexDecodeError(f"Negative {what}: '{value}'")
    raise IndexDecodeError(f"Invalid {what}: '{value}'")


def _is_decimal(value: str) -> bool:
    return value.isascii() and value.isdigit()


def _check_field(what: str, value: str) -> None:
    if any(ch in value for ch in _FORBIDDEN):
        raise IndexEncodeError(f"Cannot encode {what} containing a line break: {value!r}")
