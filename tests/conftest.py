"""
Shared fixtures for index engine tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict

from fsum.core.models import ChecksumIndex, Fingerprint


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for index scenarios:
    - 2 identical files (duplicates, 1KB of 'A')
    - 2 identical files (duplicates, 2KB of 'B')
    - 2 unique files (different content)
    - 1 empty file (indexed like any regular file)
    - 1 file in a subdirectory with the same content as the first pair
    """
    files = {}

    # Duplicate pair #1 (1KB of 'A')
    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    # Duplicate pair #2 (2KB of 'B')
    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    # Unique files
    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.bin"
    files["unique2"].write_bytes(b"D" * 2500)

    # Empty file
    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    # Subdirectory with duplicates
    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)  # Same as dup1_a/b

    return files


@pytest.fixture
def index_a() -> ChecksumIndex:
    """f1 and f2 share content, f3 is different."""
    index = ChecksumIndex("SHA-256")
    index.add("f1", Fingerprint(10, "aaa"))
    index.add("f2", Fingerprint(10, "aaa"))
    index.add("f3", Fingerprint(20, "bbb"))
    return index


@pytest.fixture
def baseline_b() -> ChecksumIndex:
    """Baseline holding the content of f1/f2 under another path."""
    index = ChecksumIndex("SHA-256")
    index.add("g1", Fingerprint(10, "aaa"))
    return index
