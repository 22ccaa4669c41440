"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/set_algebra.py
Derives sub-indexes from one index, optionally relative to a baseline index.

All functions are pure: inputs are never mutated and the result carries the
algorithm of the first argument. "First occurrence" always means first in the
iterating index's own enumeration order.

  duplicates : every second-or-later occurrence of a fingerprint
  distinct   : one representative per fingerprint
  unique     : entries whose fingerprint occurs exactly once

With a baseline, every baseline fingerprint counts as already seen.
"""

from collections import Counter
from typing import Optional, Set

from fsum.core.errors import AlgorithmMismatchError
from fsum.core.models import ChecksumIndex, Fingerprint


def _seed(index: ChecksumIndex, baseline: Optional[ChecksumIndex]) -> Set[Fingerprint]:
    if baseline is None:
        return set()
    if baseline.algorithm != index.algorithm:
        raise AlgorithmMismatchError(index.algorithm, baseline.algorithm)
    return baseline.fingerprints()


def duplicates(index: ChecksumIndex, baseline: Optional[ChecksumIndex] = None) -> ChecksumIndex:
    """
    Entries of `index` whose fingerprint was already seen, either earlier in
    `index` or anywhere in `baseline`. Baseline entries never appear.
    """
    seen = _seed(index, baseline)
    result = ChecksumIndex(index.algorithm)
    for path, fingerprint in index:
        if fingerprint in seen:
            result.add(path, fingerprint)
        else:
            seen.add(fingerprint)
    return result


def distinct(index: ChecksumIndex, baseline: Optional[ChecksumIndex] = None) -> ChecksumIndex:
    """
    First occurrence in `index` of every fingerprint absent from `baseline`.
    """
    included = _seed(index, baseline)
    result = ChecksumIndex(index.algorithm)
    for path, fingerprint in index:
        if fingerprint not in included:
            included.add(fingerprint)
            result.add(path, fingerprint)
    return result


def unique(index: ChecksumIndex, baseline: Optional[ChecksumIndex] = None) -> ChecksumIndex:
    """
    Entries whose fingerprint occurs exactly once in `index` and never in `baseline`.
    """
    excluded = _seed(index, baseline)
    counts = Counter(fingerprint for _, fingerprint in index)
    result = ChecksumIndex(index.algorithm)
    for path, fingerprint in index:
        if counts[fingerprint] == 1 and fingerprint not in excluded:
            result.add(path, fingerprint)
    return result
