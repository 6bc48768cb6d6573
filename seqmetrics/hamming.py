"""Hamming distance with optional padding of the shorter sequence."""

from __future__ import annotations

import math
import operator
from collections.abc import Iterable, Sequence

from seqmetrics.editops import EditOp, Editops, EditType


def _check_lengths(s1: Sequence, s2: Sequence, pad: bool) -> None:
    if not pad and len(s1) != len(s2):
        raise ValueError("Sequences are not the same length.")


def _limit(value: int, score_cutoff: int | None) -> int:
    if score_cutoff is None or value <= score_cutoff:
        return value
    return score_cutoff + 1


def hamming_distance(
    s1: Sequence, s2: Sequence, pad: bool = True, score_cutoff: int | None = None
) -> int:
    """Positions that differ, counting padding as differences.

    Raises ValueError when ``pad`` is false and the lengths differ.
    """
    _check_lengths(s1, s2, pad)
    matches = sum(map(operator.eq, s1, s2))
    return _limit(max(len(s1), len(s2)) - matches, score_cutoff)


def hamming_similarity(s1: Sequence, s2: Sequence, pad: bool = True, score_cutoff: int = 0) -> int:
    """Longer length minus the distance; 0 below ``score_cutoff``."""
    maximum = max(len(s1), len(s2))
    _check_lengths(s1, s2, pad)
    if score_cutoff > maximum:
        return 0
    sim = maximum - hamming_distance(s1, s2, pad, maximum - score_cutoff)
    return sim if sim >= score_cutoff else 0


def hamming_normalized_distance(
    s1: Sequence, s2: Sequence, pad: bool = True, score_cutoff: float = 1.0
) -> float:
    """Distance divided by the longer length; 1.0 when above ``score_cutoff``."""
    maximum = max(len(s1), len(s2))
    dist = hamming_distance(s1, s2, pad, math.ceil(maximum * score_cutoff))
    norm_dist = dist / maximum if maximum else 0.0
    return norm_dist if norm_dist <= score_cutoff else 1.0


def hamming_normalized_similarity(
    s1: Sequence, s2: Sequence, pad: bool = True, score_cutoff: float = 0.0
) -> float:
    """One minus the normalized distance; 0.0 below ``score_cutoff``."""
    cutoff_score = min(1.0, 1.0 - score_cutoff + 1e-5)
    norm_sim = 1.0 - hamming_normalized_distance(s1, s2, pad, cutoff_score)
    return norm_sim if norm_sim >= score_cutoff else 0.0


def hamming_editops(
    s1: Sequence, s2: Sequence, pad: bool = True, score_hint: int | None = None
) -> Editops:
    """Replacements at differing positions, then deletions or insertions for padding."""
    _check_lengths(s1, s2, pad)
    len1, len2 = len(s1), len(s2)
    ops = [
        EditOp(EditType.REPLACE, i, i) for i, (a, b) in enumerate(zip(s1, s2)) if a != b
    ]
    min_len = min(len1, len2)
    ops.extend(EditOp(EditType.DELETE, i, len2) for i in range(min_len, len1))
    ops.extend(EditOp(EditType.INSERT, len1, i) for i in range(min_len, len2))
    return Editops(ops, len1, len2)


class CachedHamming:
    """Compares one fixed sequence against many others."""

    def __init__(self, s1: Iterable, pad: bool = True) -> None:
        self.s1: Sequence = s1 if isinstance(s1, Sequence) else tuple(s1)
        self.pad = pad

    def distance(self, s2: Sequence, score_cutoff: int | None = None) -> int:
        """Hamming distance to ``s2``."""
        return hamming_distance(self.s1, s2, self.pad, score_cutoff)

    def similarity(self, s2: Sequence, score_cutoff: int = 0) -> int:
        """Hamming similarity to ``s2``."""
        return hamming_similarity(self.s1, s2, self.pad, score_cutoff)

    def normalized_distance(self, s2: Sequence, score_cutoff: float = 1.0) -> float:
        """Normalized Hamming distance to ``s2``."""
        return hamming_normalized_distance(self.s1, s2, self.pad, score_cutoff)

    def normalized_similarity(self, s2: Sequence, score_cutoff: float = 0.0) -> float:
        """Normalized Hamming similarity to ``s2``."""
        return hamming_normalized_similarity(self.s1, s2, self.pad, score_cutoff)