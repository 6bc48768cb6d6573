"""Longest common subsequence: similarity, distance and alignment."""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Sequence

from seqmetrics.common import remove_common_affix
from seqmetrics.editops import EditOp, Editops, EditType


def _pattern_masks(s: Iterable[Hashable]) -> dict[Hashable, int]:
    masks: dict[Hashable, int] = {}
    for pos, ch in enumerate(s):
        masks[ch] = masks.get(ch, 0) | (1 << pos)
    return masks


def _lcs_states(masks: dict[Hashable, int], len1: int, s2: Iterable[Hashable]):
    """Yield the bit state after each element of ``s2``.

    A cleared bit ``col`` marks a column where the LCS length grows.
    """
    full = (1 << len1) - 1
    state = full
    for ch in s2:
        matches = state & masks.get(ch, 0)
        state = ((state + matches) | (state - matches)) & full
        yield state


def _lcs_length(masks: dict[Hashable, int], len1: int, s2: Sequence) -> int:
    if not len1 or not s2:
        return 0
    state = (1 << len1) - 1
    for state in _lcs_states(masks, len1, s2):
        pass
    return len1 - state.bit_count()


def _similarity(masks: dict[Hashable, int], len1: int, s2: Sequence, score_cutoff: int) -> int:
    if score_cutoff > min(len1, len(s2)):
        return 0
    sim = _lcs_length(masks, len1, s2)
    return sim if sim >= score_cutoff else 0


def _distance(
    masks: dict[Hashable, int], len1: int, s2: Sequence, score_cutoff: int | None
) -> int:
    maximum = max(len1, len(s2))
    if score_cutoff is None or score_cutoff > maximum:
        cutoff_similarity = 0
    else:
        cutoff_similarity = maximum - score_cutoff
    dist = maximum - _similarity(masks, len1, s2, cutoff_similarity)
    if score_cutoff is None or dist <= score_cutoff:
        return dist
    return score_cutoff + 1


def _normalized_distance(
    masks: dict[Hashable, int], len1: int, s2: Sequence, score_cutoff: float
) -> float:
    maximum = max(len1, len(s2))
    cutoff_distance = math.ceil(maximum * score_cutoff)
    dist = _distance(masks, len1, s2, cutoff_distance)
    norm_dist = dist / maximum if maximum else 0.0
    return norm_dist if norm_dist <= score_cutoff else 1.0


def _normalized_similarity(
    masks: dict[Hashable, int], len1: int, s2: Sequence, score_cutoff: float
) -> float:
    cutoff_score = min(1.0, 1.0 - score_cutoff + 1e-5)
    norm_sim = 1.0 - _normalized_distance(masks, len1, s2, cutoff_score)
    return norm_sim if norm_sim >= score_cutoff else 0.0


def lcs_seq_similarity(s1: Sequence, s2: Sequence, score_cutoff: int = 0) -> int:
    """Length of the longest common subsequence; 0 below ``score_cutoff``."""
    return _similarity(_pattern_masks(s1), len(s1), s2, score_cutoff)


def lcs_seq_distance(s1: Sequence, s2: Sequence, score_cutoff: int | None = None) -> int:
    """Longer length minus the LCS length; ``score_cutoff + 1`` when above it."""
    return _distance(_pattern_masks(s1), len(s1), s2, score_cutoff)


def lcs_seq_normalized_distance(s1: Sequence, s2: Sequence, score_cutoff: float = 1.0) -> float:
    """Distance divided by the longer length; 1.0 when above ``score_cutoff``."""
    return _normalized_distance(_pattern_masks(s1), len(s1), s2, score_cutoff)


def lcs_seq_normalized_similarity(s1: Sequence, s2: Sequence, score_cutoff: float = 0.0) -> float:
    """One minus the normalized distance; 0.0 below ``score_cutoff``."""
    return _normalized_similarity(_pattern_masks(s1), len(s1), s2, score_cutoff)


def lcs_seq_editops(s1: Sequence, s2: Sequence) -> Editops:
    """Insertions and deletions turning ``s1`` into ``s2`` along an LCS."""
    t1, t2, affix = remove_common_affix(s1, s2)
    offset = affix.prefix_len
    len1 = len(t1)
    rows = list(_lcs_states(_pattern_masks(t1), len1, t2)) if len1 else []

    def lcs_at(row: int, col: int) -> int:
        if row == 0 or col == 0:
            return 0
        return col - (rows[row - 1] & ((1 << col) - 1)).bit_count()

    ops: list[EditOp] = []
    row, col = len(t2), len1
    while row and col:
        current = lcs_at(row, col)
        if current == lcs_at(row, col - 1):
            col -= 1
            ops.append(EditOp(EditType.DELETE, col + offset, row + offset))
        elif current == lcs_at(row - 1, col):
            row -= 1
            ops.append(EditOp(EditType.INSERT, col + offset, row + offset))
        else:
            row -= 1
            col -= 1

    while col:
        col -= 1
        ops.append(EditOp(EditType.DELETE, col + offset, row + offset))
    while row:
        row -= 1
        ops.append(EditOp(EditType.INSERT, col + offset, row + offset))

    ops.reverse()
    return Editops(ops, len(s1), len(s2))


class CachedLCSseq:
    """Compares one fixed sequence against many others."""

    def __init__(self, s1: Iterable) -> None:
        self.s1: Sequence = s1 if isinstance(s1, Sequence) else tuple(s1)
        self._masks = _pattern_masks(self.s1)

    def similarity(self, s2: Sequence, score_cutoff: int = 0) -> int:
        """LCS length with ``s2``."""
        return _similarity(self._masks, len(self.s1), s2, score_cutoff)

    def distance(self, s2: Sequence, score_cutoff: int | None = None) -> int:
        """LCS distance to ``s2``."""
        return _distance(self._masks, len(self.s1), s2, score_cutoff)

    def normalized_distance(self, s2: Sequence, score_cutoff: float = 1.0) -> float:
        """Normalized LCS distance to ``s2``."""
        return _normalized_distance(self._masks, len(self.s1), s2, score_cutoff)

    def normalized_similarity(self, s2: Sequence, score_cutoff: float = 0.0) -> float:
        """Normalized LCS similarity to ``s2``."""
        return _normalized_similarity(self._masks, len(self.s1), s2, score_cutoff)