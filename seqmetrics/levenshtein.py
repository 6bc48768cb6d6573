"""Levenshtein distance, its normalized forms and edit-operation alignment."""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass

from seqmetrics.common import ceil_div, remove_common_affix
from seqmetrics.editops import EditOp, Editops, EditType, LevenshteinWeightTable
from seqmetrics.levenshtein_core import (
    LevenshteinMatrix,
    generalized_levenshtein_distance,
    hyrroe2003_matrix,
    levenshtein_maximum,
    levenshtein_row,
    uniform_levenshtein_distance,
)

_UNIT_WEIGHTS = LevenshteinWeightTable(1, 1, 1)


@dataclass(frozen=True)
class HirschbergPos:
    """Split point of an optimal alignment and the cost of both halves."""

    left_score: int
    right_score: int
    s1_mid: int
    s2_mid: int


def _limit(value: int, max_dist: int | None) -> int:
    if max_dist is None or value <= max_dist:
        return value
    return max_dist + 1


def _weights(weights: LevenshteinWeightTable | None) -> LevenshteinWeightTable:
    return _UNIT_WEIGHTS if weights is None else weights


def _scaled(value: int | None, factor: int) -> int | None:
    return None if value is None else ceil_div(value, factor)


def _lcs_length(s1: Sequence[Hashable], s2: Sequence[Hashable]) -> int:
    if not s1 or not s2:
        return 0
    masks: dict[Hashable, int] = {}
    for pos, ch in enumerate(s1):
        masks[ch] = masks.get(ch, 0) | (1 << pos)
    full = (1 << len(s1)) - 1
    state = full
    for ch in s2:
        matches = state & masks.get(ch, 0)
        state = ((state + matches) | (state - matches)) & full
    return len(s1) - state.bit_count()


def _indel_distance(s1: Sequence, s2: Sequence, score_cutoff: int | None) -> int:
    return _limit(len(s1) + len(s2) - 2 * _lcs_length(s1, s2), score_cutoff)


def levenshtein_distance(
    s1: Sequence,
    s2: Sequence,
    weights: LevenshteinWeightTable | None = None,
    score_cutoff: int | None = None,
    score_hint: int | None = None,
) -> int:
    """Weighted Levenshtein distance; ``score_cutoff + 1`` when it is exceeded."""
    weights = _weights(weights)
    if weights.insert_cost == weights.delete_cost:
        cost = weights.insert_cost
        if cost == 0:
            return 0
        if cost == weights.replace_cost:
            distance = uniform_levenshtein_distance(
                s1, s2, _scaled(score_cutoff, cost), _scaled(score_hint, cost)
            )
            return _limit(distance * cost, score_cutoff)
        if weights.replace_cost >= weights.insert_cost + weights.delete_cost:
            distance = _indel_distance(s1, s2, _scaled(score_cutoff, cost))
            return _limit(distance * cost, score_cutoff)
    return generalized_levenshtein_distance(s1, s2, weights, score_cutoff)


def levenshtein_similarity(
    s1: Sequence,
    s2: Sequence,
    weights: LevenshteinWeightTable | None = None,
    score_cutoff: int = 0,
    score_hint: int | None = None,
) -> int:
    """Maximum possible distance minus the distance; 0 below ``score_cutoff``."""
    weights = _weights(weights)
    maximum = levenshtein_maximum(len(s1), len(s2), weights)
    if score_cutoff > maximum:
        return 0
    cutoff_distance = maximum - score_cutoff
    hint_distance = None if score_hint is None else maximum - min(score_cutoff, score_hint)
    distance = levenshtein_distance(s1, s2, weights, cutoff_distance, hint_distance)
    similarity = maximum - distance
    return similarity if similarity >= score_cutoff else 0


def levenshtein_normalized_distance(
    s1: Sequence,
    s2: Sequence,
    weights: LevenshteinWeightTable | None = None,
    score_cutoff: float = 1.0,
    score_hint: float = 1.0,
) -> float:
    """Distance divided by its maximum; 1.0 when above ``score_cutoff``."""
    weights = _weights(weights)
    maximum = levenshtein_maximum(len(s1), len(s2), weights)
    cutoff_distance = math.ceil(maximum * score_cutoff)
    hint_distance = math.ceil(maximum * score_hint)
    distance = levenshtein_distance(s1, s2, weights, cutoff_distance, hint_distance)
    norm_dist = distance / maximum if maximum else 0.0
    return norm_dist if norm_dist <= score_cutoff else 1.0


def levenshtein_normalized_similarity(
    s1: Sequence,
    s2: Sequence,
    weights: LevenshteinWeightTable | None = None,
    score_cutoff: float = 0.0,
    score_hint: float = 0.0,
) -> float:
    """One minus the normalized distance; 0.0 below ``score_cutoff``."""
    cutoff_score = min(1.0, 1.0 - score_cutoff + 1e-5)
    hint_score = min(1.0, 1.0 - score_hint + 1e-5)
    norm_dist = levenshtein_normalized_distance(s1, s2, weights, cutoff_score, hint_score)
    norm_sim = 1.0 - norm_dist
    return norm_sim if norm_sim >= score_cutoff else 0.0


def _try_hirschberg_pos(s1: Sequence, s2: Sequence, max_dist: int | None) -> HirschbergPos | None:
    len1 = len(s1)
    left_size = len(s2) // 2
    right_size = len(s2) - left_size

    right_row = levenshtein_row(s1[::-1], s2[::-1], max_dist, right_size - 1)
    if max_dist is not None and right_row.dist > max_dist:
        return None
    left_row = levenshtein_row(s1, s2, max_dist, left_size - 1)
    if max_dist is not None and left_row.dist > max_dist:
        return None

    s1_mid, left_score = min(enumerate(left_row.scores), key=lambda item: item[1] + right_row.scores[len1 - item[0]])
    right_score = right_row.scores[len1 - s1_mid]
    if max_dist is not None and left_score + right_score > max_dist:
        return None
    return HirschbergPos(left_score, right_score, s1_mid, left_size)


def find_hirschberg_pos(s1: Sequence, s2: Sequence, max_dist: int | None = None) -> HirschbergPos:
    """Find where an optimal alignment crosses the middle row of ``s2``.

    Both sequences need at least two elements. A ``max_dist`` that is too
    small is doubled until the alignment fits.
    """
    if len(s1) < 2 or len(s2) < 2:
        raise ValueError("both sequences need at least two elements")
    while True:
        pos = _try_hirschberg_pos(s1, s2, max_dist)
        if pos is not None:
            return pos
        assert max_dist is not None
        max_dist = max(2 * max_dist, 1)


def _recover_alignment(
    s1: Sequence, s2: Sequence, matrix: LevenshteinMatrix, src_pos: int, dest_pos: int
) -> list[EditOp]:
    ops: list[EditOp] = []
    col, row = len(s1), len(s2)

    while row and col:
        if (matrix.vp[row - 1] >> (col - 1)) & 1:
            col -= 1
            ops.append(EditOp(EditType.DELETE, col + src_pos, row + dest_pos))
            continue
        row -= 1
        if row and (matrix.vn[row - 1] >> (col - 1)) & 1:
            ops.append(EditOp(EditType.INSERT, col + src_pos, row + dest_pos))
        else:
            col -= 1
            if s1[col] != s2[row]:
                ops.append(EditOp(EditType.REPLACE, col + src_pos, row + dest_pos))

    while col:
        col -= 1
        ops.append(EditOp(EditType.DELETE, col + src_pos, row + dest_pos))
    while row:
        row -= 1
        ops.append(EditOp(EditType.INSERT, col + src_pos, row + dest_pos))

    ops.reverse()
    return ops


def _align(
    s1: Sequence, s2: Sequence, max_dist: int | None, src_pos: int, dest_pos: int
) -> list[EditOp]:
    upper = max(len(s1), len(s2))
    max_dist = upper if max_dist is None else min(max_dist, upper)

    if not s1 or not s2:
        matrix = LevenshteinMatrix(len(s1) + len(s2))
    else:
        matrix = hyrroe2003_matrix(s1, s2)

    if matrix.dist > max_dist:
        raise ValueError("distance exceeds max_dist")
    if matrix.dist == 0:
        return []
    return _recover_alignment(s1, s2, matrix, src_pos, dest_pos)


def levenshtein_align(s1: Sequence, s2: Sequence, max_dist: int | None = None) -> Editops:
    """Edit operations of an optimal alignment, found from the full matrix.

    Raises ValueError when the distance exceeds ``max_dist``.
    """
    return Editops(_align(s1, s2, max_dist, 0, 0), len(s1), len(s2))


def _align_hirschberg(
    s1: Sequence, s2: Sequence, src_pos: int, dest_pos: int, max_dist: int | None
) -> list[EditOp]:
    s1, s2, affix = remove_common_affix(s1, s2)
    src_pos += affix.prefix_len
    dest_pos += affix.prefix_len

    upper = max(len(s1), len(s2))
    max_dist = upper if max_dist is None else min(max_dist, upper)
    full_band = min(len(s1), 2 * max_dist + 1)
    matrix_size = 2 * full_band * len(s2) // 8

    if matrix_size < 1024 * 1024 or len(s1) < 65 or len(s2) < 10:
        return _align(s1, s2, max_dist, src_pos, dest_pos)

    hpos = find_hirschberg_pos(s1, s2, max_dist)
    left = _align_hirschberg(
        s1[: hpos.s1_mid], s2[: hpos.s2_mid], src_pos, dest_pos, hpos.left_score
    )
    right = _align_hirschberg(
        s1[hpos.s1_mid :],
        s2[hpos.s2_mid :],
        src_pos + hpos.s1_mid,
        dest_pos + hpos.s2_mid,
        hpos.right_score,
    )
    return left + right


def levenshtein_editops(s1: Sequence, s2: Sequence, score_hint: int | None = None) -> Editops:
    """Edit operations turning ``s1`` into ``s2`` with unit costs.

    Large inputs are split with Hirschberg's algorithm to bound memory use.
    """
    score_cutoff = max(len(s1), len(s2))
    if score_hint is not None:
        score_hint = max(score_hint, 31)
        if 2 * score_hint < score_cutoff:
            score_cutoff = levenshtein_distance(s1, s2, _UNIT_WEIGHTS, score_cutoff, score_hint)
    return Editops(_align_hirschberg(s1, s2, 0, 0, score_cutoff), len(s1), len(s2))


class CachedLevenshtein:
    """Compares one fixed sequence against many others."""

    def __init__(self, s1: Iterable, weights: LevenshteinWeightTable | None = None) -> None:
        self.s1: Sequence = s1 if isinstance(s1, Sequence) else tuple(s1)
        self.weights = _weights(weights)

    def distance(
        self, s2: Sequence, score_cutoff: int | None = None, score_hint: int | None = None
    ) -> int:
        """Weighted distance to ``s2``."""
        return levenshtein_distance(self.s1, s2, self.weights, score_cutoff, score_hint)

    def similarity(self, s2: Sequence, score_cutoff: int = 0, score_hint: int | None = None) -> int:
        """Weighted similarity to ``s2``."""
        return levenshtein_similarity(self.s1, s2, self.weights, score_cutoff, score_hint)

    def normalized_distance(
        self, s2: Sequence, score_cutoff: float = 1.0, score_hint: float = 1.0
    ) -> float:
        """Normalized distance to ``s2``."""
        return levenshtein_normalized_distance(self.s1, s2, self.weights, score_cutoff, score_hint)

    def normalized_similarity(
        self, s2: Sequence, score_cutoff: float = 0.0, score_hint: float = 0.0
    ) -> float:
        """Normalized similarity to ``s2``."""
        return levenshtein_normalized_similarity(
            self.s1, s2, self.weights, score_cutoff, score_hint
        )