"""Core algorithms for the uniform and the weighted Levenshtein distance.

The bit-parallel algorithms store one bit per element of the pattern
sequence in a Python integer, so they are not limited to 64 elements.
Where an algorithm works on a fixed-width window (the small band variant)
all arithmetic is kept to 64-bit words.
"""

from __future__ import annotations

import operator
from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass
from itertools import accumulate, islice

from seqmetrics.common import remove_common_affix
from seqmetrics.editops import LevenshteinWeightTable

_MASK64 = (1 << 64) - 1
_HIGH_BIT = 1 << 63

# Encoded mbleven models: each byte holds up to four operations of two bits,
# 01 = delete, 10 = insert, 11 = substitute. Rows are indexed by the maximum
# distance and the length difference of the two sequences.
_MBLEVEN2018_MATRIX: tuple[tuple[int, ...], ...] = (
    # max edit distance 1
    (0x03,),  # len_diff 0
    (0x01,),  # len_diff 1
    # max edit distance 2
    (0x0F, 0x09, 0x06),  # len_diff 0
    (0x0D, 0x07),  # len_diff 1
    (0x05,),  # len_diff 2
    # max edit distance 3
    (0x3F, 0x27, 0x2D, 0x39, 0x36, 0x1E, 0x1B),  # len_diff 0
    (0x3D, 0x37, 0x1F, 0x25, 0x19, 0x16),  # len_diff 1
    (0x35, 0x1D, 0x17),  # len_diff 2
    (0x15,),  # len_diff 3
)


@dataclass(frozen=True)
class LevenshteinMatrix:
    """Distance plus the vertical delta vectors of every row.

    ``vp[row]`` has bit ``col`` set when ``D[row+1][col+1] - D[row+1][col] == 1``
    and ``vn[row]`` when that difference is ``-1``; rows follow ``s2`` and
    bits follow ``s1``.
    """

    dist: int
    vp: tuple[int, ...] = ()
    vn: tuple[int, ...] = ()


@dataclass(frozen=True)
class LevenshteinRow:
    """One row of the Levenshtein matrix.

    ``scores[col]`` is the distance between ``s1[:col]`` and the prefix of
    ``s2`` ending at the requested row. ``dist`` is 0 when an alignment within
    the maximum may pass through this row and ``max_dist + 1`` otherwise.
    """

    scores: tuple[int, ...]
    dist: int


def _limit(value: int, max_dist: int | None) -> int:
    if max_dist is None or value <= max_dist:
        return value
    return max_dist + 1


def _equal(s1: Sequence, s2: Sequence) -> bool:
    return len(s1) == len(s2) and all(map(operator.eq, s1, s2))


def _shr64(value: int, shift: int) -> int:
    return value >> shift if shift < 64 else 0


def _pattern_masks(s: Sequence[Hashable]) -> dict[Hashable, int]:
    masks: dict[Hashable, int] = {}
    for pos, ch in enumerate(s):
        masks[ch] = masks.get(ch, 0) | (1 << pos)
    return masks


def levenshtein_maximum(len1: int, len2: int, weights: LevenshteinWeightTable) -> int:
    """Largest distance possible for sequences of these lengths."""
    max_dist = len1 * weights.delete_cost + len2 * weights.insert_cost
    if len1 >= len2:
        return min(max_dist, len2 * weights.replace_cost + (len1 - len2) * weights.delete_cost)
    return min(max_dist, len1 * weights.replace_cost + (len2 - len1) * weights.insert_cost)


def levenshtein_min_distance(s1: Sequence, s2: Sequence, weights: LevenshteinWeightTable) -> int:
    """Smallest distance possible given only the lengths of both sequences."""
    if len(s1) > len(s2):
        return (len(s1) - len(s2)) * weights.delete_cost
    return (len(s2) - len(s1)) * weights.insert_cost


def generalized_wagner_fischer(
    s1: Sequence, s2: Sequence, weights: LevenshteinWeightTable, max_dist: int | None = None
) -> int:
    """Weighted Levenshtein distance by dynamic programming over one row."""
    cache = [i * weights.delete_cost for i in range(len(s1) + 1)]
    for ch2 in s2:
        temp = cache[0]
        cache[0] += weights.insert_cost
        for i, ch1 in enumerate(s1, 1):
            if ch1 != ch2:
                temp = min(
                    cache[i - 1] + weights.delete_cost,
                    cache[i] + weights.insert_cost,
                    temp + weights.replace_cost,
                )
            cache[i], temp = temp, cache[i]
    return _limit(cache[-1], max_dist)


def generalized_levenshtein_distance(
    s1: Sequence, s2: Sequence, weights: LevenshteinWeightTable, max_dist: int | None = None
) -> int:
    """Weighted Levenshtein distance with a length bound and affix trimming."""
    if max_dist is not None and levenshtein_min_distance(s1, s2, weights) > max_dist:
        return max_dist + 1
    s1, s2, _ = remove_common_affix(s1, s2)
    return generalized_wagner_fischer(s1, s2, weights, max_dist)


def mbleven2018(s1: Sequence, s2: Sequence, max_dist: int) -> int:
    """Uniform distance for ``max_dist`` of 1 to 3 by trying every edit model.

    Both sequences must be non-empty and differ in their first and last
    elements (the common affix has to be removed first).
    """
    if not 1 <= max_dist <= 3:
        raise ValueError("mbleven requires a maximum distance between 1 and 3")
    if not s1 or not s2:
        raise ValueError("mbleven requires non-empty sequences")
    if s1[0] == s2[0] or s1[-1] == s2[-1]:
        raise ValueError("mbleven requires the common affix to be removed")

    if len(s1) < len(s2):
        s1, s2 = s2, s1
    len1, len2 = len(s1), len(s2)
    len_diff = len1 - len2

    if len_diff > max_dist:
        return max_dist + 1
    if max_dist == 1:
        return max_dist + int(len_diff == 1 or len1 != 1)

    possible_ops = _MBLEVEN2018_MATRIX[(max_dist + max_dist * max_dist) // 2 + len_diff - 1]
    dist = max_dist + 1
    for ops in possible_ops:
        i = j = cur_dist = 0
        while i < len1 and j < len2:
            if s1[i] != s2[j]:
                cur_dist += 1
                if not ops:
                    break
                if ops & 1:
                    i += 1
                if ops & 2:
                    j += 1
                ops >>= 2
            else:
                i += 1
                j += 1
        cur_dist += (len1 - i) + (len2 - j)
        dist = min(dist, cur_dist)

    return _limit(dist, max_dist)


def _hyrroe_rows(s1: Sequence, s2: Sequence) -> Iterator[tuple[int, int, int]]:
    """Yield ``(vp, vn, D[len(s1)][row + 1])`` for every element of ``s2``."""
    if not s1:
        for row, _ in enumerate(s2):
            yield 0, 0, row + 1
        return

    masks = _pattern_masks(s1)
    full = (1 << len(s1)) - 1
    last = 1 << (len(s1) - 1)
    vp, vn = full, 0
    dist = len(s1)

    for ch in s2:
        x = masks.get(ch, 0)
        d0 = ((((x & vp) + vp) ^ vp) | x | vn) & full
        hp = vn | (~(d0 | vp) & full)
        hn = d0 & vp

        if hp & last:
            dist += 1
        if hn & last:
            dist -= 1

        hp = ((hp << 1) | 1) & full
        hn = (hn << 1) & full
        vp = hn | (~(d0 | hp) & full)
        vn = hp & d0
        yield vp, vn, dist


def hyrroe2003(s1: Sequence, s2: Sequence, max_dist: int | None = None) -> int:
    """Uniform Levenshtein distance by Hyyrö's bit-parallel algorithm.

    Stops early once the remaining elements of ``s2`` can no longer bring
    the distance down to ``max_dist``.
    """
    dist = len(s2) if not s1 else len(s1)
    remaining = len(s2)
    for _, _, dist in _hyrroe_rows(s1, s2):
        remaining -= 1
        if max_dist is not None and dist - remaining > max_dist:
            return max_dist + 1
    return _limit(dist, max_dist)


def hyrroe2003_matrix(s1: Sequence, s2: Sequence) -> LevenshteinMatrix:
    """Uniform distance together with the delta vectors of every row."""
    vps: list[int] = []
    vns: list[int] = []
    dist = len(s1)
    for vp, vn, dist in _hyrroe_rows(s1, s2):
        vps.append(vp)
        vns.append(vn)
    return LevenshteinMatrix(dist, tuple(vps), tuple(vns))


def hyrroe2003_small_band(s1: Sequence, s2: Sequence, max_dist: int) -> int:
    """Uniform distance computed only inside a diagonal band of 64 cells.

    Requires ``2 * max_dist + 1 <= 64``, ``max_dist`` no larger than either
    length and ``len(s2) >= len(s1) - max_dist``.
    """
    len1, len2 = len(s1), len(s2)
    if 2 * max_dist + 1 > 64:
        raise ValueError("band is wider than 64 elements")
    if max_dist < 0 or max_dist > len1 or max_dist > len2 or len2 < len1 - max_dist:
        raise ValueError("sequence lengths do not fit into the band")

    vp = (_MASK64 << (63 - max_dist)) & _MASK64
    vn = 0
    dist = max_dist
    horizontal_mask = 1 << 62
    break_score = 2 * max_dist + len2 - len1

    # element -> (position of the last update, bits shifted to that position)
    masks: dict[Hashable, tuple[int, int]] = {}

    def update(ch: Hashable, pos: int) -> None:
        last_pos, bits = masks.get(ch, (pos, 0))
        masks[ch] = (pos, _shr64(bits, pos - last_pos) | _HIGH_BIT)

    def lookup(ch: Hashable, pos: int) -> int:
        entry = masks.get(ch)
        if entry is None:
            return 0
        last_pos, bits = entry
        return _shr64(bits, pos - last_pos)

    for pos, ch in enumerate(s1[:max_dist], -max_dist):
        update(ch, pos)

    diagonal_steps = len1 - max_dist
    for i, ch2 in enumerate(s2):
        if i + max_dist < len1:
            update(s1[i + max_dist], i)
        x = lookup(ch2, i)

        d0 = ((((x & vp) + vp) & _MASK64) ^ vp) | x | vn
        hp = vn | (~(d0 | vp) & _MASK64)
        hn = d0 & vp

        if i < diagonal_steps:
            if not d0 & _HIGH_BIT:
                dist += 1
        else:
            if hp & horizontal_mask:
                dist += 1
            if hn & horizontal_mask:
                dist -= 1
            horizontal_mask >>= 1

        if dist > break_score:
            return max_dist + 1

        vp = hn | (~((d0 >> 1) | hp) & _MASK64)
        vn = (d0 >> 1) & hp

    return _limit(dist, max_dist)


def levenshtein_row(
    s1: Sequence, s2: Sequence, max_dist: int | None = None, stop_row: int = 0
) -> LevenshteinRow:
    """Scores of the matrix row reached after ``s2[: stop_row + 1]``."""
    len1, len2 = len(s1), len(s2)
    if not 0 <= stop_row < len2:
        raise ValueError("stop_row lies outside of s2")
    if max_dist is not None and max_dist < abs(len1 - len2):
        return LevenshteinRow((), max_dist + 1)

    vp, vn, _ = next(islice(_hyrroe_rows(s1, s2), stop_row, None))
    scores = tuple(
        accumulate(
            (((vp >> col) & 1) - ((vn >> col) & 1) for col in range(len1)),
            initial=stop_row + 1,
        )
    )

    dist = 0
    if max_dist is not None:
        rest2 = len2 - stop_row - 1
        lower_bound = min(
            score + abs((len1 - col) - rest2) for col, score in enumerate(scores)
        )
        if lower_bound > max_dist:
            dist = max_dist + 1
    return LevenshteinRow(scores, dist)


def uniform_levenshtein_distance(
    s1: Sequence,
    s2: Sequence,
    score_cutoff: int | None = None,
    score_hint: int | None = None,
) -> int:
    """Levenshtein distance with unit costs; ``score_cutoff + 1`` when above it."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    upper = max(len(s1), len(s2))
    score_cutoff = upper if score_cutoff is None else min(score_cutoff, upper)
    score_hint = upper if score_hint is None else max(score_hint, 31)

    if score_cutoff == 0:
        return int(not _equal(s1, s2))

    if score_cutoff < len(s1) - len(s2):
        return score_cutoff + 1

    s1, s2, _ = remove_common_affix(s1, s2)
    if not s1 or not s2:
        return len(s1) + len(s2)

    if score_cutoff < 4:
        return mbleven2018(s1, s2, score_cutoff)

    full_band = min(len(s1), 2 * score_cutoff + 1)
    if len(s2) < 65:
        return hyrroe2003(s2, s1, score_cutoff)
    if full_band <= 64:
        return hyrroe2003_small_band(s1, s2, score_cutoff)

    while score_hint < score_cutoff:
        score = hyrroe2003(s1, s2, score_hint)
        if score <= score_hint:
            return score
        score_hint *= 2

    return hyrroe2003(s1, s2, score_cutoff)