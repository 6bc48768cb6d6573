"""Sequence helpers shared by the metrics: affix trimming and bit tricks.

Sequences are any sliceable Python sequence (``str``, ``bytes``, ``list``,
``tuple``). Trimming never mutates its inputs: the trimmed views are
returned as new slices of the same type.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

S1 = TypeVar("S1", bound=Sequence)
S2 = TypeVar("S2", bound=Sequence)

_WORD_BITS = 64
_MASK64 = (1 << _WORD_BITS) - 1


@dataclass(frozen=True)
class StringAffix:
    """Lengths of a common prefix and a common suffix."""

    prefix_len: int = 0
    suffix_len: int = 0


def common_prefix_length(s1: Sequence, s2: Sequence) -> int:
    """Number of leading elements shared by ``s1`` and ``s2``."""
    length = 0
    for a, b in zip(s1, s2):
        if a != b:
            break
        length += 1
    return length


def common_suffix_length(s1: Sequence, s2: Sequence) -> int:
    """Number of trailing elements shared by ``s1`` and ``s2``."""
    length = 0
    for a, b in zip(reversed(s1), reversed(s2)):
        if a != b:
            break
        length += 1
    return length


def remove_common_prefix(s1: S1, s2: S2) -> tuple[S1, S2, int]:
    """Strip the shared prefix; return both remainders and its length."""
    length = common_prefix_length(s1, s2)
    return s1[length:], s2[length:], length


def remove_common_suffix(s1: S1, s2: S2) -> tuple[S1, S2, int]:
    """Strip the shared suffix; return both remainders and its length."""
    length = common_suffix_length(s1, s2)
    return s1[: len(s1) - length], s2[: len(s2) - length], length


def remove_common_affix(s1: S1, s2: S2) -> tuple[S1, S2, StringAffix]:
    """Strip the shared prefix, then the shared suffix of what remains."""
    s1, s2, prefix_len = remove_common_prefix(s1, s2)
    s1, s2, suffix_len = remove_common_suffix(s1, s2)
    return s1, s2, StringAffix(prefix_len, suffix_len)


def subseq(seq: S1, pos: int = 0, count: int | None = None) -> S1:
    """Return up to ``count`` elements of ``seq`` starting at ``pos``.

    Raises IndexError when ``pos`` lies past the end of ``seq``.
    """
    if pos < 0 or pos > len(seq):
        raise IndexError("index out of range in subseq")
    if count is None:
        return seq[pos:]
    if count < 0:
        raise ValueError("count must not be negative")
    return seq[pos : pos + count]


def bit_mask_lsb(n: int) -> int:
    """A 64-bit word with its lowest ``n`` bits set."""
    if n < 0:
        raise ValueError("bit count must not be negative")
    if n >= _WORD_BITS:
        return _MASK64
    return (1 << n) - 1


def _check_unsigned(x: int) -> None:
    if x < 0:
        raise ValueError("expected a non-negative integer")


def popcount(x: int) -> int:
    """Number of set bits in a non-negative integer."""
    _check_unsigned(x)
    return x.bit_count()


def blsi(x: int) -> int:
    """Isolate the lowest set bit; 0 when no bit is set."""
    _check_unsigned(x)
    return x & -x


def blsr(x: int) -> int:
    """Clear the lowest set bit."""
    _check_unsigned(x)
    return x & (x - 1)


def blsmsk(x: int) -> int:
    """Set all bits up to and including the lowest set bit.

    For zero every bit of the 64-bit word is set.
    """
    _check_unsigned(x)
    return (x ^ (x - 1)) & _MASK64 if x == 0 else x ^ (x - 1)


def countr_zero(x: int) -> int:
    """Number of trailing zero bits of a positive integer."""
    _check_unsigned(x)
    if x == 0:
        raise ValueError("trailing zeros of 0 are undefined")
    return (x & -x).bit_length() - 1


def ceil_div(a: int, divisor: int) -> int:
    """Integer division of non-negative ``a`` rounded up."""
    quotient, remainder = divmod(a, divisor)
    return quotient + (remainder != 0)