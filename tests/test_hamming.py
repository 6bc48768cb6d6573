import pytest
from hypothesis import given
from hypothesis import strategies as st

from seqmetrics.editops import EditOp, Editops, EditType
from seqmetrics.hamming import (
    CachedHamming,
    hamming_distance,
    hamming_editops,
    hamming_normalized_distance,
    hamming_normalized_similarity,
    hamming_similarity,
)

short_text = st.text(alphabet="abc", max_size=20)


def apply_editops(ops, s1, s2):
    result = []
    src = 0
    for op in ops:
        while src < op.src_pos:
            result.append(s1[src])
            src += 1
        if op.type is EditType.INSERT:
            result.append(s2[op.dest_pos])
        elif op.type is EditType.DELETE:
            src += 1
        elif op.type is EditType.REPLACE:
            result.append(s2[op.dest_pos])
            src += 1
    result.extend(s1[src:])
    return "".join(result)


def test_classic_example():
    assert hamming_distance("karolin", "kathrin") == 3
    assert CachedHamming("karolin").distance("kathrin") == 3


def test_single_replacement_editops():
    assert hamming_editops("abc", "abd") == Editops([EditOp(EditType.REPLACE, 2, 2)], 3, 3)


def test_equal_sequences():
    assert hamming_distance("test", "test") == 0
    assert hamming_normalized_similarity("test", "test") == 1.0
    assert len(hamming_editops("test", "test")) == 0


def test_without_padding_requires_equal_length():
    with pytest.raises(ValueError):
        hamming_distance("abc", "abcd", pad=False)
    with pytest.raises(ValueError):
        hamming_editops("abc", "abcd", pad=False)
    with pytest.raises(ValueError):
        CachedHamming("abc", pad=False).similarity("ab")


def test_normalized_cutoffs():
    assert hamming_normalized_distance("aaaa", "bbbb", score_cutoff=0.5) == 1.0
    assert hamming_normalized_similarity("aaaa", "bbbb", score_cutoff=0.5) == 0.0
    assert hamming_similarity("aaaa", "aaab", score_cutoff=4) == 0


def test_empty_sequences():
    assert hamming_distance("", "") == 0
    assert hamming_normalized_distance("", "") == 0.0


@given(short_text, short_text)
def test_symmetric(s1, s2):
    assert hamming_distance(s1, s2) == hamming_distance(s2, s1)


@given(short_text, short_text)
def test_distance_similarity_sum(s1, s2):
    assert hamming_distance(s1, s2) + hamming_similarity(s1, s2) == max(len(s1), len(s2))


@given(short_text, short_text, st.integers(min_value=0, max_value=25))
def test_cutoff(s1, s2, cutoff):
    full = hamming_distance(s1, s2)
    limited = hamming_distance(s1, s2, score_cutoff=cutoff)
    assert limited == (full if full <= cutoff else cutoff + 1)
    assert CachedHamming(s1).distance(s2, cutoff) == limited


@given(short_text, short_text)
def test_normalized_are_complementary(s1, s2):
    nd = hamming_normalized_distance(s1, s2)
    ns = hamming_normalized_similarity(s1, s2)
    assert 0.0 <= nd <= 1.0
    assert ns == pytest.approx(1.0 - nd)
    assert CachedHamming(s1).normalized_distance(s2) == pytest.approx(nd)
    assert CachedHamming(s1).normalized_similarity(s2) == pytest.approx(ns)


@given(short_text, short_text)
def test_editops_round_trip(s1, s2):
    ops = hamming_editops(s1, s2)
    assert ops.src_len == len(s1)
    assert ops.dest_len == len(s2)
    assert len(ops) == hamming_distance(s1, s2)
    assert apply_editops(ops, s1, s2) == s2


@given(st.text(alphabet="ab", min_size=5, max_size=5), st.text(alphabet="ab", min_size=5, max_size=5))
def test_equal_length_without_padding(s1, s2):
    assert hamming_distance(s1, s2, pad=False) == hamming_distance(s1, s2)
    assert all(op.type is EditType.REPLACE for op in hamming_editops(s1, s2, pad=False))