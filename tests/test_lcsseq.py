import pytest
from hypothesis import given
from hypothesis import strategies as st

from seqmetrics.editops import EditType
from seqmetrics.lcsseq import (
    CachedLCSseq,
    lcs_seq_distance,
    lcs_seq_editops,
    lcs_seq_normalized_distance,
    lcs_seq_normalized_similarity,
    lcs_seq_similarity,
)

short_text = st.text(alphabet="abcd", max_size=30)


def distance(s1, s2, max_dist=None):
    res = lcs_seq_distance(s1, s2, max_dist)
    assert lcs_seq_distance(list(s1), list(s2), max_dist) == res
    assert CachedLCSseq(s1).distance(s2, max_dist) == res
    assert CachedLCSseq(iter(s1)).distance(s2, max_dist) == res
    return res


def similarity(s1, s2, cutoff=0):
    res = lcs_seq_similarity(s1, s2, cutoff)
    assert lcs_seq_similarity(list(s1), list(s2), cutoff) == res
    assert CachedLCSseq(s1).similarity(s2, cutoff) == res
    return res


def normalized_distance(s1, s2, cutoff=1.0):
    res = lcs_seq_normalized_distance(s1, s2, cutoff)
    assert CachedLCSseq(s1).normalized_distance(s2, cutoff) == pytest.approx(res, abs=1e-4)
    return res


def normalized_similarity(s1, s2, cutoff=0.0):
    res = lcs_seq_normalized_similarity(s1, s2, cutoff)
    assert CachedLCSseq(s1).normalized_similarity(s2, cutoff) == pytest.approx(res, abs=1e-4)
    return res


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


def test_similar_strings():
    assert distance("aaaa", "aaaa") == 0
    assert similarity("aaaa", "aaaa") == 4
    assert normalized_distance("aaaa", "aaaa") == 0.0
    assert normalized_similarity("aaaa", "aaaa") == 1.0


def test_completely_different_strings():
    assert lcs_seq_distance("aaaa", "bbbb") == 4
    assert lcs_seq_similarity("aaaa", "bbbb") == 0
    assert lcs_seq_normalized_distance("aaaa", "bbbb") == 1.0
    assert lcs_seq_normalized_similarity("aaaa", "bbbb") == 0.0


def test_mbleven_south_north_korea():
    a, b = "South Korea", "North Korea"
    assert similarity(a, b) == 9
    assert similarity(a, b, 9) == 9
    assert similarity(a, b, 10) == 0

    assert distance(a, b) == 2
    assert distance(a, b, 4) == 2
    assert distance(a, b, 3) == 2
    assert distance(a, b, 2) == 2
    assert distance(a, b, 1) == 2
    assert distance(a, b, 0) == 1


def test_mbleven_aabc_cccd():
    a, b = "aabc", "cccd"
    assert similarity(a, b) == 1
    assert similarity(a, b, 1) == 1
    assert similarity(a, b, 2) == 0

    assert distance(a, b) == 3
    assert distance(a, b, 4) == 3
    assert distance(a, b, 3) == 3
    assert distance(a, b, 2) == 3
    assert distance(a, b, 1) == 2
    assert distance(a, b, 0) == 1


def test_cached_implementation():
    assert lcs_seq_similarity("001", "220") == 1
    assert CachedLCSseq("001").similarity("220") == 1


def test_long_sequences_beyond_word_size():
    s1 = "a" + "b" * 198 + "a"
    s2 = "b" * 200
    assert distance(s1, s2) == 2
    assert similarity(s1, s2) == 198


def test_empty_sequences():
    assert distance("", "") == 0
    assert normalized_similarity("", "") == 1.0
    assert distance("", "abc") == 3


def test_normalized_cutoffs():
    assert normalized_distance("aabc", "cccd", 0.5) == 1.0
    assert normalized_similarity("aabc", "cccd", 0.5) == 0.0


@given(short_text, short_text)
def test_distance_similarity_sum(s1, s2):
    assert distance(s1, s2) + similarity(s1, s2) == max(len(s1), len(s2))


@given(short_text, short_text)
def test_symmetric(s1, s2):
    assert lcs_seq_similarity(s1, s2) == lcs_seq_similarity(s2, s1)


@given(short_text, short_text)
def test_editops_round_trip(s1, s2):
    ops = lcs_seq_editops(s1, s2)
    assert ops.src_len == len(s1)
    assert ops.dest_len == len(s2)
    assert apply_editops(ops, s1, s2) == s2
    assert len(ops) == len(s1) + len(s2) - 2 * lcs_seq_similarity(s1, s2)
    assert all(op.type in (EditType.INSERT, EditType.DELETE) for op in ops)


def test_editops_long_round_trip():
    s1 = "ab" * 60 + "xyz" + "cd" * 40
    s2 = "ba" * 50 + "xz" + "dc" * 45
    ops = lcs_seq_editops(s1, s2)
    assert apply_editops(ops, s1, s2) == s2