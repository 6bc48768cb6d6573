import pytest
from hypothesis import given
from hypothesis import strategies as st

from seqmetrics.common import (
    StringAffix,
    bit_mask_lsb,
    blsi,
    blsmsk,
    blsr,
    ceil_div,
    common_prefix_length,
    common_suffix_length,
    countr_zero,
    popcount,
    remove_common_affix,
    remove_common_prefix,
    remove_common_suffix,
    subseq,
)

S1 = "aabbbbaaaa"
S2 = "aaabbbbaaaaa"


def test_remove_common_prefix():
    a, b, length = remove_common_prefix(S1, S2)
    assert length == 2
    assert a == "bbbbaaaa"
    assert b == "abbbbaaaaa"


def test_remove_common_suffix():
    a, b, length = remove_common_suffix(S1, S2)
    assert length == 4
    assert a == "aabbbb"
    assert b == "aaabbbba"


def test_remove_common_affix():
    a, b, affix = remove_common_affix(S1, S2)
    assert affix == StringAffix(prefix_len=2, suffix_len=4)
    assert a == "bbbb"
    assert b == "abbbba"


def test_affix_on_lists_keeps_type():
    a, b, affix = remove_common_affix([1, 2, 3, 4], [1, 5, 4])
    assert a == [2, 3]
    assert b == [5]
    assert affix == StringAffix(1, 1)


def test_identical_sequences_are_consumed_by_prefix():
    a, b, affix = remove_common_affix("abc", "abc")
    assert (a, b) == ("", "")
    assert affix == StringAffix(3, 0)


def test_common_lengths():
    assert common_prefix_length("abcd", "abxd") == 2
    assert common_suffix_length("abcd", "xbcd") == 3
    assert common_prefix_length("", "abc") == 0
    assert common_suffix_length(b"hello", b"jello") == 4


@given(st.text(alphabet="abc", max_size=20), st.text(alphabet="abc", max_size=20))
def test_affix_reconstructs_inputs(s1, s2):
    a, b, affix = remove_common_affix(s1, s2)
    p, s = affix.prefix_len, affix.suffix_len
    assert s1 == s1[:p] + a + s1[len(s1) - s:]
    assert s2 == s2[:p] + b + s2[len(s2) - s:]
    assert s1[:p] == s2[:p]
    assert s1[len(s1) - s:] == s2[len(s2) - s:]
    if a and b:
        assert a[0] != b[0]
        assert a[-1] != b[-1]


def test_subseq():
    assert subseq("abcdef", 2) == "cdef"
    assert subseq("abcdef", 2, 3) == "cde"
    assert subseq("abcdef", 6) == ""
    assert subseq("abcdef", 0, 100) == "abcdef"


def test_subseq_out_of_range():
    with pytest.raises(IndexError):
        subseq("abc", 4)


def test_bit_mask_lsb():
    assert bit_mask_lsb(0) == 0
    assert bit_mask_lsb(3) == 7
    assert bit_mask_lsb(63) == (1 << 63) - 1
    assert bit_mask_lsb(64) == (1 << 64) - 1
    assert bit_mask_lsb(100) == (1 << 64) - 1


def test_popcount():
    assert popcount(0) == 0
    assert popcount(0xFF) == 8
    assert popcount((1 << 64) - 1) == 64
    assert popcount(0b1010) == 2


def test_popcount_rejects_negative():
    with pytest.raises(ValueError):
        popcount(-1)


def test_blsi_blsr_blsmsk():
    assert blsi(12) == 4
    assert blsi(0) == 0
    assert blsr(12) == 8
    assert blsr(0) == 0
    assert blsmsk(12) == 7
    assert blsmsk(1) == 1
    assert blsmsk(0) == (1 << 64) - 1


def test_countr_zero():
    assert countr_zero(1) == 0
    assert countr_zero(8) == 3
    assert countr_zero(1 << 63) == 63
    assert countr_zero(0b101000) == 3


def test_countr_zero_of_zero():
    with pytest.raises(ValueError):
        countr_zero(0)


@given(st.integers(min_value=1, max_value=(1 << 64) - 1))
def test_bit_identities(x):
    assert blsi(x) == 1 << countr_zero(x)
    assert blsr(x) + blsi(x) == x
    assert popcount(blsmsk(x)) == countr_zero(x) + 1


def test_ceil_div():
    assert ceil_div(7, 2) == 4
    assert ceil_div(8, 2) == 4
    assert ceil_div(0, 5) == 0
    assert ceil_div(65, 64) == 2


def test_ceil_div_by_zero():
    with pytest.raises(ZeroDivisionError):
        ceil_div(1, 0)