import math
import struct

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from exactsum.auto import THRESHOLD, XsumAuto, XsumKind

INF = math.inf
NAN = math.nan


def _bits(value):
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _check(actual, expected):
    if math.isnan(expected):
        assert math.isnan(actual)
    else:
        assert actual == expected
        assert math.copysign(1.0, actual) == math.copysign(1.0, expected)


CASES = [
    ([1, 2, 3], 6.0),
    ([1e308, -1e308], 0.0),
    ([0.1, 0.1], 0.2),
    ([1e308, 1e308, 0.1, 0.1, 1e30, 0.1, -1e30, -1e308, -1e308], 0.30000000000000004),
    ([1e20, 0.1, -1e20, 1e20, 0.1, -1e20, 1e20, 0.1, -1e20], 0.30000000000000004),
    ([1e30, 0.1, -1e30], 0.1),
    ([8.98846567431158e307, 8.988465674311579e307, -1.7976931348623157e308], 9.9792015476736e291),
    ([-2.534858246857893e115, 8.988465674311579e307, 8.98846567431158e307], 1.7976931348623157e308),
    ([1.3588124894186193e308, 1.4803986201152006e223, 6.741349255733684e307], INF),
    ([6.197409167220438e-223, -9.979201547673601e291, -1.7976931348623157e308], -INF),
    ([8.98846567431158e307, 8.98846567431158e307], INF),
    ([NAN], NAN),
    ([INF, -INF], NAN),
    ([INF, INF], INF),
    ([-INF], -INF),
    ([], -0.0),
    ([-0.0], -0.0),
    ([-0.0, 0.0], 0.0),
    ([0.0], 0.0),
]


def test_default_kind_is_small():
    assert XsumAuto().kind is XsumKind.SMALL


@pytest.mark.parametrize(
    "size, kind",
    [(0, XsumKind.SMALL), (THRESHOLD - 1, XsumKind.SMALL), (THRESHOLD, XsumKind.LARGE)],
)
def test_expected_size_selects_kind(size, kind):
    assert XsumAuto(expected_size=size).kind is kind


@pytest.mark.parametrize("kind", [XsumKind.SMALL, XsumKind.LARGE])
def test_explicit_kind(kind):
    assert XsumAuto(kind).kind is kind


def test_kind_given_by_name():
    assert XsumAuto("large").kind is XsumKind.LARGE


def test_both_selectors_rejected():
    with pytest.raises(ValueError):
        XsumAuto(XsumKind.SMALL, expected_size=10)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        XsumAuto(expected_size=-1)


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        XsumAuto("medium")


@pytest.mark.parametrize("values, expected", CASES)
def test_sized_by_input(values, expected):
    summer = XsumAuto(expected_size=len(values))
    summer.addv(values)
    _check(summer.compute_round(), expected)


@pytest.mark.parametrize("kind", [XsumKind.SMALL, XsumKind.LARGE])
@pytest.mark.parametrize("values, expected", CASES)
def test_each_kind_with_add1(kind, values, expected):
    summer = XsumAuto(kind)
    for value in values:
        summer.add1(value)
    _check(summer.compute_round(), expected)


@pytest.mark.parametrize("kind", [XsumKind.SMALL, XsumKind.LARGE])
@pytest.mark.parametrize("size", [10, 100, 1000])
def test_many_equal_terms(kind, size):
    summer = XsumAuto(kind)
    summer.addv([1.1] * size)
    assert summer.compute_round() == 1.1 * size


@settings(max_examples=150)
@given(
    st.sampled_from(list(XsumKind)),
    st.lists(st.floats(min_value=-1e300, max_value=1e300, allow_nan=False), max_size=50),
)
def test_agrees_with_fsum(kind, values):
    summer = XsumAuto(kind)
    summer.addv(values)
    assert summer.compute_round() == math.fsum(values)


@settings(max_examples=150)
@given(st.lists(st.floats(allow_nan=False), max_size=40))
def test_kinds_agree_bitwise(values):
    small = XsumAuto(XsumKind.SMALL)
    small.addv(values)
    large = XsumAuto(XsumKind.LARGE)
    large.addv(values)
    assert _bits(small.compute_round()) == _bits(large.compute_round())