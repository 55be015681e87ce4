from __future__ import annotations

import pytest

from areq import Ranges
from areq.models import I8, I128, INTEGER_DOMAINS, U8, U64, U128


@pytest.mark.parametrize("domain", INTEGER_DOMAINS)
def test_bounds(domain) -> None:
    if domain.SIGNED:
        assert domain.MIN == -(2 ** (domain.BITS - 1))
        assert domain.MAX == 2 ** (domain.BITS - 1) - 1
    else:
        assert domain.MIN == 0
        assert domain.MAX == 2**domain.BITS - 1
    assert type(domain.MIN) is domain
    assert type(domain.MAX) is domain


@pytest.mark.parametrize("domain", INTEGER_DOMAINS)
def test_successor_round_trip(domain) -> None:
    value = domain.MIN
    successor = value.successor()
    assert type(successor) is domain
    assert successor.has_predecessor()
    assert successor.predecessor() == value
    assert value.precedes(successor)
    assert not value.has_predecessor()


def test_overflow() -> None:
    with pytest.raises(OverflowError):
        U8(256)
    with pytest.raises(OverflowError):
        I8(-129)
    with pytest.raises(OverflowError):
        U8.MAX.successor()
    with pytest.raises(ValueError):
        I8.MIN.predecessor()
    assert not U64.MAX.precedes(U64.MIN)


@pytest.mark.parametrize(
    ("domain", "text", "expected"),
    [(U8, "0", 0), (U8, "255", 255), (I8, "-128", -128), (U128, str(2**128 - 1), 2**128 - 1)],
)
def test_parse(domain, text: str, expected: int) -> None:
    value = domain.parse(text)
    assert value == expected
    assert type(value) is domain


@pytest.mark.parametrize(("domain", "text"), [(U8, "256"), (U8, "-1"), (I8, "1.5"), (I128, "")])
def test_parse_errors(domain, text: str) -> None:
    with pytest.raises(ValueError):
        domain.parse(text)


def test_text_forms() -> None:
    assert str(U8(7)) == "7"
    assert repr(I8(-3)) == "I8(-3)"


def test_integers_as_range_boundaries() -> None:
    ranges = Ranges.between(I8(-10), I8(10)) & ~Ranges.single(I8(0))
    assert I8(-10) in ranges
    assert I8(0) not in ranges
    assert I8(10) not in ranges
    assert str(ranges) == ">-11 && <=-1 || >0 && <=9"
