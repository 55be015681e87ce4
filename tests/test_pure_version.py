from __future__ import annotations

import pytest

from areq.models import (
    UINT_MAX,
    ExtraBeforePrerelease,
    InvalidNumericPart,
    InvalidPrerelease,
    InvalidPureVersion,
    MissingNumericPart,
    NumericPart,
    NumericPartTooLong,
    PatchIsMaximum,
    Prerelease,
    PureVersion,
)

SORTED = [
    "1.0.0-alpha",
    "1.0.0-alpha.1",
    "1.0.0-alpha.beta",
    "1.0.0-beta",
    "1.0.0-beta.2",
    "1.0.0-beta.11",
    "1.0.0-rc.1",
    "1.0.0",
]

V = PureVersion.parse


def test_precedence_order() -> None:
    versions = [V(text) for text in SORTED]
    assert versions == sorted(versions)
    assert all(a < b for a, b in zip(versions, versions[1:]))


@pytest.mark.parametrize("text", SORTED + ["0.0.0-0", "10.20.30", "1.2.3-0a.x-y.7"])
def test_round_trips(text: str) -> None:
    assert str(V(text)) == text


def test_fields() -> None:
    version = V("1.2.3-rc.1")
    assert (version.major, version.minor, version.patch) == (1, 2, 3)
    assert version.pre == (Prerelease("rc"), Prerelease(1))
    assert version.is_prerelease()
    assert not version.is_major_zero()
    assert V("0.1.0").is_major_zero()
    assert PureVersion.from_parts(1, 2, 3, ["rc", 1]) == version


def test_sentinels() -> None:
    assert str(PureVersion.MIN) == "0.0.0-0"
    assert PureVersion.MIN < V("0.0.0-a") < V("0.0.0")
    assert PureVersion.MAX.patch == UINT_MAX
    assert not PureVersion.MAX.is_prerelease()
    assert V(f"{UINT_MAX}.{UINT_MAX}.{UINT_MAX}-rc") < PureVersion.MAX


# ---- Successor / predecessor ----------------------------------------------------------


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.2.3", "1.2.4-0"),
        ("1.2.3-rc", "1.2.3-rc.0"),
        ("1.2.3-rc.1", "1.2.3-rc.1.0"),
        ("0.0.0-0", "0.0.0-0.0"),
    ],
)
def test_successor(text: str, expected: str) -> None:
    assert V(text).successor() == V(expected)


@pytest.mark.parametrize("text", ["1.2.3", "1.2.3-rc", "0.0.0", "0.0.0-0", "3.0.0-alpha.0"])
def test_successor_has_predecessor(text: str) -> None:
    version = V(text)
    successor = version.successor()
    assert version < successor
    assert successor.has_predecessor()
    assert successor.predecessor() == version
    assert version.precedes(successor)


def test_no_predecessor() -> None:
    assert not V("1.2.3").has_predecessor()
    assert not V("1.2.3-rc").has_predecessor()
    assert not V("1.0.0-0").has_predecessor()
    assert not PureVersion.MIN.has_predecessor()
    with pytest.raises(ValueError):
        V("1.2.3").predecessor()


def test_maximum_has_no_successor() -> None:
    with pytest.raises(OverflowError):
        PureVersion.MAX.successor()
    assert not PureVersion.MAX.precedes(PureVersion.MIN)


def test_patch_is_maximum() -> None:
    with pytest.raises(PatchIsMaximum):
        PureVersion(0, 0, UINT_MAX)
    with pytest.raises(PatchIsMaximum):
        V(f"1.2.{UINT_MAX}")
    assert V(f"1.2.{UINT_MAX}-0").patch == UINT_MAX


# ---- Parse errors ---------------------------------------------------------------------


@pytest.mark.parametrize(
    ("text", "error", "part"),
    [
        ("1", MissingNumericPart, NumericPart.MINOR),
        ("1.2", MissingNumericPart, NumericPart.PATCH),
        ("01.2.3", InvalidNumericPart, NumericPart.MAJOR),
        ("1.x.3", InvalidNumericPart, NumericPart.MINOR),
        ("1.2.+3", InvalidNumericPart, NumericPart.PATCH),
        (f"1.2.{UINT_MAX + 1}", NumericPartTooLong, NumericPart.PATCH),
    ],
)
def test_numeric_part_errors(text: str, error: type, part: NumericPart) -> None:
    with pytest.raises(error) as excinfo:
        V(text)
    assert excinfo.value.part is part


def test_extra_before_prerelease() -> None:
    with pytest.raises(ExtraBeforePrerelease) as excinfo:
        V("1.2.3.4-rc")
    assert excinfo.value.extra == "4"


def test_invalid_prerelease_is_chained() -> None:
    with pytest.raises(InvalidPureVersion) as excinfo:
        V("1.2.3-01")
    assert isinstance(excinfo.value.__cause__, InvalidPrerelease)
    assert "start with zero" in str(excinfo.value.__cause__)

    with pytest.raises(InvalidPureVersion) as excinfo:
        V("1.2.3-rc..1")
    assert "empty" in str(excinfo.value.__cause__)


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        V("not a version")


# ---- Prerelease identifiers -----------------------------------------------------------


def test_prerelease_ordering() -> None:
    assert Prerelease(2) < Prerelease(11)
    assert Prerelease(999) < Prerelease("a")
    assert Prerelease("alpha") < Prerelease("beta")
    assert Prerelease("Z") < Prerelease("a")
    assert Prerelease.MIN == Prerelease(0)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("0", Prerelease(0)),
        ("42", Prerelease(42)),
        ("0a", Prerelease("0a")),
        ("-", Prerelease("-")),
    ],
)
def test_prerelease_parse(text: str, expected: Prerelease) -> None:
    assert Prerelease.parse(text) == expected
    assert Prerelease.parse(text).is_numeric is isinstance(expected.value, int)


@pytest.mark.parametrize(("text", "fragment"), [("", "empty"), ("a+b", "'+'"), ("007", "zero")])
def test_prerelease_parse_errors(text: str, fragment: str) -> None:
    with pytest.raises(InvalidPrerelease) as excinfo:
        Prerelease.parse(text)
    assert fragment in str(excinfo.value)
    assert excinfo.value.identifier == text


@pytest.mark.parametrize("value", [-1, True, "123", "a.b"])
def test_prerelease_construction_is_validated(value) -> None:
    with pytest.raises(InvalidPrerelease):
        Prerelease(value)
