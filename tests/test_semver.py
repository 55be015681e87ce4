from __future__ import annotations

import pytest

from areq import Ranges
from areq.models import InvalidVersion, PureVersion
from areq.parsers.semver import satisfies, to_ranges

V = PureVersion.parse


def test_exact() -> None:
    assert satisfies("1.2.3", "1.2.3")
    assert satisfies("1.2.3", "=1.2.3")
    assert satisfies("1.2.3", "v1.2.3")
    assert not satisfies("1.2.4", "1.2.3")


def test_caret_ranges() -> None:
    assert satisfies("1.9.9", "^1.2.3")
    assert not satisfies("2.0.0", "^1.2.3")
    assert not satisfies("2.0.0-rc.1", "^1.2.3")
    assert satisfies("0.2.9", "^0.2.3")
    assert not satisfies("0.3.0", "^0.2.3")
    assert satisfies("0.0.3", "^0.0.3")
    assert not satisfies("0.0.4", "^0.0.3")


def test_tilde_ranges() -> None:
    assert satisfies("1.2.9", "~1.2.3")
    assert not satisfies("1.3.0", "~1.2.3")


def test_comparator_sets_and_alternatives() -> None:
    assert satisfies("1.5.0", ">=1.0.0 <2.0.0")
    assert satisfies("1.5.0", ">= 1.0.0 < 2.0.0")
    assert not satisfies("2.0.0", ">=1.0.0 <2.0.0")
    assert satisfies("3.1.0", "<1.0.0 || ^3.0.0")


@pytest.mark.parametrize("expr", ["*", "x", ""])
def test_any(expr: str) -> None:
    assert to_ranges(expr).is_full()


def test_build_metadata_is_ignored() -> None:
    assert satisfies("1.2.3+build.7", "^1.2.0")


def test_translation_matches_native_expressions() -> None:
    assert to_ranges("^1.2.3") == Ranges.parse(">=1.2.3 && <2.0.0-0", PureVersion)
    assert to_ranges("~1.2.3") == Ranges.between(V("1.2.3"), V("1.3.0-0"))
    assert str(to_ranges(">1.0.0 <=1.5.0")) == ">1.0.0 && <=1.5.0"


def test_invalid_versions() -> None:
    with pytest.raises(InvalidVersion):
        to_ranges("^1.2")
    with pytest.raises(ValueError):
        satisfies("banana", "^1.0.0")
