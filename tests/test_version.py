from __future__ import annotations

import pytest

from areq.models import (
    BuildMetadata,
    InvalidBuildMetadata,
    InvalidPureVersion,
    InvalidVersion,
    PureVersion,
    Version,
)


def test_parse_with_build_metadata() -> None:
    version = Version.parse("1.2.3-rc.1+sha.5114f85")
    assert version.pure == PureVersion.parse("1.2.3-rc.1")
    assert version.build == (BuildMetadata("sha"), BuildMetadata("5114f85"))
    assert version.has_build
    assert str(version) == "1.2.3-rc.1+sha.5114f85"


def test_parse_without_build_metadata() -> None:
    version = Version.parse("1.2.3")
    assert not version.has_build
    assert str(version) == "1.2.3"


def test_build_metadata_distinguishes_versions_but_not_their_pure_part() -> None:
    left = Version.parse("1.0.0+a")
    right = Version.parse("1.0.0+b")
    assert left != right
    assert left.pure == right.pure


def test_invalid_pure_part_is_chained() -> None:
    with pytest.raises(InvalidVersion) as excinfo:
        Version.parse("1.2+build")
    assert isinstance(excinfo.value.__cause__, InvalidPureVersion)


@pytest.mark.parametrize("text", ["1.2.3+", "1.2.3+a..b", "1.2.3+a_b"])
def test_invalid_build_metadata(text: str) -> None:
    with pytest.raises(InvalidVersion) as excinfo:
        Version.parse(text)
    assert isinstance(excinfo.value.__cause__, InvalidBuildMetadata)
