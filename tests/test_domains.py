from __future__ import annotations

import pytest

from areq.domains import DEFAULT_DOMAIN_ID, UnknownDomainError, get_domain, get_known_domain_ids
from areq.models import I64, U8, PureVersion


def test_known_domains() -> None:
    known = get_known_domain_ids()
    assert known == sorted(known)
    assert DEFAULT_DOMAIN_ID in known
    assert {"u8", "u16", "u32", "u64", "u128", "i8", "i16", "i32", "i64", "i128"} <= set(known)


def test_semver_domain_accepts_build_metadata() -> None:
    handler = get_domain("semver")
    assert handler.value_type is PureVersion
    assert handler.parse_value(" 1.2.3+abc ") == PureVersion.parse("1.2.3")


def test_integer_domains() -> None:
    assert get_domain("u8").value_type is U8
    assert get_domain("u8").display_name == "8-bit unsigned integer"
    assert get_domain("i64").parse_value("-5") == I64(-5)


def test_unknown_domain() -> None:
    with pytest.raises(UnknownDomainError) as excinfo:
        get_domain("calver")
    assert "Known domains" in str(excinfo.value)
