"""Prerelease identifier model."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar

_NUMERIC = re.compile(r"0|[1-9][0-9]*")
_ALPHANUMERIC = re.compile(r"[0-9]*[A-Za-z-][0-9A-Za-z-]*")
_INVALID_CHAR = re.compile(r"[^0-9A-Za-z-]")


class InvalidPrerelease(ValueError):
    """Raised when a prerelease identifier is malformed."""

    def __init__(self, message: str, identifier: str) -> None:
        super().__init__(message)
        self.identifier = identifier


@total_ordering
@dataclass(frozen=True, slots=True)
class Prerelease:
    """One dot-separated prerelease identifier.

    Numeric identifiers compare by value and sort before alphanumeric ones,
    which compare in ASCII order.
    """

    value: int | str

    MIN: ClassVar[Prerelease]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise InvalidPrerelease("Prerelease must be an int or a string", str(self.value))
        if isinstance(self.value, int):
            if self.value < 0:
                raise InvalidPrerelease(
                    f"Numeric prerelease must not be negative: `{self.value}`", str(self.value)
                )
        elif not isinstance(self.value, str) or not _ALPHANUMERIC.fullmatch(self.value):
            raise InvalidPrerelease(
                f"Alphanumeric prerelease must contain a non-digit: `{self.value}`",
                str(self.value),
            )

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, int)

    def _sort_key(self) -> tuple[int, int, str]:
        if isinstance(self.value, int):
            return (0, self.value, "")
        return (1, 0, self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Prerelease):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def parse(cls, text: str) -> Prerelease:
        if _NUMERIC.fullmatch(text):
            return cls(int(text))
        if _ALPHANUMERIC.fullmatch(text):
            return cls(text)
        raise _diagnose(text)


def _diagnose(text: str) -> InvalidPrerelease:
    if not text:
        return InvalidPrerelease("Prerelease cannot be empty", text)

    bad = _INVALID_CHAR.search(text)
    if bad:
        return InvalidPrerelease(
            "Prerelease must be composed of alphanumeric characters or hyphens, "
            f"not '{bad.group()}': `{text}`",
            text,
        )

    return InvalidPrerelease(f"Numeric prerelease must not start with zero: `{text}`", text)


Prerelease.MIN = Prerelease(0)
