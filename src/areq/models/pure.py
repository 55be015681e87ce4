"""Semantic version without build metadata, usable as a range boundary."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import ClassVar

from ..extremes import RangeExtremeDisplay, RangeExtremeParseable
from .prerelease import InvalidPrerelease, Prerelease

UINT_MAX = 2**64 - 1

_NUM = r"(?:0|[1-9][0-9]*)"
_PRE_ID = r"(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)"
_PURE_VERSION = re.compile(
    rf"(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:-(?P<pre>{_PRE_ID}(?:\.{_PRE_ID})*))?"
)


class NumericPart(Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    def __str__(self) -> str:
        return self.value


class InvalidPureVersion(ValueError):
    """Base error for text or parts that do not form a valid version."""


class MissingNumericPart(InvalidPureVersion):
    def __init__(self, part: NumericPart) -> None:
        super().__init__(f"The {part} version is missing")
        self.part = part


class InvalidNumericPart(InvalidPureVersion):
    def __init__(self, part: NumericPart, value: str) -> None:
        super().__init__(f"Invalid {part} version: `{value}`")
        self.part = part
        self.value = value


class NumericPartTooLong(InvalidPureVersion):
    def __init__(self, part: NumericPart) -> None:
        super().__init__(f"The {part} version is too big to fit inside a 64 bit unsigned int")
        self.part = part


class ExtraBeforePrerelease(InvalidPureVersion):
    def __init__(self, extra: str) -> None:
        super().__init__(f"Additional data between numeric parts and prerelease: `{extra}`")
        self.extra = extra


class PatchIsMaximum(InvalidPureVersion):
    def __init__(self) -> None:
        super().__init__(
            "The patch version cannot be the maximum 64 bit unsigned int unless prerelease"
        )


@total_ordering
@dataclass(frozen=True, slots=True)
class PureVersion(RangeExtremeDisplay, RangeExtremeParseable):
    """A semantic version with no build metadata.

    ``successor()`` is not a version bump: it returns the smallest version
    greater than this one (``1.2.3`` -> ``1.2.4-0``, ``1.2.3-rc`` ->
    ``1.2.3-rc.0``) so that ``==v`` can be stored as ``[v, v.successor())``.
    """

    major: int
    minor: int
    patch: int
    pre: tuple[Prerelease, ...] = ()

    MIN: ClassVar[PureVersion]
    MAX: ClassVar[PureVersion]

    def __post_init__(self) -> None:
        if not isinstance(self.pre, tuple):
            object.__setattr__(self, "pre", tuple(self.pre))
        for part in NumericPart:
            value = getattr(self, part.value)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvalidNumericPart(part, str(value))
            if value > UINT_MAX:
                raise NumericPartTooLong(part)
        if any(not isinstance(identifier, Prerelease) for identifier in self.pre):
            raise InvalidPureVersion("Prerelease identifiers must be Prerelease instances")
        if self.patch == UINT_MAX and not self.pre:
            raise PatchIsMaximum()

    @classmethod
    def _unchecked(
        cls, major: int, minor: int, patch: int, pre: tuple[Prerelease, ...] = ()
    ) -> PureVersion:
        version = object.__new__(cls)
        object.__setattr__(version, "major", major)
        object.__setattr__(version, "minor", minor)
        object.__setattr__(version, "patch", patch)
        object.__setattr__(version, "pre", pre)
        return version

    @classmethod
    def from_parts(
        cls, major: int, minor: int, patch: int, pre: Iterable[int | str] = ()
    ) -> PureVersion:
        """Build a version from plain values, e.g. ``from_parts(1, 0, 0, ["rc", 1])``."""
        return cls(major, minor, patch, tuple(Prerelease(p) for p in pre))

    # ---- Properties -------------------------------------------------------------------

    def is_major_zero(self) -> bool:
        return self.major == 0

    def is_prerelease(self) -> bool:
        return bool(self.pre)

    # ---- Ordering ---------------------------------------------------------------------

    def _sort_key(self) -> tuple:
        # Without a prerelease a version sorts after every prerelease of the
        # same triple; prerelease tuples compare lexicographically.
        return (self.major, self.minor, self.patch, not self.pre, self.pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PureVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    # ---- Range boundary ---------------------------------------------------------------

    def successor(self) -> PureVersion:
        if self == PureVersion.MAX:
            raise OverflowError("The maximum version has no successor")
        patch = self.patch if self.pre else self.patch + 1
        return PureVersion(self.major, self.minor, patch, self.pre + (Prerelease.MIN,))

    def precedes(self, other: object) -> bool:
        if not isinstance(other, PureVersion) or not other.has_predecessor():
            return False
        return other.predecessor() == self

    def has_predecessor(self) -> bool:
        if not self.pre or self.pre[-1] != Prerelease.MIN:
            return False
        return len(self.pre) > 1 or self.patch > 0

    def predecessor(self) -> PureVersion:
        if not self.has_predecessor():
            raise ValueError(f"Version {self} has no immediate predecessor")
        pre = self.pre[:-1]
        patch = self.patch if pre else self.patch - 1
        return PureVersion(self.major, self.minor, patch, pre)

    # ---- Text -------------------------------------------------------------------------

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            text += "-" + ".".join(str(p) for p in self.pre)
        return text

    @classmethod
    def parse(cls, text: str) -> PureVersion:
        """Parse ``MAJOR.MINOR.PATCH(-PRERELEASE)?``.

        Raises an ``InvalidPureVersion`` subclass describing the first problem.
        """
        match = _PURE_VERSION.fullmatch(text)
        if not match:
            raise _diagnose(text)

        parts = {}
        for part in NumericPart:
            value = int(match.group(part.value))
            if value > UINT_MAX:
                raise NumericPartTooLong(part)
            parts[part.value] = value

        pre_text = match.group("pre")
        pre = tuple(Prerelease.parse(p) for p in pre_text.split(".")) if pre_text else ()
        return cls(parts["major"], parts["minor"], parts["patch"], pre)


def _diagnose(text: str) -> InvalidPureVersion:
    core, dash, pre = text.partition("-")

    pieces = core.split(".", 3)
    numeric = list(NumericPart)
    if len(pieces) < 3:
        return MissingNumericPart(numeric[len(pieces)])
    if len(pieces) == 4:
        return ExtraBeforePrerelease(pieces[3])

    for part, piece in zip(numeric, pieces):
        if not piece.isascii() or not piece.isdigit():
            return InvalidNumericPart(part, piece)
        if len(piece) > 1 and piece.startswith("0"):
            return InvalidNumericPart(part, piece)
        if int(piece) > UINT_MAX:
            return NumericPartTooLong(part)

    if dash:
        for identifier in pre.split("."):
            try:
                Prerelease.parse(identifier)
            except InvalidPrerelease as exc:
                error = InvalidPureVersion(f"Invalid prerelease: {exc}")
                error.__cause__ = exc
                return error

    return InvalidPureVersion(f"Invalid version: `{text}`")


PureVersion.MIN = PureVersion(0, 0, 0, (Prerelease.MIN,))
PureVersion.MAX = PureVersion._unchecked(UINT_MAX, UINT_MAX, UINT_MAX)
