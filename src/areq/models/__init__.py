"""Boundary value types: semantic versions and fixed-width integers."""

from __future__ import annotations

from .numeric import (
    BoundedInt,
    I8,
    I16,
    I32,
    I64,
    I128,
    INTEGER_DOMAINS,
    U8,
    U16,
    U32,
    U64,
    U128,
)
from .prerelease import InvalidPrerelease, Prerelease
from .pure import (
    ExtraBeforePrerelease,
    InvalidNumericPart,
    InvalidPureVersion,
    MissingNumericPart,
    NumericPart,
    NumericPartTooLong,
    PatchIsMaximum,
    PureVersion,
    UINT_MAX,
)
from .version import BuildMetadata, InvalidBuildMetadata, InvalidVersion, Version

__all__ = [
    # Semantic versions
    "BuildMetadata",
    "ExtraBeforePrerelease",
    "InvalidBuildMetadata",
    "InvalidNumericPart",
    "InvalidPrerelease",
    "InvalidPureVersion",
    "InvalidVersion",
    "MissingNumericPart",
    "NumericPart",
    "NumericPartTooLong",
    "PatchIsMaximum",
    "Prerelease",
    "PureVersion",
    "UINT_MAX",
    "Version",
    # Integers
    "BoundedInt",
    "INTEGER_DOMAINS",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
]
