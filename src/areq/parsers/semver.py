"""npm-style semver requirements translated into ``Ranges``.

Supported expressions:
- exact versions (e.g., "1.2.3", "=1.2.3", "v1.2.3")
- caret ranges ^x.y.z → >=x.y.z,<x+1.0.0-0 (next minor when x is 0, next patch when x.y is 0.0)
- tilde ranges ~x.y.z → >=x.y.z,<x.y+1.0-0
- basic comparator sets split by spaces, e.g., ">=1.0.0 <2.0.0"
- alternatives joined by "||"
- "*", "x" and "" for any version

Hyphen ranges and partial versions ("1.x", "1.2") are not supported.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from ..models.prerelease import Prerelease
from ..models.pure import PureVersion
from ..models.version import Version
from ..ranges import Ranges

_ANY = {"*", "x", "X"}
_OPERATOR_GAP = re.compile(r"(>=|<=|>|<|==|=|\^|~)\s+")


def _parse_version(v: str) -> PureVersion:
    if v[:1] in ("v", "V"):
        v = v[1:]
    return Version.parse(v).pure


def _release_floor(major: int, minor: int, patch: int) -> PureVersion:
    # The lowest prerelease of a release, so ``<x.y.z-0`` excludes its prereleases.
    return PureVersion(major, minor, patch, (Prerelease.MIN,))


def _caret(base: PureVersion) -> Ranges[PureVersion]:
    if base.major > 0:
        upper = _release_floor(base.major + 1, 0, 0)
    elif base.minor > 0:
        upper = _release_floor(0, base.minor + 1, 0)
    else:
        upper = _release_floor(0, 0, base.patch + 1)
    return Ranges.between(base, upper)


def _tilde(base: PureVersion) -> Ranges[PureVersion]:
    return Ranges.between(base, _release_floor(base.major, base.minor + 1, 0))


_COMPARATORS: tuple[tuple[str, Callable[[PureVersion], Ranges[PureVersion]]], ...] = (
    ("^", _caret),
    ("~", _tilde),
    (">=", Ranges.at_least),
    ("<=", Ranges.at_most),
    (">", Ranges.greater_than),
    ("<", Ranges.less_than),
    ("==", Ranges.single),
    ("=", Ranges.single),
)


def _comparator(token: str) -> Ranges[PureVersion]:
    if token in _ANY:
        return Ranges.full(PureVersion)
    for prefix, build in _COMPARATORS:
        if token.startswith(prefix):
            return build(_parse_version(token[len(prefix) :]))
    # treat as exact fallback
    return Ranges.single(_parse_version(token))


def _comparator_set(text: str) -> Ranges[PureVersion]:
    ranges = Ranges.full(PureVersion)
    for token in _OPERATOR_GAP.sub(r"\1", text).split():
        ranges = ranges & _comparator(token)
    return ranges


def to_ranges(expr: str) -> Ranges[PureVersion]:
    """Translate an npm-style requirement into a canonical range.

    Raises ``InvalidVersion`` when a version inside ``expr`` is malformed.
    """
    ranges = Ranges.empty(PureVersion)
    for alternative in expr.split("||"):
        ranges = ranges | _comparator_set(alternative)
    return ranges


def satisfies(installed: str, expr: str) -> bool:
    """Return whether ``installed`` (build metadata allowed) matches ``expr``."""
    return _parse_version(installed.strip()) in to_ranges(expr)
