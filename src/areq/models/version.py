"""Full semantic version: a pure version plus build metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .pure import InvalidPureVersion, PureVersion

_INVALID_CHAR = re.compile(r"[^0-9A-Za-z-]")


class InvalidBuildMetadata(ValueError):
    """Raised when a build metadata identifier is malformed."""


class InvalidVersion(ValueError):
    """Raised when a full version string cannot be parsed."""


@dataclass(frozen=True, slots=True)
class BuildMetadata:
    """One dot-separated build identifier. Never affects ordering."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise InvalidBuildMetadata("Build metadata cannot be empty")
        bad = _INVALID_CHAR.search(self.value)
        if bad:
            raise InvalidBuildMetadata(
                "Build metadata must be composed of alphanumeric characters or hyphens, "
                f"not '{bad.group()}': `{self.value}`"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Version:
    """A version as found in lockfiles and manifests, e.g. ``1.2.3-rc.1+sha.5114f85``.

    Range membership only looks at ``pure``.
    """

    pure: PureVersion
    build: tuple[BuildMetadata, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.build, tuple):
            object.__setattr__(self, "build", tuple(self.build))

    @property
    def has_build(self) -> bool:
        return bool(self.build)

    def __str__(self) -> str:
        text = str(self.pure)
        if self.build:
            text += "+" + ".".join(str(b) for b in self.build)
        return text

    @classmethod
    def parse(cls, text: str) -> Version:
        pure_text, plus, build_text = text.partition("+")
        try:
            pure = PureVersion.parse(pure_text)
        except InvalidPureVersion as exc:
            raise InvalidVersion(f"Invalid version `{text}`: {exc}") from exc

        build: list[BuildMetadata] = []
        if plus:
            try:
                build = [BuildMetadata(b) for b in build_text.split(".")]
            except InvalidBuildMetadata as exc:
                raise InvalidVersion(f"Invalid build metadata in `{text}`: {exc}") from exc
        return cls(pure, tuple(build))
