"""Contracts a value type must satisfy to act as a range boundary.

A boundary ("extreme") type is totally ordered, has absolute domain bounds
``MIN`` and ``MAX`` (real, includable values rather than infinity markers)
and a ``successor`` with nothing strictly between a value and its successor.
That last property is what lets every inclusive/exclusive comparison be
stored as a half-open interval ``[start, end)``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, TypeVar

E = TypeVar("E", bound="RangeExtreme")

DEFAULT_TOKEN_PATTERN = re.compile(r"[^\s()&|]+")


class RangeExtreme(ABC):
    """Ordered value usable as an interval boundary.

    Subclasses must provide rich comparisons forming a total order and set the
    ``MIN`` and ``MAX`` class attributes.
    """

    __slots__ = ()

    MIN: ClassVar[Any]
    MAX: ClassVar[Any]

    @abstractmethod
    def successor(self: E) -> E:
        """Return the immediate next value.

        There must be no value ``v`` with ``self < v < self.successor()``.
        Raises ``OverflowError`` when called on ``MAX``.
        """

    def precedes(self, other: object) -> bool:
        """Return True if ``other`` is exactly ``self.successor()``."""
        if self == type(self).MAX:
            return False
        return self.successor() == other


class RangeExtremeDisplay(RangeExtreme):
    """Boundary that can render the value immediately before it."""

    __slots__ = ()

    @abstractmethod
    def has_predecessor(self) -> bool:
        """True iff some ``w`` exists with ``w.successor() == self``."""

    @abstractmethod
    def predecessor(self: E) -> E:
        """Return the ``w`` with ``w.successor() == self``.

        Raises ``ValueError`` when ``has_predecessor()`` is False.
        """


class RangeExtremeParseable(RangeExtreme):
    """Boundary that can be read from inside a range expression.

    ``TOKEN_PATTERN`` delimits one value in the expression text. Valid
    representations must not contain whitespace, parentheses, ``&`` or ``|``
    so that the expression grammar can find where a value ends.
    """

    __slots__ = ()

    TOKEN_PATTERN: ClassVar[re.Pattern[str]] = DEFAULT_TOKEN_PATTERN

    @classmethod
    @abstractmethod
    def parse(cls: type[E], text: str) -> E:
        """Parse ``text`` into a value, raising a ``ValueError`` subclass."""
