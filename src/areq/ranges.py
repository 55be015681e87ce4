"""Canonical sets of disjoint half-open intervals and their algebra."""

from __future__ import annotations

import heapq
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator
from itertools import groupby
from typing import Generic, TypeVar

from .extremes import RangeExtreme, RangeExtremeDisplay

T = TypeVar("T", bound=RangeExtreme)


class Ranges(Generic[T]):
    """An immutable set of values of a boundary domain.

    The set is stored as a strictly increasing tuple of boundaries. Pairs
    ``(b0, b1), (b2, b3), ...`` are the intervals ``[b0, b1), [b2, b3), ...``;
    when the count is odd the last boundary starts an interval that runs up
    to and including ``MAX``. Every set has exactly one such encoding, so
    equality and hashing compare boundaries directly.
    """

    __slots__ = ("_domain", "_bounds")

    def __init__(self, domain: type[T], boundaries: Iterable[T] = ()) -> None:
        bounds = tuple(boundaries)
        if any(a >= b for a, b in zip(bounds, bounds[1:])):
            raise ValueError("Range boundaries must be strictly increasing")
        self._domain = domain
        self._bounds = bounds

    # ---- Construction -----------------------------------------------------------------

    @classmethod
    def empty(cls, domain: type[T]) -> Ranges[T]:
        return cls(domain)

    @classmethod
    def full(cls, domain: type[T]) -> Ranges[T]:
        return cls(domain, (domain.MIN,))

    @classmethod
    def between(cls, start: T, end: T) -> Ranges[T]:
        """Values from ``start`` (included) to ``end`` (excluded)."""
        domain = type(start)
        if start >= end:
            return cls(domain)
        return cls(domain, (start, end))

    @classmethod
    def between_exclude_start(cls, start: T, end: T) -> Ranges[T]:
        if start == type(start).MAX:
            return cls(type(start))
        return cls.between(start.successor(), end)

    @classmethod
    def between_include_end(cls, start: T, end: T) -> Ranges[T]:
        if end == type(end).MAX:
            return cls.at_least(start)
        return cls.between(start, end.successor())

    @classmethod
    def between_exclude_start_include_end(cls, start: T, end: T) -> Ranges[T]:
        if start == type(start).MAX:
            return cls(type(start))
        return cls.between_include_end(start.successor(), end)

    @classmethod
    def at_least(cls, start: T) -> Ranges[T]:
        """``>=start``"""
        return cls(type(start), (start,))

    @classmethod
    def greater_than(cls, start: T) -> Ranges[T]:
        """``>start``"""
        if start == type(start).MAX:
            return cls(type(start))
        return cls.at_least(start.successor())

    @classmethod
    def less_than(cls, end: T) -> Ranges[T]:
        """``<end``"""
        return cls.between(type(end).MIN, end)

    @classmethod
    def at_most(cls, end: T) -> Ranges[T]:
        """``<=end``"""
        if end == type(end).MAX:
            return cls.full(type(end))
        return cls.less_than(end.successor())

    @classmethod
    def single(cls, value: T) -> Ranges[T]:
        """``==value``"""
        return cls.between_include_end(value, value)

    @classmethod
    def all_except(cls, value: T) -> Ranges[T]:
        """``!=value``"""
        return cls.single(value).negate()

    @classmethod
    def parse(cls, text: str, domain: type[T]) -> Ranges[T]:
        """Parse a range expression such as ``>=1.0.0 && <2.0.0 || ==3.0.0``.

        Raises ``RangeSyntaxError`` listing every problem found in ``text``.
        """
        from .parsers.expression import parse_ranges

        return parse_ranges(text, domain)

    # ---- Queries ----------------------------------------------------------------------

    @property
    def domain(self) -> type[T]:
        return self._domain

    @property
    def boundaries(self) -> tuple[T, ...]:
        return self._bounds

    def is_empty(self) -> bool:
        return not self._bounds

    def is_full(self) -> bool:
        return len(self._bounds) == 1 and self._bounds[0] == self._domain.MIN

    def is_single(self) -> bool:
        """Return whether the set holds exactly one value."""
        if len(self._bounds) == 1:
            return self._bounds[0] == self._domain.MAX
        return len(self._bounds) == 2 and self._bounds[0].precedes(self._bounds[1])

    def contains(self, value: T) -> bool:
        # A value is inside iff an odd number of boundaries are <= value.
        return bisect_right(self._bounds, value) % 2 == 1

    def intervals(self) -> Iterator[tuple[T, T | None]]:
        """Yield ``(start, end)`` per interval; ``end`` is None when unbounded."""
        bounds = self._bounds
        for i in range(0, len(bounds) - 1, 2):
            yield bounds[i], bounds[i + 1]
        if len(bounds) % 2:
            yield bounds[-1], None

    # ---- Set algebra ------------------------------------------------------------------

    def negate(self) -> Ranges[T]:
        """Complement against ``[MIN, MAX]``.

        Adding or removing a boundary at ``MIN`` flips the parity of every
        point, which is exactly complementation.
        """
        minimum = self._domain.MIN
        if self._bounds and self._bounds[0] == minimum:
            return self._with(self._bounds[1:])
        return self._with((minimum,) + self._bounds)

    def union(self, other: Ranges[T]) -> Ranges[T]:
        self._check_domain(other)
        bounds = list(self._bounds)
        for start, end in other.intervals():
            lo = bisect_left(bounds, start)
            hi = len(bounds) if end is None else bisect_right(bounds, end)
            replacement = []
            # Keep ``start`` only if the point just below it is outside the set.
            if lo % 2 == 0:
                replacement.append(start)
            # Keep ``end`` only if ``end`` itself is outside the set.
            if end is not None and hi % 2 == 0:
                replacement.append(end)
            bounds[lo:hi] = replacement
        return self._with(bounds)

    @classmethod
    def xor(cls, ranges: Iterable[Ranges[T]]) -> Ranges[T]:
        """Symmetric difference of any number of sets.

        Every boundary flips membership, so a point survives iff it appears
        an odd number of times across all operands.
        """
        operands = list(ranges)
        if not operands:
            raise ValueError("xor requires at least one operand")
        first = operands[0]
        for operand in operands[1:]:
            first._check_domain(operand)
        merged = heapq.merge(*(operand._bounds for operand in operands))
        survivors = [value for value, group in groupby(merged) if sum(1 for _ in group) % 2]
        return first._with(survivors)

    def symmetric_difference(self, other: Ranges[T]) -> Ranges[T]:
        return Ranges.xor([self, other])

    def intersection(self, other: Ranges[T]) -> Ranges[T]:
        # a & b == a ^ b ^ (a | b)
        return Ranges.xor([self, other, self.union(other)])

    def __invert__(self) -> Ranges[T]:
        return self.negate()

    def __or__(self, other: object) -> Ranges[T]:
        if not isinstance(other, Ranges):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: object) -> Ranges[T]:
        if not isinstance(other, Ranges):
            return NotImplemented
        return self.intersection(other)

    def __xor__(self, other: object) -> Ranges[T]:
        if not isinstance(other, Ranges):
            return NotImplemented
        return self.symmetric_difference(other)

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def __bool__(self) -> bool:
        return bool(self._bounds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ranges):
            return NotImplemented
        return self._domain is other._domain and self._bounds == other._bounds

    def __hash__(self) -> int:
        return hash((self._domain, self._bounds))

    # ---- Rendering --------------------------------------------------------------------

    def __str__(self) -> str:
        if self.is_empty():
            return "-"
        if self.is_full():
            return "*"
        return " || ".join(self._render_interval(start, end) for start, end in self.intervals())

    def _render_interval(self, start, end) -> str:
        if (end is None and start == self._domain.MAX) or (
            end is not None and start.precedes(end)
        ):
            return f"=={start}"

        parts: list[str] = []
        if start != self._domain.MIN:
            if start.has_predecessor():
                parts.append(f">{start.predecessor()}")
            else:
                parts.append(f">={start}")
        if end is not None:
            if end.has_predecessor():
                parts.append(f"<={end.predecessor()}")
            else:
                parts.append(f"<{end}")
        return " && ".join(parts)

    def __repr__(self) -> str:
        if issubclass(self._domain, RangeExtremeDisplay):
            rendered = str(self)
        else:
            rendered = ", ".join(repr(b) for b in self._bounds)
        return f"Ranges({self._domain.__name__}, {rendered!r})"

    # ---- Internals --------------------------------------------------------------------

    def _with(self, bounds: Iterable[T]) -> Ranges[T]:
        result = object.__new__(type(self))
        result._domain = self._domain
        result._bounds = tuple(bounds)
        return result

    def _check_domain(self, other: Ranges[T]) -> None:
        if other._domain is not self._domain:
            raise TypeError(
                f"Cannot combine ranges over {self._domain.__name__} "
                f"and {other._domain.__name__}"
            )
