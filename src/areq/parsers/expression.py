"""Recursive-descent parser for range expressions.

Grammar, loosest binding first::

    expr      := or_expr
    or_expr   := and_expr ( "||" and_expr )*
    and_expr  := neg_atom ( "&&" neg_atom )*
    neg_atom  := "!"* atom
    atom      := cmp_op value | "-" | "*" | "(" expr ")"
    cmp_op    := "<=" | "<" | ">=" | ">" | "==" | "!="

Whitespace is ignored around tokens. The parser does not stop at the first
problem: it records a diagnostic, skips to a point where parsing can resume
and carries on, so callers can report every mistake in one go.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..extremes import RangeExtremeParseable
from ..ranges import Ranges

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=RangeExtremeParseable)

# Two-character operators come first so "<=" is not read as "<" followed by "=".
_COMPARISONS: tuple[tuple[str, Callable[[T], Ranges[T]]], ...] = (
    ("<=", Ranges.at_most),
    ("<", Ranges.less_than),
    (">=", Ranges.at_least),
    (">", Ranges.greater_than),
    ("==", Ranges.single),
    ("!=", Ranges.all_except),
)

_EXPECTED_ATOM = "a comparison operator, '-', '*' or '('"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One problem found while parsing, located by character offsets."""

    start: int
    end: int
    message: str
    cause: BaseException | None = None

    def __str__(self) -> str:
        text = f"{self.start}..{self.end}: {self.message}"
        if self.cause is not None:
            text += f" (caused by: {self.cause})"
        return text


class RangeSyntaxError(ValueError):
    """Raised when a range expression is malformed.

    ``diagnostics`` holds every problem found, in source order.
    """

    def __init__(self, text: str, diagnostics: list[Diagnostic]) -> None:
        self.text = text
        self.diagnostics = diagnostics
        lines = [f"Invalid range expression `{text}`:"]
        lines.extend(f"  - {d}" for d in diagnostics)
        super().__init__("\n".join(lines))


def parse_ranges(text: str, domain: type[T]) -> Ranges[T]:
    """Parse ``text`` into a canonical ``Ranges`` over ``domain``.

    Raises:
        RangeSyntaxError: if the expression or any value in it is invalid.
    """
    parser = _Parser(text, domain)
    result = parser.parse()
    if parser.diagnostics:
        logger.debug(f"Rejected range expression {text!r}: {len(parser.diagnostics)} problem(s)")
        raise RangeSyntaxError(text, parser.diagnostics)
    return result


class _Parser(Generic[T]):
    def __init__(self, text: str, domain: type[T]) -> None:
        self.text = text
        self.domain = domain
        self.pos = 0
        self.diagnostics: list[Diagnostic] = []

    # ---- Entry ------------------------------------------------------------------------

    def parse(self) -> Ranges[T]:
        self._skip_whitespace()
        result = self._disjunction()
        while not self._at_end():
            start = self.pos
            self._error(start, self._token_end(start), f"Unexpected {self._describe(start)}")
            # Resume after the next connective so later mistakes are reported too.
            if not self._skip_past_connective():
                break
            self._disjunction()
        return result

    # ---- Grammar ----------------------------------------------------------------------

    def _disjunction(self) -> Ranges[T]:
        result = self._conjunction()
        while self._eat("||"):
            result = result | self._conjunction()
        return result

    def _conjunction(self) -> Ranges[T]:
        result = self._negation()
        while self._eat("&&"):
            result = result & self._negation()
        return result

    def _negation(self) -> Ranges[T]:
        negations = 0
        while self._peek("!") and not self._peek("!="):
            self.pos += 1
            self._skip_whitespace()
            negations += 1

        if negations and self._at_operand_end():
            # A bare run of "!" negates everything: "!" is the empty set.
            atom = Ranges.full(self.domain)
        else:
            atom = self._atom()
        return atom.negate() if negations % 2 else atom

    def _atom(self) -> Ranges[T]:
        for operator, build in _COMPARISONS:
            if self._eat(operator):
                value = self._value()
                if value is None:
                    return Ranges.empty(self.domain)
                return build(value)

        if self._eat("-"):
            return Ranges.empty(self.domain)
        if self._eat("*"):
            return Ranges.full(self.domain)

        if self._peek("("):
            opening = self.pos
            self._eat("(")
            inner = self._disjunction()
            if not self._eat(")"):
                self._error(
                    self.pos,
                    self._token_end(self.pos),
                    f"Expected ')' to close '(' at {opening}, found {self._describe(self.pos)}",
                )
                self._skip_to_operand_end()
                self._eat(")")
            return inner

        start = self.pos
        self._error(
            start,
            self._token_end(start),
            f"Expected {_EXPECTED_ATOM}, found {self._describe(start)}",
        )
        self._skip_to_operand_end()
        return Ranges.empty(self.domain)

    def _value(self) -> T | None:
        start = self.pos
        match = self.domain.TOKEN_PATTERN.match(self.text, start)
        if not match or match.end() == start:
            self._error(
                start,
                self._token_end(start),
                f"Expected a {self.domain.__name__} value, found {self._describe(start)}",
            )
            self._skip_to_operand_end()
            return None

        token = match.group()
        self.pos = match.end()
        self._skip_whitespace()
        try:
            return self.domain.parse(token)
        except ValueError as exc:
            self._error(start, match.end(), f"Invalid {self.domain.__name__} `{token}`", cause=exc)
            return None

    # ---- Scanning helpers -------------------------------------------------------------

    def _at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _peek(self, token: str) -> bool:
        return self.text.startswith(token, self.pos)

    def _eat(self, token: str) -> bool:
        if not self._peek(token):
            return False
        self.pos += len(token)
        self._skip_whitespace()
        return True

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _at_operand_end(self) -> bool:
        return self._at_end() or self._peek(")") or self._peek("&&") or self._peek("||")

    def _skip_to_operand_end(self) -> None:
        while not self._at_operand_end():
            self.pos += 1

    def _skip_past_connective(self) -> bool:
        while not self._at_end():
            if self._eat("&&") or self._eat("||"):
                return True
            self.pos += 1
        return False

    def _token_end(self, start: int) -> int:
        end = start
        while end < len(self.text) and not self.text[end].isspace():
            end += 1
        return max(end, min(start + 1, len(self.text)))

    def _describe(self, start: int) -> str:
        if start >= len(self.text):
            return "end of input"
        return f"`{self.text[start:self._token_end(start)]}`"

    def _error(
        self, start: int, end: int, message: str, cause: BaseException | None = None
    ) -> None:
        self.diagnostics.append(Diagnostic(start, end, message, cause))
