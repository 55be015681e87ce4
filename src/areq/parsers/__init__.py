"""Text front-ends producing ``Ranges``: the native expression grammar and npm shorthand."""

from .expression import Diagnostic, RangeSyntaxError, parse_ranges

__all__ = [
    "Diagnostic",
    "RangeSyntaxError",
    "parse_ranges",
]
