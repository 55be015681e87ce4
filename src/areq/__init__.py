"""areq core package.

Version range algebra: canonical sets of half-open intervals over any ordered
domain with a successor function, an expression parser with full diagnostics,
and semantic-version and fixed-width integer domains to use it with.
"""

__version__ = "0.1.0"

from .extremes import RangeExtreme, RangeExtremeDisplay, RangeExtremeParseable
from .models import PureVersion, Version
from .parsers.expression import Diagnostic, RangeSyntaxError, parse_ranges
from .ranges import Ranges

__all__ = [
    "Diagnostic",
    "PureVersion",
    "RangeExtreme",
    "RangeExtremeDisplay",
    "RangeExtremeParseable",
    "RangeSyntaxError",
    "Ranges",
    "Version",
    "parse_ranges",
]
