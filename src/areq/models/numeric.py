"""Fixed-width integer domains usable as range boundaries."""

from __future__ import annotations

import re
from typing import ClassVar

from ..extremes import RangeExtremeDisplay, RangeExtremeParseable

_INTEGER = re.compile(r"-?[0-9]+")


class BoundedInt(int, RangeExtremeDisplay, RangeExtremeParseable):
    """An ``int`` restricted to a fixed bit width.

    Concrete domains are declared with class keywords::

        class U8(BoundedInt, bits=8, signed=False): ...
    """

    __slots__ = ()

    BITS: ClassVar[int]
    SIGNED: ClassVar[bool]
    TOKEN_PATTERN = _INTEGER

    def __init_subclass__(cls, *, bits: int, signed: bool, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls.BITS = bits
        cls.SIGNED = signed
        if signed:
            low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
        else:
            low, high = 0, 2**bits - 1
        cls.MIN = int.__new__(cls, low)
        cls.MAX = int.__new__(cls, high)

    def __new__(cls, value: int = 0):
        number = int(value)
        if not cls.MIN <= number <= cls.MAX:
            raise OverflowError(f"{number} is out of range for {cls.__name__}")
        return int.__new__(cls, number)

    def successor(self):
        if self == self.MAX:
            raise OverflowError(f"{self} is the maximum {type(self).__name__}")
        return type(self)(self + 1)

    def has_predecessor(self) -> bool:
        return self > self.MIN

    def predecessor(self):
        if not self.has_predecessor():
            raise ValueError(f"{self} is the minimum {type(self).__name__}")
        return type(self)(self - 1)

    @classmethod
    def parse(cls, text: str):
        if not _INTEGER.fullmatch(text):
            raise ValueError(f"Invalid {cls.__name__}: `{text}`")
        number = int(text)
        if not cls.MIN <= number <= cls.MAX:
            raise ValueError(f"{text} is out of range for {cls.__name__} [{cls.MIN}, {cls.MAX}]")
        return cls(number)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    __str__ = int.__repr__


class U8(BoundedInt, bits=8, signed=False):
    __slots__ = ()


class U16(BoundedInt, bits=16, signed=False):
    __slots__ = ()


class U32(BoundedInt, bits=32, signed=False):
    __slots__ = ()


class U64(BoundedInt, bits=64, signed=False):
    __slots__ = ()


class U128(BoundedInt, bits=128, signed=False):
    __slots__ = ()


class I8(BoundedInt, bits=8, signed=True):
    __slots__ = ()


class I16(BoundedInt, bits=16, signed=True):
    __slots__ = ()


class I32(BoundedInt, bits=32, signed=True):
    __slots__ = ()


class I64(BoundedInt, bits=64, signed=True):
    __slots__ = ()


class I128(BoundedInt, bits=128, signed=True):
    __slots__ = ()


INTEGER_DOMAINS: tuple[type[BoundedInt], ...] = (U8, U16, U32, U64, U128, I8, I16, I32, I64, I128)
