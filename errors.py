from __future__ import annotations
from enum import Enum


class RationalError(Exception):
    pass


class InvalidDenominator(RationalError, ValueError):
    def __init__(self, message: str = "Denominator can't be zero!") -> None:
        super().__init__(message)


class DivisionByZero(RationalError, ZeroDivisionError):
    def __init__(self, message: str = "Can't divide by zero") -> None:
        super().__init__(message)


class IntegerOverflow(RationalError, OverflowError):
    def __init__(self, value: int, bits: int) -> None:
        # a value past the digit limit of str(int) is named by its size
        shown = value if value.bit_length() <= 256 else f"a {value.bit_length()}-bit value"
        super().__init__(f"{shown} does not fit in a signed {bits}-bit integer")
        self.value = value
        self.bits = bits


class ExpressionError(RationalError, ValueError):
    pass


class ParseFailure(Enum):
    UNEXPECTED_CHARACTER = "unexpected character"
    EMPTY_REPEATING = "empty repeating group"
    UNTERMINATED_REPEATING = "unterminated repeating group"
    TRAILING_INPUT = "trailing input"
    NO_DIGITS = "no digits"


class ParseError(RationalError, ValueError):
    """Malformed decimal literal.

    ``reason`` tells which rule of the literal grammar failed and ``position``
    is the index into ``text`` where the parser stopped.
    """

    def __init__(self, text: str, position: int, reason: ParseFailure) -> None:
        super().__init__(f"error parsing string {text!r}: {reason.value} at {position}")
        self.text = text
        self.position = position
        self.reason = reason
