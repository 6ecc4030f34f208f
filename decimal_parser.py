from __future__ import annotations
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Tuple

from errors import ParseError, ParseFailure
from rational import Rational, digits_to_int, int_to_digits

logger = logging.getLogger(__name__)

DIGITS = "0123456789"

# =====================
# Decimal literal grammar
#
#   value := ['-'] integral? ('.' fractional? ('(' repeating ')')?)?
#
# e.g. "-12.5", ".5", "5.", "0.1(6)", "3.(571428)"
# =====================


@dataclass(frozen=True)
class DecimalParts:
    sign: int
    integral: str
    fractional: str
    repeating: str

    def has_digits(self) -> bool:
        return bool(self.integral or self.fractional or self.repeating)


class _Cursor:
    def __init__(self, text: str, pos: int = 0):
        self.text, self.pos = text, pos

    def peek(self) -> str:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def advance(self) -> None:
        self.pos += 1

    def take_digits(self) -> str:
        start = self.pos
        n = len(self.text)
        while self.pos < n and self.text[self.pos] in DIGITS:
            self.pos += 1
        return self.text[start : self.pos]

    def fail(self, reason: ParseFailure) -> ParseError:
        return ParseError(self.text, self.pos, reason)


def _parse_sign(cur: _Cursor) -> int:
    if cur.peek() == "-":
        cur.advance()
        return -1
    return 1


def _closes_repeating(text: str, pos: int) -> bool:
    # "(" digits ")" starting at pos
    j = pos + 1
    while j < len(text) and text[j] in DIGITS:
        j += 1
    return j > pos + 1 and j < len(text) and text[j] == ")"


def _parse_repeating(cur: _Cursor, lenient: bool = False) -> str:
    if cur.peek() != "(":
        return ""
    if lenient and not _closes_repeating(cur.text, cur.pos):
        # not a repeating block; the "(" is left for the caller
        return ""
    cur.advance()
    digits = cur.take_digits()
    if not digits:
        raise cur.fail(ParseFailure.EMPTY_REPEATING)
    if cur.peek() != ")":
        raise cur.fail(ParseFailure.UNTERMINATED_REPEATING)
    cur.advance()
    return digits


def scan_parts(
    text: str, pos: int = 0, signed: bool = True, lenient: bool = False
) -> Tuple[DecimalParts, int]:
    """Read the longest literal starting at ``pos``.

    Returns the decoded zones and the index just past the literal. The caller
    decides whether anything may follow. With ``lenient`` a "(" after the
    fractional digits is only taken as a repeating block when a well-formed
    "(digits)" follows; otherwise the literal ends before it.
    """
    cur = _Cursor(text, pos)
    sign = _parse_sign(cur) if signed else 1
    integral = cur.take_digits()
    fractional = repeating = ""
    if cur.peek() == ".":
        cur.advance()
        fractional = cur.take_digits()
        # a repeating block is only meaningful after the decimal point
        repeating = _parse_repeating(cur, lenient)
    parts = DecimalParts(sign, integral, fractional, repeating)
    return parts, cur.pos


def _repunit(length: int) -> int:
    q = 0
    for _ in range(length):
        q = q * 10 + 9
    return q


def parts_to_rational(parts: DecimalParts) -> Rational:
    head = parts.integral + parts.fractional
    p = digits_to_int(head)
    q = 10 ** len(parts.fractional)
    if parts.repeating:
        rp, rq = digits_to_int(parts.repeating), _repunit(len(parts.repeating))
    else:
        rp, rq = 0, 1
    return Rational(parts.sign * p, q) + Rational(parts.sign * rp, rq * q)


def parse(text: str) -> Rational:
    parts, end = scan_parts(text)
    if end != len(text):
        reason = (
            ParseFailure.TRAILING_INPUT
            if parts.repeating
            else ParseFailure.UNEXPECTED_CHARACTER
        )
        raise ParseError(text, end, reason)
    if not parts.has_digits():
        raise ParseError(text, end, ParseFailure.NO_DIGITS)
    return parts_to_rational(parts)


def parse_prefix(text: str, pos: int = 0) -> Tuple[Rational, int]:
    """Parse an unsigned literal embedded in a larger string.

    A "(" that does not open a complete repeating block is not consumed, so
    "2.5(1+1)" stops after "2.5".
    """
    parts, end = scan_parts(text, pos, signed=False, lenient=True)
    if not parts.has_digits():
        raise ParseError(text, end, ParseFailure.NO_DIGITS)
    return parts_to_rational(parts), end


# =====================
# Rendering
# =====================


def to_decimal(value: Rational) -> str:
    """Decimal text for ``value`` with any repeating block in parentheses.

    Long division, remembering the position of every remainder: the first
    remainder seen twice marks where the period starts.
    """
    p, q = value.canonical()
    sign = "-" if p < 0 else ""
    whole, rem = divmod(abs(p), q)
    if rem == 0:
        return f"{sign}{int_to_digits(whole)}"
    digits: List[str] = []
    seen: Dict[int, int] = {}
    while rem != 0 and rem not in seen:
        seen[rem] = len(digits)
        d, rem = divmod(rem * 10, q)
        digits.append(str(d))
    if rem == 0:
        return f"{sign}{int_to_digits(whole)}.{''.join(digits)}"
    start = seen[rem]
    head, period = "".join(digits[:start]), "".join(digits[start:])
    return f"{sign}{int_to_digits(whole)}.{head}({period})"


# =====================
# Literals
# =====================


@lru_cache(maxsize=1024)
def _literal_parts(text: str) -> Tuple[int, int]:
    logger.debug("parsing literal %r", text)
    r = parse(text)
    return r.numerator(), r.denominator()


def literal(text: str) -> Rational:
    """Rational for a decimal literal, parsed once per distinct text."""
    p, q = _literal_parts(text)
    return Rational.new_unchecked(p, q)
