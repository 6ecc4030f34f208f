from __future__ import annotations
from fractions import Fraction
from typing import Tuple, Union

from config import check_width
from errors import DivisionByZero, InvalidDenominator

def gcd(a: int, b: int) -> int:
	"""Greatest common divisor of two non-negative ints.

	Binary variant: common powers of two are shifted out first, the remaining
	twos are stripped from each side, then Euclid finishes on odd numbers.
	"""
	if a == 0 or b == 0:
		return a + b
	if min(a, b) == 1:
		return 1
	d = 1
	while (a & 1) == 0 and (b & 1) == 0:
		a >>= 1
		b >>= 1
		d <<= 1
	while (a & 1) == 0:
		a >>= 1
	while (b & 1) == 0:
		b >>= 1
	while a != 0 and b != 0:
		if a > b:
			a %= b
		else:
			b %= a
	return (a + b) * d

def _sign(v: int) -> int:
	return (v > 0) - (v < 0)

# int <-> str conversion is capped (sys.get_int_max_str_digits, never below 640
# digits), so long values are converted in chunks under that cap
_CHUNK = 600
_CHUNK_BASE = 10 ** _CHUNK

def digits_to_int(digits: str) -> int:
	"""Value of an ASCII digit string of any length; empty is 0."""
	v = 0
	for i in range(0, len(digits), _CHUNK):
		chunk = digits[i:i + _CHUNK]
		v = v * 10 ** len(chunk) + int(chunk)
	return v

def int_to_digits(n: int) -> str:
	if n < 0:
		return "-" + int_to_digits(-n)
	parts = []
	while n >= _CHUNK_BASE:
		n, r = divmod(n, _CHUNK_BASE)
		parts.append(f"{r:0{_CHUNK}d}")
	parts.append(str(n))
	return "".join(reversed(parts))

class Rational:
	"""Exact fraction kept in lowest terms.

	The sign may sit on either field, so comparisons go through
	cross-multiplication and never through the stored pair directly.
	"""
	__slots__ = ("_p", "_q")
	def __init__(self, num: int | Fraction, den: int | None = None) -> None:
		if isinstance(num, Fraction):
			if den is not None:
				raise TypeError("denominator not allowed with a Fraction")
			num, den = num.numerator, num.denominator
		if den is None:
			den = 1
		if not isinstance(num, int) or not isinstance(den, int):
			raise TypeError(f"Rational needs integer parts, got {type(num).__name__}/{type(den).__name__}")
		if den == 0:
			raise InvalidDenominator()
		check_width(num, den)
		if num != 0:
			g = gcd(abs(num), abs(den))
			num //= g
			den //= g
		self._p = num
		self._q = den

	@classmethod
	def new(cls, p: int, q: int) -> Rational:
		return cls(p, q)

	@classmethod
	def new_unchecked(cls, p: int, q: int) -> Rational:
		# caller guarantees p/q is already reduced
		if q == 0:
			raise InvalidDenominator()
		check_width(p, q)
		r = object.__new__(cls)
		r._p = p
		r._q = q
		return r

	@classmethod
	def from_integer(cls, n: int) -> Rational:
		return cls.new_unchecked(n, 1)

	@classmethod
	def parse(cls, text: str) -> Rational:
		# Local import to keep the engine free of parser imports at load time
		from decimal_parser import parse as _parse_decimal
		return _parse_decimal(text)

	def numerator(self) -> int:
		return self._p
	def denominator(self) -> int:
		return self._q

	def canonical(self) -> Tuple[int, int]:
		"""Reduced (p, q) with q > 0; zero maps to (0, 1)."""
		p, q = self._p, self._q
		if p == 0:
			return 0, 1
		g = gcd(abs(p), abs(q))
		p, q = p // g, q // g
		if q < 0:
			p, q = -p, -q
		return p, q

	def signum(self) -> int:
		return _sign(self._p) * _sign(self._q)

	# -----------------
	# Arithmetic
	# -----------------
	def __add__(self, other: Rational | int | Fraction) -> Rational:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return Rational(self._p * o._q + o._p * self._q, self._q * o._q)
	def __radd__(self, other: int | Fraction) -> Rational:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return o + self
	def __sub__(self, other: Rational | int | Fraction) -> Rational:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return self + (-o)
	def __rsub__(self, other: int | Fraction) -> Rational:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return o - self
	def __mul__(self, other: Rational | int | Fraction) -> Rational:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return Rational(self._p * o._p, self._q * o._q)
	def __rmul__(self, other: int | Fraction) -> Rational:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return o * self
	def __truediv__(self, other: Rational | int | Fraction) -> Rational:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		if o == ZERO:
			raise DivisionByZero()
		return Rational(self._p * o._q, self._q * o._p)
	def __rtruediv__(self, other: int | Fraction) -> Rational:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return o / self
	def __neg__(self) -> Rational:
		# negation keeps the pair coprime
		return Rational.new_unchecked(-self._p, self._q)
	def __pos__(self) -> Rational:
		return self
	def __abs__(self) -> Rational:
		return Rational.new_unchecked(abs(self._p), abs(self._q))
	def __pow__(self, exp: int) -> Rational:
		if not isinstance(exp, int):
			return NotImplemented
		if exp == 0:
			return Rational(1,1)
		base = self
		if exp < 0:
			base = ONE / self
			exp = -exp
		# powers of coprime numbers stay coprime
		return Rational.new_unchecked(base._p ** exp, base._q ** exp)

	# -----------------
	# Comparison
	# -----------------
	def __eq__(self, other: object) -> bool:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		lhs, rhs = self._p * o._q, self._q * o._p
		check_width(lhs, rhs)
		return lhs == rhs
	def _cmp(self, other: Rational) -> int:
		sa, sb = self.signum(), other.signum()
		if sa != sb:
			return -1 if sa < sb else 1
		if sa == 0:
			return 0
		lhs, rhs = self._p * other._q, self._q * other._p
		check_width(lhs, rhs)
		lhs, rhs = abs(lhs), abs(rhs)
		c = (lhs > rhs) - (lhs < rhs)
		# larger magnitude means smaller value below zero
		return -c if sa < 0 else c
	def __lt__(self, other: Rational | int | Fraction) -> bool:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return self._cmp(o) < 0
	def __le__(self, other: Rational | int | Fraction) -> bool:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return self._cmp(o) <= 0
	def __gt__(self, other: Rational | int | Fraction) -> bool:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return self._cmp(o) > 0
	def __ge__(self, other: Rational | int | Fraction) -> bool:
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return self._cmp(o) >= 0
	def __hash__(self) -> int:
		# same hash as the equal Fraction (and int), whatever the stored sign split
		p, q = self.canonical()
		return hash(Fraction(p, q))
	def __bool__(self) -> bool:
		return self._p != 0

	# -----------------
	# Conversion
	# -----------------
	def is_zero(self) -> bool:
		return self._p == 0
	def is_int(self) -> bool:
		return self.canonical()[1] == 1
	def to_int(self) -> int:
		p, q = self.canonical()
		return p // q
	def to_fraction(self) -> Fraction:
		return Fraction(*self.canonical())
	def __float__(self) -> float:
		return self._p / self._q
	def to_string(self) -> str:
		p, q = self.canonical()
		if q == 1:
			return int_to_digits(p)
		return f"{int_to_digits(p)}/{int_to_digits(q)}"
	def __str__(self) -> str:
		return self.to_string()
	def __repr__(self) -> str:
		return f"Rational({int_to_digits(self._p)}, {int_to_digits(self._q)})"

def _coerce(value: object) -> Union[Rational, None]:
	if isinstance(value, Rational):
		return value
	if isinstance(value, bool):
		return None
	if isinstance(value, int):
		return Rational.from_integer(value)
	if isinstance(value, Fraction):
		return Rational.new_unchecked(value.numerator, value.denominator)
	return None

ZERO = Rational.from_integer(0)
ONE = Rational.from_integer(1)
