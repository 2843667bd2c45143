"""
Numeric engine (single source of arbitrary-precision complex arithmetic)
----------------------------------------------------------------------
Thin adapter over an isolated `mpmath.MPContext`, one per bit precision:

  • parse / from_parts     → mpc rounded to the engine precision
  • add/sub/mul/div/neg/inv/conj, sqrt, exp, log, pow, trig + hyperbolic
  • exp(z)                 → saturates like MPFR once Re z leaves the binary exponent range
  • fixed / scientific     → "a+bi" strings, and per-component strings

Notes
-----
- The global `mpmath.mp` context is never touched; independent solves can run
  side by side without sharing precision state.
- Every value returned is an immutable mpmath `mpc` owned by this engine's
  context, so arithmetic operators on them round to the same precision.
- pow(a, b) is defined as exp(b·log a) on the principal branch.
"""

from __future__ import annotations
import math

import mpmath
from mpmath.libmp import to_str

from tetration.errors import PrecisionError
from tetration.io.literals import LiteralParser


# MPFR's default exponent range is about 2^62; beyond it exp() overflows to inf.
_EXP_BINARY_LIMIT = 62
_LOG10_2 = math.log10(2.0)


def _check_prec(prec) -> int:
	"""Return `prec` as a positive int or raise PrecisionError."""
	if isinstance(prec, bool) or not isinstance(prec, int):
		raise PrecisionError(f"precision must be a positive integer number of bits, got {prec!r}")
	if prec <= 0:
		raise PrecisionError(f"precision must be a positive integer number of bits, got {prec}")
	return prec


class ComplexEngine:
	"""
	Arbitrary-precision complex arithmetic at one fixed bit precision.

	Parameters
	----------
	prec : int
		Precision in bits for the real and imaginary parts.
	"""

	def __init__(self, prec: int) -> None:
		self.prec = _check_prec(prec)
		ctx = mpmath.MPContext()
		ctx.prec = self.prec
		self.ctx = ctx
		self._exp_limit = ctx.mpf(2) ** _EXP_BINARY_LIMIT * ctx.ln2

	def __repr__(self) -> str:
		return f"ComplexEngine(prec={self.prec})"

	# ------------------------------------------------------------------ construction

	def parse(self, text: str):
		"""Parse a complex literal (see tetration.io.literals)."""
		return LiteralParser.parse(text, self.ctx)

	def from_parts(self, re: str, im: str = "0"):
		"""Build re + i·im from two decimal/scientific literal strings."""
		return LiteralParser.parse_pair(re, im, self.ctx)

	def const(self, x):
		"""Coerce a Python/mpmath number (or literal string) into this engine."""
		if isinstance(x, str):
			return self.parse(x)
		if isinstance(x, self.ctx.mpc):
			return x
		return self.ctx.mpc(x)

	def zero(self):
		return self.ctx.mpc(0)

	def one(self):
		return self.ctx.mpc(1)

	# ------------------------------------------------------------------ precision helpers

	def decimal_digits(self) -> float:
		"""Approximate decimal digits carried by the precision: prec·log10(2)."""
		return float(self.prec) * _LOG10_2

	def digits(self) -> int:
		"""Printing digits: max(1, floor(prec·log10 2) − 5)."""
		return max(1, int(math.floor(self.decimal_digits())) - 5)

	def tolerance(self, digits: int):
		"""Return the real threshold 10^(−digits) at this precision."""
		return self.ctx.mpf(10) ** (-int(digits))

	# ------------------------------------------------------------------ arithmetic

	def add(self, a, b):
		return self.const(a) + self.const(b)

	def sub(self, a, b):
		return self.const(a) - self.const(b)

	def mul(self, a, b):
		return self.const(a) * self.const(b)

	def div(self, a, b):
		return self.const(a) / self.const(b)

	def neg(self, a):
		return -self.const(a)

	def inv(self, a):
		return self.ctx.mpc(1) / self.const(a)

	def conj(self, a):
		return self.ctx.conj(self.const(a))

	# ------------------------------------------------------------------ transcendental

	def _saturated(self, theta):
		"""Overflowed exp(x + iθ): infinite modulus with the signs of cos θ, sin θ."""
		if not self.ctx.isfinite(theta):
			return self.ctx.mpc(self.ctx.inf, self.ctx.nan)
		out = []
		for part in (self.ctx.cos(theta), self.ctx.sin(theta)):
			if part > 0:
				out.append(self.ctx.inf)
			elif part < 0:
				out.append(self.ctx.ninf)
			else:
				out.append(self.ctx.zero)
		return self.ctx.mpc(out[0], out[1])

	def exp(self, z):
		"""Protected exponential: overflows to inf and underflows to 0 outside the exponent range."""
		z = self.const(z)
		re = z.real
		if self.ctx.isnan(re):
			return self.ctx.mpc(self.ctx.nan, self.ctx.nan)
		if re > self._exp_limit:
			return self._saturated(z.imag)
		if re < -self._exp_limit:
			return self.zero()
		return self.ctx.exp(z)

	def log(self, z):
		"""Principal natural logarithm."""
		return self.ctx.log(self.const(z))

	def pow(self, a, b):
		"""a^b := exp(b·log a), principal branch."""
		return self.exp(self.const(b) * self.log(a))

	def sqrt(self, z):
		return self.ctx.sqrt(self.const(z))

	def sin(self, z):
		return self.ctx.sin(self.const(z))

	def cos(self, z):
		return self.ctx.cos(self.const(z))

	def tan(self, z):
		return self.ctx.tan(self.const(z))

	def asin(self, z):
		return self.ctx.asin(self.const(z))

	def acos(self, z):
		return self.ctx.acos(self.const(z))

	def atan(self, z):
		return self.ctx.atan(self.const(z))

	def sinh(self, z):
		return self.ctx.sinh(self.const(z))

	def cosh(self, z):
		return self.ctx.cosh(self.const(z))

	def tanh(self, z):
		return self.ctx.tanh(self.const(z))

	def asinh(self, z):
		return self.ctx.asinh(self.const(z))

	def acosh(self, z):
		return self.ctx.acosh(self.const(z))

	def atanh(self, z):
		return self.ctx.atanh(self.const(z))

	def abs(self, z):
		"""Modulus |z| as a real mpf."""
		return self.ctx.fabs(self.const(z))

	def arg(self, z):
		"""Principal argument in (−π, π]."""
		return self.ctx.arg(self.const(z))

	def is_finite(self, z) -> bool:
		z = self.const(z)
		return bool(self.ctx.isfinite(z.real) and self.ctx.isfinite(z.imag))

	def abs_float(self, z) -> float:
		"""|z| as a Python float (inf when it exceeds the double range)."""
		a = self.abs(z)
		if self.ctx.isnan(a):
			return float("nan")
		if a > self.ctx.mpf("1e300"):
			return float("inf")
		return float(a)

	# ------------------------------------------------------------------ rendering

	def _fixed_real(self, x, digits: int) -> str:
		"""Render a real mpf with exactly `digits` fractional digits (0 → integer only)."""
		ctx = self.ctx
		d = max(0, int(digits))
		if ctx.isnan(x):
			return "nan"
		if ctx.isinf(x):
			return "inf" if x > 0 else "-inf"
		with ctx.extraprec(int(d * 3.33) + 16):
			n = int(ctx.nint(x * ctx.mpf(10) ** d))
		sign = "-" if x < 0 else ""
		body = str(abs(n)).rjust(d + 1, "0")
		if d == 0:
			return sign + body
		return f"{sign}{body[:-d]}.{body[-d:]}"

	def _sci_real(self, x, digits: int) -> str:
		"""Render a real mpf as d.ddd…e±N with `digits` digits after the point."""
		d = max(1, int(digits))
		return to_str(x._mpf_, d + 1, strip_zeros=False, min_fixed=0, max_fixed=0, show_zero_exponent=True)

	@staticmethod
	def _join(re_s: str, im_s: str) -> str:
		"""Join component strings as a+bi / a-bi."""
		if im_s.startswith("-"):
			return f"{re_s}-{im_s[1:]}i"
		return f"{re_s}+{im_s.lstrip('+')}i"

	def fixed(self, z, digits: int) -> str:
		z = self.const(z)
		return self._join(self._fixed_real(z.real, digits), self._fixed_real(z.imag, digits))

	def scientific(self, z, digits: int) -> str:
		z = self.const(z)
		return self._join(self._sci_real(z.real, digits), self._sci_real(z.imag, digits))

	def real_fixed(self, z, digits: int) -> str:
		return self._fixed_real(self.const(z).real, digits)

	def imag_fixed(self, z, digits: int) -> str:
		return self._fixed_real(self.const(z).imag, digits)

	def real_scientific(self, z, digits: int) -> str:
		return self._sci_real(self.const(z).real, digits)

	def imag_scientific(self, z, digits: int) -> str:
		return self._sci_real(self.const(z).imag, digits)

	def abs_fixed(self, z, digits: int) -> str:
		return self._fixed_real(self.abs(z), digits)

	def abs_scientific(self, z, digits: int) -> str:
		return self._sci_real(self.abs(z), digits)

	def arg_fixed(self, z, digits: int) -> str:
		return self._fixed_real(self.arg(z), digits)

	def arg_scientific(self, z, digits: int) -> str:
		return self._sci_real(self.arg(z), digits)
