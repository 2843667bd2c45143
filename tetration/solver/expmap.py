from __future__ import annotations

from tetration.errors import DegenerateDerivativeError
from tetration.numeric.engine import ComplexEngine


class ExponentialMap:
	"""
	The iteration map f(z) = b^z = exp(ln(b)·z) (principal branch) at one precision.

	ln(b) is computed once; f'(z) = ln(b)·f(z), so callers that already hold
	f(z) get the derivative for one extra multiplication.
	"""

	def __init__(self, engine: ComplexEngine, base) -> None:
		self.engine = engine
		self.base = engine.const(base)
		if self.base == 0:
			raise DegenerateDerivativeError("base must be nonzero: ln(b) is undefined at b = 0")
		self.lnb = engine.log(self.base)

	def __call__(self, z):
		return self.engine.exp(self.lnb * z)

	def derivative_from_value(self, fz):
		"""f'(z) given fz = f(z)."""
		return self.lnb * fz

	def iterate(self, z, n: int):
		"""Return f^{∘n}(z) for n ≥ 0."""
		u = self.engine.const(z)
		for _ in range(int(n)):
			u = self(u)
		return u

	def multiplier(self, zstar):
		"""λ = f'(z*) = ln(b)·z* at a fixed point z*."""
		return self.lnb * zstar
