"""
Fixed-point discovery for f(z) = b^z.

Direct iteration from z₀ = 1 finds the attracting fixed point whenever 1 lies
in its basin; the candidate is then polished by Newton on g(z) = z − f(z) so
that z* holds to the working precision (the Koenigs map amplifies any error
in z* by |λ|^−K). When direct iteration diverges, stalls or lands on a
non-attracting point, Newton is started from z₀ = 1 instead.
"""

from __future__ import annotations
import math
from typing import Optional, Tuple

from tetration.numeric.engine import ComplexEngine
from tetration.solver.config import FixedPoint, SolverConfig
from tetration.solver.expmap import ExponentialMap


class FixedPointLocator:
	"""Locate an attracting fixed point z* = b^{z*} with multiplier |λ| < 1."""

	def __init__(self, engine: ComplexEngine, config: SolverConfig | None = None) -> None:
		self.engine = engine
		self.config = config or SolverConfig()

	def _working_digits(self) -> int:
		return max(1, int(math.floor(self.engine.decimal_digits())) - int(self.config.guard_digits))

	def iteration_digits(self) -> int:
		"""Digits for the successive-difference test, capped by the precision."""
		return min(int(self.config.fixed_point_digits), self._working_digits())

	def newton_digits(self) -> int:
		"""Digits for the |g(z)| test: explicit override or working digits minus guard."""
		if self.config.fixed_point_tol_digits is not None:
			return int(self.config.fixed_point_tol_digits)
		return self._working_digits()

	def iterate(self, fmap: ExponentialMap) -> Tuple[Optional[object], int]:
		"""
		Forward iteration u ← f(u) from 1. Returns (candidate, steps); candidate
		is None when the budget runs out or |u| crosses the divergence threshold.
		"""
		eng = self.engine
		tol = eng.tolerance(self.iteration_digits())
		limit = eng.ctx.mpf(self.config.divergence_threshold)
		u = eng.one()
		for i in range(int(self.config.fixed_point_max_iter)):
			last = u
			u = fmap(u)
			if eng.abs(u - last) < tol:
				return u, i + 1
			if not eng.is_finite(u) or eng.abs(u) > limit:
				return None, i + 1
		return None, int(self.config.fixed_point_max_iter)

	def newton(self, fmap: ExponentialMap, z0) -> Tuple[object, bool, int]:
		"""
		Newton on g(z) = z − f(z), g'(z) = 1 − ln(b)·f(z).
		Returns (z, converged, steps). Stops early on a zero or non-finite
		derivative; exhausting the budget returns the last iterate unconverged.
		"""
		eng = self.engine
		tol = eng.tolerance(self.newton_digits())
		one = eng.one()
		z = eng.const(z0)
		steps = int(self.config.fixed_point_newton_steps)
		for i in range(steps):
			fz = fmap(z)
			g = z - fz
			scale = max(eng.ctx.mpf(1), eng.abs(z))
			if eng.abs(g) < tol * scale:
				return z, True, i
			gp = one - fmap.derivative_from_value(fz)
			if gp == 0 or not eng.is_finite(gp) or not eng.is_finite(g):
				return z, False, i + 1
			z = z - g / gp
		g = z - fmap(z)
		ok = eng.is_finite(g) and eng.abs(g) < tol * max(eng.ctx.mpf(1), eng.abs(z))
		return z, bool(ok), steps

	def _attracting(self, fmap: ExponentialMap, z) -> bool:
		if not self.engine.is_finite(z):
			return False
		return bool(self.engine.abs(fmap.multiplier(z)) < 1)

	def locate(self, fmap: ExponentialMap) -> Optional[FixedPoint]:
		"""Return the attracting FixedPoint, or None when no candidate qualifies."""
		cand, n_iter = self.iterate(fmap)
		if cand is not None and self._attracting(fmap, cand):
			z, ok, n_newton = self.newton(fmap, cand)
			if not self._attracting(fmap, z):
				z, ok = cand, False
			return FixedPoint(
				zstar=z,
				lam=fmap.multiplier(z),
				method="iteration",
				converged=bool(ok),
				iterations=n_iter + n_newton,
			)

		z, ok, n_newton = self.newton(fmap, self.engine.one())
		if ok and self._attracting(fmap, z):
			return FixedPoint(
				zstar=z,
				lam=fmap.multiplier(z),
				method="newton",
				converged=True,
				iterations=n_iter + n_newton,
			)
		return None
