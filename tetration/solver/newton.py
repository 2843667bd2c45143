"""
Newton inversion of the truncated Koenigs map: find w with Φ_K(w) = y.

No closed form for φ^{−1} exists, so f^{∘h}(1) = φ^{−1}(λ^h·φ(1)) is obtained
numerically. The first-order local inverse w₀ = z* + y seeds the iteration
(φ is close to the identity shifted by z* near the fixed point).
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from tetration.solver.config import SolverConfig
from tetration.solver.koenigs import KoenigsMap


@dataclass(frozen=True)
class Inversion:
	"""
	Result of a Newton inversion.

	value     : final iterate w (one step past the residual test when converged)
	converged : True iff |Φ_K(w) − y| met the tolerance
	steps     : Newton steps taken
	residual  : |Φ_K(w) − y| at the last evaluation (float)
	"""
	value: object
	converged: bool
	steps: int
	residual: float


class NewtonInverter:
	"""Solve Φ_K(w) = y by Newton's method with an analytic derivative."""

	def __init__(self, kmap: KoenigsMap, config: SolverConfig | None = None) -> None:
		self.kmap = kmap
		self.engine = kmap.engine
		self.config = config or SolverConfig()

	def tolerance_digits(self) -> int:
		"""
		Residual digits: explicit override, else half the working digits minus
		the guard (Φ_K carries rounding noise of about 10^{−digs/2}).
		"""
		if self.config.inverse_tol_digits is not None:
			return int(self.config.inverse_tol_digits)
		half = int(math.floor(self.engine.decimal_digits() / 2.0))
		return max(1, half - int(self.config.guard_digits))

	def initial_guess(self, y):
		return self.kmap.zstar + y

	def solve(self, y, w0=None) -> Inversion:
		eng = self.engine
		tol = eng.tolerance(self.tolerance_digits())
		w = self.initial_guess(y) if w0 is None else eng.const(w0)
		residual = float("inf")
		steps = int(self.config.inverse_newton_steps)
		for step in range(steps):
			phi, dphi = self.kmap.phi_and_derivative(w)
			resid = phi - y
			residual = eng.abs_float(resid)
			if dphi == 0 or not eng.is_finite(dphi) or not eng.is_finite(resid):
				return Inversion(value=w, converged=False, steps=step + 1, residual=residual)
			if eng.abs(resid) < tol:
				# residual met: one final step before returning
				return Inversion(value=w - resid / dphi, converged=True, steps=step + 1, residual=residual)
			w = w - resid / dphi
		return Inversion(value=w, converged=False, steps=steps, residual=residual)
