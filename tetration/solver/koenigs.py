"""
Truncated Koenigs (Schröder) linearization at an attracting fixed point.

  φ(z) = lim_{n→∞} λ^{−n}(f^{∘n}(z) − z*)  ≈  Φ_K(z) = λ^{−K}(f^{∘K}(z) − z*)

λ^{−K} is formed as 1 / exp(K·log λ) rather than as a negative power, so the
branch of log λ enters once and the inverse is a single division.
"""

from __future__ import annotations
from typing import Tuple

import numpy as np

from tetration.errors import DegenerateDerivativeError, NonAttractingRegimeError
from tetration.numeric.engine import ComplexEngine
from tetration.solver.config import SolverConfig
from tetration.solver.expmap import ExponentialMap


def required_depth(lam, engine: ComplexEngine) -> float:
	"""
	Unclipped depth K = ceil((digs/2) / (−log10|λ|)), digs = prec·log10(2),
	so that |λ|^K ≈ 10^{−digs/2}. inf when |λ| is too close to 1 to resolve.

	Raises DegenerateDerivativeError for |λ| = 0 or non-finite λ and
	NonAttractingRegimeError for |λ| ≥ 1.
	"""
	if not engine.is_finite(lam):
		raise DegenerateDerivativeError("invalid derivative magnitude at fixed point")
	lam_abs = engine.abs(lam)
	if lam_abs == 0:
		raise DegenerateDerivativeError("invalid derivative magnitude at fixed point")
	if lam_abs >= 1:
		raise NonAttractingRegimeError("|λ| >= 1 (not attracting)")
	digs = engine.decimal_digits()
	decay = -float(engine.ctx.log10(lam_abs))
	if not np.isfinite(decay) or decay <= 0.0:
		return float("inf")
	return float(np.ceil((digs / 2.0) / decay))


def select_depth(lam, engine: ComplexEngine, config: SolverConfig | None = None) -> int:
	"""required_depth clipped to [depth_min, depth_cap]."""
	cfg = config or SolverConfig()
	k = required_depth(lam, engine)
	return int(np.clip(k, int(cfg.depth_min), int(cfg.depth_cap)))


class KoenigsMap:
	"""
	Φ_K for a fixed (f, z*, λ, K) at the engine precision.

	Parameters
	----------
	fmap : ExponentialMap
		The iteration map f(z) = b^z.
	zstar, lam : mpc
		Attracting fixed point and its multiplier.
	depth : int
		Number of forward iterations K.
	"""

	def __init__(self, fmap: ExponentialMap, zstar, lam, depth: int) -> None:
		self.fmap = fmap
		self.engine = fmap.engine
		self.zstar = zstar
		self.lam = lam
		self.depth = int(depth)
		lam_pow = self.engine.exp(self.engine.log(lam) * self.depth)
		self.lam_inv_pow = self.engine.inv(lam_pow)

	def phi(self, z):
		"""Φ_K(z) = λ^{−K}(f^{∘K}(z) − z*)."""
		u = self.fmap.iterate(z, self.depth)
		return self.lam_inv_pow * (u - self.zstar)

	def phi_and_derivative(self, w) -> Tuple[object, object]:
		"""
		Return (Φ_K(w), Φ_K'(w)). The derivative of the K-fold composition is
		accumulated by the chain rule, der ← der·f'(u_k), alongside the iterates.
		"""
		u = self.engine.const(w)
		der = self.engine.one()
		for _ in range(self.depth):
			v = self.fmap(u)
			der = der * self.fmap.derivative_from_value(v)
			u = v
		return self.lam_inv_pow * (u - self.zstar), self.lam_inv_pow * der

	def multiplier_power(self, h):
		"""λ^h = exp(h·log λ) on the principal branch."""
		return self.engine.exp(self.engine.log(self.lam) * self.engine.const(h))
