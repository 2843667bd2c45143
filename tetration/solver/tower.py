from __future__ import annotations
import math
from typing import Optional

from tetration.numeric.engine import ComplexEngine
from tetration.solver.config import SolverConfig
from tetration.solver.expmap import ExponentialMap


def power_tower(fmap: ExponentialMap, n: int):
	"""
	Right-associated power tower: x₀ = 1, x_{i+1} = b^{x_i}, return x_n.
	Divergent towers saturate at inf/0 through the engine's exponential; the
	loop stops at the first non-finite level.
	"""
	n = int(n)
	if n < 0:
		raise ValueError(f"tower height must be non-negative, got {n}")
	eng = fmap.engine
	u = eng.one()
	for _ in range(n):
		u = fmap(u)
		if not eng.is_finite(u):
			break
	return u


def integer_height(h, engine: ComplexEngine, config: SolverConfig | None = None) -> Optional[int]:
	"""
	Return n when h is a non-negative real integer within 10^(−integer_height_digits)
	(capped by the working precision), else None.
	"""
	cfg = config or SolverConfig()
	h = engine.const(h)
	if not engine.is_finite(h):
		return None
	working = max(1, int(math.floor(engine.decimal_digits())) - int(cfg.guard_digits))
	tol = engine.tolerance(min(int(cfg.integer_height_digits), working))
	if abs(h.imag) >= tol:
		return None
	n = engine.ctx.nint(h.real)
	if abs(h.real - n) >= tol:
		return None
	n = int(n)
	if n < 0:
		return None
	return n
