from __future__ import annotations
import math
from typing import Iterable, Tuple

import numpy as np

from tetration.solver.config import METHOD_SCHROEDER, SolverConfig
from tetration.solver.expmap import ExponentialMap
from tetration.solver.orchestrator import TetrationSolver
from tetration.solver.tower import power_tower


class FunctionalProbe:
	"""
	Consistency oracles for computed tetrations.

	All checks evaluate at a fixed precision with the same SolverConfig and
	report raw discrepancies; deciding pass/fail is left to the caller via `tol`.
	"""

	def __init__(self, config: SolverConfig | None = None) -> None:
		self.config = config or SolverConfig()

	@staticmethod
	def height_grid(lo: float, hi: float, n: int) -> Tuple[str, ...]:
		"""
		Return n deterministic, evenly spaced real heights in [lo, hi] as literals.
		"""
		n = int(n)
		if n <= 0:
			return ()
		grid = np.linspace(float(lo), float(hi), n)
		out: list[str] = []
		for v in grid:
			out.append(repr(float(v)))
		return tuple(out)

	def functional_equation(
		self,
		base,
		heights: Iterable,
		prec: int,
		tol: float,
	) -> Tuple[bool, float, int, int]:
		"""
		Check b^{T(h)} ≈ T(h+1) for each height. Returns
		(all_within_tol, max_abs_diff, count_exceeding_tol, total_evaluations).
		"""
		solver = TetrationSolver(prec, self.config)
		eng = solver.engine
		fmap = ExponentialMap(eng, base)
		diffs: list[float] = []
		for h in heights:
			hv = eng.const(h)
			r = solver.solve(base, hv).value
			r_next = solver.solve(base, hv + 1).value
			diffs.append(eng.abs_float(fmap(r) - r_next))
		d = np.asarray(diffs, dtype=np.float64)
		if d.size == 0:
			return True, 0.0, 0, 0
		max_abs = float(np.max(d))
		over = int(np.count_nonzero(~(d <= float(tol))))
		return over == 0, max_abs, over, int(d.size)

	def integer_consistency(self, base, n: int, prec: int) -> float:
		"""
		|Schröder result − direct power tower| at integer height n. Raises
		ValueError when the Schröder path does not apply to `base`.
		"""
		solver = TetrationSolver(prec, self.config)
		res = solver.solve(base, int(n))
		if res.method != METHOD_SCHROEDER:
			raise ValueError(f"integer_consistency needs an attracting base; solve used {res.method!r}")
		eng = solver.engine
		tower = power_tower(ExponentialMap(eng, base), int(n))
		return eng.abs_float(res.value - tower)

	def precision_stability(self, base, height, prec_lo: int, prec_hi: int) -> float:
		"""
		Number of agreeing decimal digits between the solves at prec_lo and
		prec_hi, measured relative to max(1, |T|) at the higher precision.
		"""
		lo = TetrationSolver(prec_lo, self.config).solve(base, height).value
		hi_solver = TetrationSolver(prec_hi, self.config)
		hi = hi_solver.solve(base, height).value
		eng = hi_solver.engine
		diff = eng.abs(eng.const(lo) - hi)
		scale = max(eng.ctx.mpf(1), eng.abs(hi))
		if diff == 0:
			return float(max(prec_lo, prec_hi)) * math.log10(2.0)
		return float(-eng.ctx.log10(diff / scale))
