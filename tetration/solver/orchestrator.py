"""
Tetration orchestrator: T_b(h) = f^{∘h}(1) with f(z) = b^z.

States
------
  CheckConstantBase → LocateFixedPoint → Attracting?
      → Linearize+Invert (Schröder/Koenigs)          → Done
      → IntegerFallback (non-negative integer height) → Done
      → Failed (NonAttractingRegimeError / DegenerateDerivativeError)

Every terminal state reports the method tag that produced the value, and the
solve keeps a structured trace of LogEvent records in `solver.events`.
"""

from __future__ import annotations
from typing import Dict, List, Optional

from tetration.errors import (
	NON_ATTRACTING_MESSAGE,
	DegenerateDerivativeError,
	NonAttractingRegimeError,
	ParseError,
)
from tetration.numeric.engine import ComplexEngine
from tetration.solver.config import (
	METHOD_CONSTANT,
	METHOD_SCHROEDER,
	METHOD_TOWER,
	FixedPoint,
	LogEvent,
	SolveResult,
	SolverConfig,
)
from tetration.solver.expmap import ExponentialMap
from tetration.solver.fixed_point import FixedPointLocator
from tetration.solver.koenigs import KoenigsMap, required_depth, select_depth
from tetration.solver.newton import NewtonInverter
from tetration.solver.tower import integer_height, power_tower


_EVENT_DIGITS = 20


class TetrationSolver:
	"""
	Solve T_b(h) at one bit precision. One instance owns one ComplexEngine;
	every value of a solve is created in it.
	"""

	def __init__(self, prec: int, config: SolverConfig | None = None) -> None:
		self.engine = ComplexEngine(prec)
		self.config = config or SolverConfig()
		self.events: List[LogEvent] = []

	@property
	def prec(self) -> int:
		return self.engine.prec

	def _emit(self, kind: str, payload: Dict[str, object]) -> None:
		self.events.append(LogEvent(ts=len(self.events), kind=kind, payload=payload))

	def _sci(self, z) -> str:
		return self.engine.scientific(z, _EVENT_DIGITS)

	def is_unit_base(self, b) -> bool:
		"""True iff |b − 1| < 10^(−unit_base_digits); then f ≡ 1."""
		eng = self.engine
		return bool(eng.abs(eng.const(b) - eng.one()) < eng.tolerance(self.config.unit_base_digits))

	def _result(self, value, method: str, **kw) -> SolveResult:
		self._emit("done", {"method": method, "value": self._sci(value), "converged": bool(kw.get("converged", True))})
		return SolveResult(value=value, method=method, prec=self.prec, events=list(self.events), **kw)

	def _schroeder(self, fmap: ExponentialMap, fp: FixedPoint, h) -> SolveResult:
		"""Linearize at z*, map 1 forward by λ^h in Koenigs coordinates, and invert."""
		eng = self.engine
		depth = select_depth(fp.lam, eng, self.config)
		capped = required_depth(fp.lam, eng) > self.config.depth_cap
		self._emit("depth", {"K": depth, "abs_lambda": eng.abs_float(fp.lam), "capped": capped})
		if capped:
			print(f"tetrate: depth capped at K={depth}; |λ|^K is above the precision target")
		kmap = KoenigsMap(fmap, fp.zstar, fp.lam, depth)
		phi1 = kmap.phi(eng.one())
		y = kmap.multiplier_power(h) * phi1
		inv = NewtonInverter(kmap, self.config).solve(y)
		self._emit("inversion", {
			"converged": inv.converged,
			"steps": inv.steps,
			"residual": inv.residual,
		})
		if not inv.converged:
			print("tetrate: Newton inversion exhausted its step budget; returning last iterate")
		return self._result(
			inv.value,
			METHOD_SCHROEDER,
			converged=bool(inv.converged and fp.converged and not capped),
			fixed_point=fp,
			depth=depth,
			depth_capped=capped,
		)

	def solve(self, base, height) -> SolveResult:
		"""
		Return SolveResult for T_base(height). `base` and `height` may be
		literals (see tetration.io.literals) or numbers.

		Raises ParseError, NonAttractingRegimeError or DegenerateDerivativeError.
		"""
		self.events = []
		eng = self.engine
		b = eng.const(base)
		h = eng.const(height)
		for name, v in (("base", b), ("height", h)):
			if not eng.is_finite(v):
				raise ParseError(f"{name} must be finite")
		self._emit("start", {"base": self._sci(b), "height": self._sci(h), "prec": self.prec})

		if self.is_unit_base(b):
			self._emit("constant_base", {})
			return self._result(eng.one(), METHOD_CONSTANT)

		try:
			fmap = ExponentialMap(eng, b)
		except DegenerateDerivativeError as exc:
			self._emit("failed", {"reason": str(exc)})
			raise

		fp = FixedPointLocator(eng, self.config).locate(fmap)
		cause: Optional[Exception] = None
		if fp is None:
			self._emit("fixed_point", {"found": False})
		else:
			self._emit("fixed_point", {
				"found": True,
				"zstar": self._sci(fp.zstar),
				"lambda": self._sci(fp.lam),
				"method": fp.method,
				"converged": fp.converged,
				"iterations": fp.iterations,
			})
			try:
				return self._schroeder(fmap, fp, h)
			except (DegenerateDerivativeError, NonAttractingRegimeError, ZeroDivisionError) as exc:
				print(f"tetrate: Schröder path failed ({exc}); trying integer fallback")
				self._emit("fallback", {"reason": str(exc)})
				cause = exc

		n = integer_height(h, eng, self.config)
		if n is not None:
			self._emit("tower", {"n": n})
			return self._result(power_tower(fmap, n), METHOD_TOWER)

		self._emit("failed", {"reason": NON_ATTRACTING_MESSAGE})
		if isinstance(cause, DegenerateDerivativeError):
			raise DegenerateDerivativeError(f"{cause}; {NON_ATTRACTING_MESSAGE}") from cause
		raise NonAttractingRegimeError()


def tetrate(base, height, prec: int, config: SolverConfig | None = None) -> SolveResult:
	"""Compute T_base(height) at `prec` bits with a fresh solver."""
	return TetrationSolver(prec, config).solve(base, height)
