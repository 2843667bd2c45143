"""
Solver configuration and typed containers for a single tetration solve.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional


METHOD_SCHROEDER = "Schröder (Koenigs) fractional iteration"
METHOD_TOWER = "integer tower fallback"
METHOD_CONSTANT = "constant base=1"


@dataclass(frozen=True)
class SolverConfig:
	"""
	Step budgets, depth bounds and tolerances.

	The loops are bounded only by these budgets, so they double as the
	latency limit of a solve. Tolerance fields set to None are derived from
	the working precision (see FixedPointLocator / NewtonInverter).
	"""
	fixed_point_max_iter: int = 2000
	fixed_point_digits: int = 20
	divergence_threshold: float = 1e12
	fixed_point_newton_steps: int = 100
	fixed_point_tol_digits: Optional[int] = None
	depth_min: int = 8
	depth_cap: int = 2000
	inverse_newton_steps: int = 80
	inverse_tol_digits: Optional[int] = None
	unit_base_digits: int = 30
	integer_height_digits: int = 30
	guard_digits: int = 5

	def __post_init__(self) -> None:
		for name in ("fixed_point_max_iter", "fixed_point_newton_steps", "inverse_newton_steps", "depth_min", "depth_cap"):
			if int(getattr(self, name)) < 1:
				raise ValueError(f"{name} must be >= 1")
		if self.depth_cap < self.depth_min:
			raise ValueError("depth_cap must be >= depth_min")
		if not (self.divergence_threshold > 0.0):
			raise ValueError("divergence_threshold must be positive")
		if self.guard_digits < 0:
			raise ValueError("guard_digits must be >= 0")
		for name in ("fixed_point_digits", "unit_base_digits", "integer_height_digits"):
			if int(getattr(self, name)) < 1:
				raise ValueError(f"{name} must be >= 1")
		for name in ("fixed_point_tol_digits", "inverse_tol_digits"):
			v = getattr(self, name)
			if v is not None and int(v) < 1:
				raise ValueError(f"{name} must be None or >= 1")


@dataclass(frozen=True)
class FixedPoint:
	"""
	Located fixed point z* = b^{z*} and multiplier λ = ln(b)·z*.

	method     : "iteration" (direct iteration polished by Newton) or "newton"
	converged  : whether the Newton solve met its tolerance
	iterations : direct-iteration steps + Newton steps actually taken
	"""
	zstar: object
	lam: object
	method: str
	converged: bool
	iterations: int


@dataclass(frozen=True)
class LogEvent:
	"""
	Structured event for run-time logging.
	"""
	ts: int
	kind: str
	payload: Dict[str, object]


@dataclass(frozen=True)
class SolveResult:
	"""
	Outcome of a successful solve.

	value       : T_b(h) as an mpc at the solve precision
	method      : one of METHOD_SCHROEDER / METHOD_TOWER / METHOD_CONSTANT
	converged   : False when a Newton loop exhausted its budget (value is its last iterate)
	              or the Koenigs depth was clipped at depth_cap
	fixed_point : FixedPoint used by the Schröder path, else None
	depth       : Koenigs depth K used by the Schröder path, else None
	depth_capped: True when the depth needed for the precision exceeded depth_cap
	"""
	value: object
	method: str
	prec: int
	converged: bool = True
	fixed_point: Optional[FixedPoint] = None
	depth: Optional[int] = None
	depth_capped: bool = False
	events: List[LogEvent] = field(default_factory=list)
