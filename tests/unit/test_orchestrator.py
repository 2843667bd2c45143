"""
Tests for the tetration orchestrator.

Invariants:
1. base = 1 short-circuits to exactly 1 for every height
2. Attracting bases go through the Schröder path and satisfy T(h+1) = b^{T(h)}
3. Non-attracting bases accept only non-negative integer heights
4. Every solve leaves a start → ... → done/failed event trace
"""

import dataclasses

import pytest

from tetration import tetrate
from tetration.errors import (
	NON_ATTRACTING_MESSAGE,
	DegenerateDerivativeError,
	NonAttractingRegimeError,
	ParseError,
	TetrationError,
)
from tetration.solver.config import (
	METHOD_CONSTANT,
	METHOD_SCHROEDER,
	METHOD_TOWER,
	SolverConfig,
)
from tetration.solver.orchestrator import TetrationSolver


def _kinds(events):
	return [e.kind for e in events]


class TestConstantBase:
	"""b = 1."""

	@pytest.mark.parametrize("base", ["1", "1.0+0i", "(1 0)", "1+1e-40i"])
	@pytest.mark.parametrize("height", ["0", "2.5", "-3+4i"])
	def test_exactly_one(self, base, height):
		solver = TetrationSolver(256)
		res = solver.solve(base, height)
		assert res.method == METHOD_CONSTANT
		assert res.value == solver.engine.one()
		assert res.converged
		assert res.fixed_point is None
		assert _kinds(res.events) == ["start", "constant_base", "done"]

	def test_near_one_is_not_constant(self):
		solver = TetrationSolver(256)
		assert not solver.is_unit_base("1.0000001")
		res = solver.solve("1.0000001", "0.5")
		assert res.method == METHOD_SCHROEDER


class TestSchroederPath:
	"""Attracting bases."""

	def test_half_fractional_height_is_complex(self):
		solver = TetrationSolver(256)
		res = solver.solve("0.5", "1.5")
		eng = solver.engine
		assert res.method == METHOD_SCHROEDER
		assert res.converged
		assert eng.is_finite(res.value)
		assert abs(res.value.imag) > eng.tolerance(10)
		assert res.depth is not None and res.depth >= 8
		assert _kinds(res.events) == ["start", "fixed_point", "depth", "inversion", "done"]

	def test_sqrt_two_half_height_is_real(self):
		solver = TetrationSolver(256)
		eng = solver.engine
		res = solver.solve(eng.sqrt(2), "0.5")
		assert res.method == METHOD_SCHROEDER
		assert abs(res.value.imag) < eng.tolerance(30)
		assert 1 < res.value.real < eng.ctx.sqrt(2)

	@pytest.mark.parametrize("base", ["0.5", "1.2", "(0.5 0.5)"])
	@pytest.mark.parametrize("h", ["0", "1", "2", "5"])
	def test_integer_heights_match_tower(self, base, h):
		solver = TetrationSolver(256)
		eng = solver.engine
		res = solver.solve(base, h)
		expected = eng.one()
		for _ in range(int(h)):
			expected = eng.pow(base, expected)
		assert res.method == METHOD_SCHROEDER
		assert res.converged
		assert eng.abs(res.value - expected) < eng.tolerance(eng.digits() // 2)

	def test_minus_one_height_is_zero(self):
		solver = TetrationSolver(256)
		res = solver.solve("0.5", "-1")
		assert solver.engine.abs(res.value) < solver.engine.tolerance(25)

	def test_functional_equation(self):
		solver = TetrationSolver(256)
		eng = solver.engine
		t = solver.solve("0.5", "0.3").value
		t_next = solver.solve("0.5", "1.3").value
		assert eng.abs(eng.pow("0.5", t) - t_next) < eng.tolerance(25)

	def test_complex_base_and_height(self):
		solver = TetrationSolver(256)
		res = solver.solve("(0.5 0.5)", "0.5+0.25i")
		assert res.method == METHOD_SCHROEDER
		assert solver.engine.is_finite(res.value)

	def test_fixed_point_recorded(self):
		res = tetrate("0.5", "0.5", 128)
		fp = res.fixed_point
		assert fp is not None
		assert abs(float(fp.zstar.real) - 0.6411857445049859) < 1e-14
		assert res.prec == 128

	@pytest.mark.slow
	def test_half_at_2048_bits(self):
		res = tetrate("0.5", "1.5", 2048)
		assert res.method == METHOD_SCHROEDER
		assert res.converged
		assert res.depth > 800


class TestIntegerFallback:
	"""Non-attracting bases at integer heights."""

	def test_two_squared(self):
		solver = TetrationSolver(256)
		res = solver.solve("2", "2")
		assert res.method == METHOD_TOWER
		assert solver.engine.real_fixed(res.value, 0) == "4"
		assert _kinds(res.events) == ["start", "fixed_point", "tower", "done"]
		assert res.events[1].payload == {"found": False}

	def test_height_zero(self):
		res = tetrate("3", "0", 64)
		assert res.method == METHOD_TOWER
		assert res.value == 1

	def test_two_squared_at_2048_bits(self):
		solver = TetrationSolver(2048)
		res = solver.solve("2", "2")
		assert res.method == METHOD_TOWER
		assert solver.engine.real_fixed(res.value, 0) == "4"
		assert solver.engine.imag_fixed(res.value, 0) == "0"


class TestFailures:
	"""Rejections and their traces."""

	@pytest.mark.parametrize("base, height", [("2", "1.5"), ("3", "0.5"), ("2", "-1"), ("2", "2+0.5i")])
	def test_non_attracting_fractional(self, base, height):
		solver = TetrationSolver(256)
		with pytest.raises(NonAttractingRegimeError) as info:
			solver.solve(base, height)
		assert str(info.value) == NON_ATTRACTING_MESSAGE
		assert _kinds(solver.events)[-1] == "failed"

	def test_zero_base(self):
		solver = TetrationSolver(128)
		with pytest.raises(DegenerateDerivativeError):
			solver.solve("0", "1.5")
		assert _kinds(solver.events) == ["start", "failed"]

	def test_errors_share_base_class(self):
		with pytest.raises(TetrationError):
			tetrate("2", "0.5", 128)
		with pytest.raises(ValueError):
			tetrate("2", "0.5", 128)

	def test_bad_literal(self):
		with pytest.raises(ParseError):
			tetrate("two", "1", 128)

	@pytest.mark.parametrize("base, height", [("nan", "2"), ("inf", "2"), ("2", "nan"), ("0.5", "1+infi")])
	def test_non_finite_literals(self, base, height):
		with pytest.raises(ParseError):
			tetrate(base, height, 64)

	def test_non_finite_engine_value(self):
		solver = TetrationSolver(64)
		nan = solver.engine.ctx.mpc(solver.engine.ctx.nan, 0)
		with pytest.raises(ParseError):
			solver.solve(nan, "2")
		assert solver.events == []


class TestTrace:
	"""Event trace and determinism."""

	def test_events_reset_per_solve(self):
		solver = TetrationSolver(128)
		solver.solve("1", "2")
		solver.solve("2", "1")
		assert solver.events[0].kind == "start"
		assert [e.ts for e in solver.events] == list(range(len(solver.events)))

	def test_deterministic(self):
		a = tetrate("0.5", "0.7", 192)
		b = tetrate("0.5", "0.7", 192)
		assert a.value == b.value
		assert a.events == b.events

	def test_start_payload(self):
		res = tetrate("0.5", "1.5", 128)
		start = res.events[0].payload
		assert start["prec"] == 128
		assert start["base"].startswith("5.")

	def test_config_is_honoured(self):
		cfg = SolverConfig(depth_cap=8)
		res = tetrate("0.5", "1.5", 256, cfg)
		assert res.depth == 8

	def test_depth_cap_clears_converged(self):
		res = tetrate("0.5", "1.5", 256, SolverConfig(depth_cap=20))
		assert res.method == METHOD_SCHROEDER
		assert res.depth == 20
		assert res.depth_capped
		assert not res.converged
		depth_event = [e for e in res.events if e.kind == "depth"][0]
		assert depth_event.payload["capped"] is True

	def test_uncapped_depth_reported(self):
		res = tetrate("0.5", "1.5", 256)
		assert not res.depth_capped
		assert [e for e in res.events if e.kind == "depth"][0].payload["capped"] is False

	@pytest.mark.slow
	def test_multiplier_near_one_hits_default_cap(self):
		res = tetrate("1.4446", "0.5", 256)
		assert res.depth == SolverConfig().depth_cap
		assert res.depth_capped
		assert not res.converged


class TestSolverConfig:
	"""SolverConfig validation."""

	@pytest.mark.parametrize(
		"kwargs",
		[
			{"fixed_point_max_iter": 0},
			{"inverse_newton_steps": 0},
			{"depth_min": 10, "depth_cap": 5},
			{"divergence_threshold": 0.0},
			{"guard_digits": -1},
			{"inverse_tol_digits": 0},
			{"unit_base_digits": 0},
		],
	)
	def test_invalid(self, kwargs):
		with pytest.raises(ValueError):
			SolverConfig(**kwargs)

	def test_frozen(self):
		cfg = SolverConfig()
		with pytest.raises(dataclasses.FrozenInstanceError):
			cfg.depth_cap = 3
