"""
Tests for the integer power-tower fallback.
"""

import pytest

from tetration.numeric.engine import ComplexEngine
from tetration.solver.config import SolverConfig
from tetration.solver.expmap import ExponentialMap
from tetration.solver.tower import integer_height, power_tower


class TestPowerTower:
	"""power_tower: x₀ = 1, x_{i+1} = b^{x_i}."""

	def test_small_towers(self):
		eng = ComplexEngine(256)
		fmap = ExponentialMap(eng, 2)
		assert power_tower(fmap, 0) == eng.one()
		assert eng.abs(power_tower(fmap, 1) - 2) < eng.tolerance(70)
		assert eng.abs(power_tower(fmap, 2) - 4) < eng.tolerance(70)
		assert eng.abs(power_tower(fmap, 3) - 16) < eng.tolerance(70)
		assert eng.real_fixed(power_tower(fmap, 4), 0) == "65536"

	def test_negative_height_rejected(self):
		eng = ComplexEngine(64)
		with pytest.raises(ValueError):
			power_tower(ExponentialMap(eng, 2), -1)

	def test_divergent_tower_saturates(self):
		eng = ComplexEngine(64)
		v = power_tower(ExponentialMap(eng, 10), 4)
		assert not eng.is_finite(v)

	def test_tower_stays_overflowed(self):
		eng = ComplexEngine(64)
		fmap = ExponentialMap(eng, 10)
		for n in (5, 6):
			assert not eng.is_finite(power_tower(fmap, n))

	def test_huge_height_stops_at_overflow(self):
		eng = ComplexEngine(64)
		assert not eng.is_finite(power_tower(ExponentialMap(eng, 2), 10 ** 9))


class TestIntegerHeight:
	"""integer_height: tolerance-based detection of non-negative integers."""

	@pytest.mark.parametrize(
		"h, expected",
		[
			("0", 0),
			("2", 2),
			("7.0", 7),
			("3+0i", 3),
			("2+1e-40i", 2),
			("1.5", None),
			("2.0000000001", None),
			("-1", None),
			("2+0.5i", None),
		],
	)
	def test_detection(self, h, expected):
		eng = ComplexEngine(256)
		assert integer_height(h, eng) == expected

	def test_tolerance_is_capped_by_precision(self):
		eng = ComplexEngine(32)
		# four usable digits at 32 bits
		assert integer_height("2.001", eng) is None
		assert integer_height("2.00001", eng) == 2

	def test_configurable_digits(self):
		eng = ComplexEngine(256)
		cfg = SolverConfig(integer_height_digits=5)
		assert integer_height("4.0000001", eng, cfg) == 4
		assert integer_height("4.0000001", eng) is None
