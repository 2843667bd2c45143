"""
Tests for the consistency oracles in tetration.acceptance.
"""

import pytest

from tetration.acceptance.functional_probe import FunctionalProbe
from tetration.numeric.engine import ComplexEngine


class TestHeightGrid:
	"""height_grid: deterministic literal grids."""

	def test_grid(self):
		assert FunctionalProbe.height_grid(0.0, 1.0, 3) == ("0.0", "0.5", "1.0")

	def test_empty(self):
		assert FunctionalProbe.height_grid(0.0, 1.0, 0) == ()

	def test_deterministic(self):
		assert FunctionalProbe.height_grid(-0.5, 0.5, 7) == FunctionalProbe.height_grid(-0.5, 0.5, 7)


class TestOracles:
	"""Functional equation, integer consistency and precision stability."""

	def test_functional_equation_holds(self):
		probe = FunctionalProbe()
		heights = probe.height_grid(0.25, 0.75, 2)
		ok, max_abs, over, total = probe.functional_equation("0.5", heights, 256, 1e-25)
		assert ok
		assert over == 0
		assert total == 2
		assert max_abs < 1e-25

	def test_functional_equation_flags_tight_tolerance(self):
		probe = FunctionalProbe()
		ok, max_abs, over, total = probe.functional_equation("0.5", ["0.5"], 128, 1e-300)
		assert (ok, over, total) == (False, 1, 1)
		assert max_abs > 1e-300

	def test_functional_equation_empty(self):
		assert FunctionalProbe().functional_equation("0.5", [], 64, 1e-3) == (True, 0.0, 0, 0)

	@pytest.mark.parametrize("base", ["0.5", "1.2", "(0.5 0.5)"])
	@pytest.mark.parametrize("n", [1, 2, 5])
	def test_integer_consistency(self, base, n):
		bound = 10.0 ** -(ComplexEngine(256).digits() // 2)
		assert FunctionalProbe().integer_consistency(base, n, 256) < bound

	def test_integer_consistency_needs_attracting_base(self):
		with pytest.raises(ValueError):
			FunctionalProbe().integer_consistency("2", 2, 128)

	def test_precision_stability(self):
		digits = FunctionalProbe().precision_stability("0.5", "1.5", 192, 256)
		assert digits >= ComplexEngine(192).digits() // 2
