"""
Tests for complex literal parsing.

Covered forms: real only, imaginary only, a±bi, parenthesized pairs, empty
input, exponent signs, malformed literals.
"""

import pytest

from tetration.errors import ParseError
from tetration.io.literals import LiteralParser, normalize_to_pair
from tetration.numeric.engine import ComplexEngine


class TestNormalizeToPair:
	"""normalize_to_pair: shape recognition only."""

	@pytest.mark.parametrize(
		"text, expected",
		[
			("2", ("2", "0")),
			("  -1.5e-100 ", ("-1.5e-100", "0")),
			("i", ("0", "1")),
			("+i", ("0", "1")),
			("-i", ("0", "-1")),
			("3i", ("0", "3")),
			("-2.5e3I", ("0", "-2.5e3")),
			("2+3i", ("2", "+3")),
			("2-3i", ("2", "-3")),
			("2+i", ("2", "+1")),
			("2-i", ("2", "-1")),
			("1e-5+2e+3i", ("1e-5", "+2e+3")),
			("(0.5 0.5)", ("0.5", "0.5")),
			("(1, -2)", ("1", "-2")),
			("(7)", ("7", "0")),
			("", ("0", "0")),
		],
	)
	def test_forms(self, text, expected):
		assert normalize_to_pair(text) == expected

	def test_exponent_sign_is_not_a_separator(self):
		assert LiteralParser.last_sign_not_in_exponent("1e-5") == -1
		assert LiteralParser.last_sign_not_in_exponent("1E+5-2") == 4

	@pytest.mark.parametrize("text", ["(1 2 3)", "(1", "1)", "()"])
	def test_bad_shapes(self, text):
		with pytest.raises(ParseError):
			normalize_to_pair(text)

	def test_non_string_rejected(self):
		with pytest.raises(ParseError):
			normalize_to_pair(2.0)


class TestParse:
	"""parse: component validation and rounding into the engine context."""

	def test_combined_literal(self):
		eng = ComplexEngine(128)
		z = eng.parse("2.5-0.25i")
		assert z.real == eng.ctx.mpf("2.5")
		assert z.imag == eng.ctx.mpf("-0.25")

	def test_paren_pair(self):
		eng = ComplexEngine(128)
		z = eng.parse("(0.5, 0.5)")
		assert z == eng.ctx.mpc("0.5", "0.5")

	def test_tiny_imaginary_part_survives(self):
		eng = ComplexEngine(512)
		z = eng.parse("2+1e-100i")
		assert z.real == 2
		assert eng.ctx.mpf("9e-101") < z.imag < eng.ctx.mpf("1.1e-100")

	@pytest.mark.parametrize("text", ["abc", "2+3j", "1..2", "(x y)", "2+bi", "nan", "-inf", "1+infi", "(1 nan)"])
	def test_malformed(self, text):
		eng = ComplexEngine(64)
		with pytest.raises(ParseError):
			eng.parse(text)

	def test_parse_error_is_value_error(self):
		eng = ComplexEngine(64)
		with pytest.raises(ValueError):
			eng.parse("nope")

	def test_from_parts(self):
		eng = ComplexEngine(64)
		z = eng.from_parts("1e2", "-3")
		assert z == eng.ctx.mpc(100, -3)
		with pytest.raises(ParseError):
			eng.from_parts("", "1")
