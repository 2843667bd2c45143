"""Complex literal parsing: strict, deterministic normalization into (real, imag) strings.

Accepted forms
--------------
  • real only          "2.5", "-1e-100"
  • imaginary only     "i", "+i", "-i", "3i", "-2.5e3i"
  • combined           "a+bi", "a-bi", "a+i", "a-i"
  • parenthesized pair "(a b)", "(a, b)", "(a)"
  • empty string       → 0

`I` is accepted in place of `i`. A sign directly after an exponent marker
(`e`/`E`) belongs to the exponent, never separates the components.
"""

from __future__ import annotations
from typing import Tuple

from tetration.errors import ParseError


class LiteralParser:
	"""Utility namespace for complex literal normalization."""

	@staticmethod
	def last_sign_not_in_exponent(s: str) -> int:
		"""
		Return the index of the last '+'/'-' that is neither at position 0 nor
		part of an exponent, or -1 when there is none.
		"""
		for i in range(len(s) - 1, 0, -1):
			if s[i] in "+-" and s[i - 1] not in "eE":
				return i
		return -1

	@staticmethod
	def _paren_pair(s: str) -> Tuple[str, str]:
		mid = s[1:-1].replace(",", " ")
		fields = mid.split()
		if len(fields) == 1:
			return fields[0], "0"
		if len(fields) == 2:
			return fields[0], fields[1]
		raise ParseError(f"invalid complex literal {s!r}: expected one or two components in parentheses")

	@staticmethod
	def normalize_to_pair(text: str) -> Tuple[str, str]:
		"""
		Split a literal into its real and imaginary decimal strings.
		Raises ParseError for shapes that cannot be split; the component
		strings themselves are validated by `parse`.
		"""
		if not isinstance(text, str):
			raise ParseError(f"complex literal must be a string, got {type(text).__name__}")
		s = text.strip()
		if s == "":
			return "0", "0"
		if s.startswith("(") or s.endswith(")"):
			if not (s.startswith("(") and s.endswith(")")):
				raise ParseError(f"invalid complex literal {text!r}: unbalanced parentheses")
			return LiteralParser._paren_pair(s)

		s = s.replace("I", "i")
		if s in ("i", "+i"):
			return "0", "1"
		if s == "-i":
			return "0", "-1"
		if not s.endswith("i"):
			return s, "0"

		core = s[:-1].strip()
		idx = LiteralParser.last_sign_not_in_exponent(core)
		if idx > 0:
			re_part = core[:idx].strip()
			im_part = core[idx:].strip()
			if im_part in ("+", "-"):
				im_part = im_part + "1"
			return re_part, im_part
		return "0", core

	@staticmethod
	def parse(text: str, ctx):
		"""
		Parse `text` into an `mpc` owned by the mpmath context `ctx`
		(rounded to that context's precision).
		"""
		re_s, im_s = LiteralParser.normalize_to_pair(text)
		return LiteralParser.parse_pair(re_s, im_s, ctx)

	@staticmethod
	def parse_pair(re_s: str, im_s: str, ctx):
		"""Build re + i·im in `ctx` from two real decimal/scientific literals."""
		parts = []
		for name, s in (("real", re_s), ("imaginary", im_s)):
			if not isinstance(s, str) or s.strip() == "":
				raise ParseError(f"invalid {name} part {s!r}")
			try:
				v = ctx.mpf(s.strip())
			except (ValueError, TypeError):
				raise ParseError(f"invalid {name} part {s!r}") from None
			if not ctx.isfinite(v):
				raise ParseError(f"non-finite {name} part {s!r}")
			parts.append(v)
		return ctx.mpc(parts[0], parts[1])


normalize_to_pair = LiteralParser.normalize_to_pair
parse_literal = LiteralParser.parse
