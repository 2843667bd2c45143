"""
Error taxonomy for the tetration solver.

All errors derive from ValueError so callers that already guard numeric
validation with `except ValueError` keep working.

  • ParseError              : malformed base/height literal; the solve never starts
  • PrecisionError          : non-positive or non-integer bit precision
  • NonAttractingRegimeError: no attracting fixed point and no usable integer height
  • DegenerateDerivativeError: multiplier λ is zero/invalid (or ln b is undefined)

Budget exhaustion in the iterative loops is not an error; it is reported as
`converged=False` on the returned records.
"""

from __future__ import annotations


NON_ATTRACTING_MESSAGE = (
	"non-attracting regime or fixed point not found; "
	"non-integer heights in this regime are unsupported"
)


class TetrationError(ValueError):
	"""Base class for every error raised by the tetration package."""


class ParseError(TetrationError):
	"""A complex literal could not be parsed."""


class PrecisionError(ParseError):
	"""The requested bit precision is not a positive integer."""


class NonAttractingRegimeError(TetrationError):
	"""No attracting fixed point was found and the height is not a non-negative integer."""

	def __init__(self, message: str = NON_ATTRACTING_MESSAGE) -> None:
		super().__init__(message)


class DegenerateDerivativeError(TetrationError):
	"""The multiplier at the fixed point has zero or otherwise invalid magnitude."""
