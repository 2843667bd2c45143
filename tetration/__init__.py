"""
Fractional tetration T_b(h) = f^{∘h}(1), f(z) = b^z, over arbitrary-precision
complex numbers via Koenigs/Schröder linearization at an attracting fixed point,
with an integer power-tower fallback.
"""

from .errors import (
	TetrationError,
	ParseError,
	PrecisionError,
	NonAttractingRegimeError,
	DegenerateDerivativeError,
)
from .numeric import ComplexEngine
from .solver import (
	METHOD_CONSTANT,
	METHOD_SCHROEDER,
	METHOD_TOWER,
	SolveResult,
	SolverConfig,
	TetrationSolver,
	tetrate,
)

__all__ = [
	"TetrationError", "ParseError", "PrecisionError", "NonAttractingRegimeError", "DegenerateDerivativeError",
	"ComplexEngine",
	"METHOD_CONSTANT", "METHOD_SCHROEDER", "METHOD_TOWER",
	"SolveResult", "SolverConfig", "TetrationSolver", "tetrate",
]
