from .config import (
	METHOD_CONSTANT,
	METHOD_SCHROEDER,
	METHOD_TOWER,
	FixedPoint,
	LogEvent,
	SolveResult,
	SolverConfig,
)
from .expmap import ExponentialMap
from .fixed_point import FixedPointLocator
from .koenigs import KoenigsMap, required_depth, select_depth
from .newton import Inversion, NewtonInverter
from .tower import integer_height, power_tower
from .orchestrator import TetrationSolver, tetrate

__all__ = [
	"METHOD_CONSTANT", "METHOD_SCHROEDER", "METHOD_TOWER",
	"FixedPoint", "LogEvent", "SolveResult", "SolverConfig",
	"ExponentialMap",
	"FixedPointLocator",
	"KoenigsMap", "required_depth", "select_depth",
	"Inversion", "NewtonInverter",
	"integer_height", "power_tower",
	"TetrationSolver", "tetrate",
]
