from .events import SolveLog

__all__ = ["SolveLog"]
