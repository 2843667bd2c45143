from .engine import ComplexEngine

__all__ = ["ComplexEngine"]
