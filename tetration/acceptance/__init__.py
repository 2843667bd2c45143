from .functional_probe import FunctionalProbe

__all__ = ["FunctionalProbe"]
