"""Desktop simulator for Bee Chase."""

from .window import SimulatorWindow

__all__ = ["SimulatorWindow"]
