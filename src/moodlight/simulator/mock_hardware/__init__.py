"""Mock hardware implementations for the simulator."""

from .display import SimulatedBackground
from .input import SimulatedPointer

__all__ = [
    "SimulatedBackground",
    "SimulatedPointer",
]
