"""Random selection primitives driven by an explicit random stream."""

from .choice import ProbSetChoice, UniformChoice, UniformSetChoice, WeightedChoice

__all__ = [
    "UniformChoice",
    "WeightedChoice",
    "ProbSetChoice",
    "UniformSetChoice",
]
