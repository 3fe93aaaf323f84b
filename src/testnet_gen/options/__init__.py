"""Option axes and their combinatorial expansion."""

from .combinations import combinations, count_combinations

__all__ = [
    "combinations",
    "count_combinations",
]
