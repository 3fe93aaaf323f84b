"""
Cartesian-product expansion of testnet option axes.

Each axis maps a name to its candidate values. The expansion yields one
combination per element of the product, as a mapping from axis name to the
chosen value.

Ordering is part of the contract: combinations are consumed one after the
other from the same random stream, so the enumeration order decides which
slice of the stream each combination sees. Axis names are therefore visited
in sorted order, and values in the order they are listed.
"""

from __future__ import annotations

import itertools
from collections.abc import Mapping, Sequence
from typing import Any


def combinations(axes: Mapping[str, Sequence[Any]]) -> list[dict[str, Any]]:
    """
    Expand option axes into every combination.

    The last axis (in sorted name order) varies fastest.

    Args:
        axes: Mapping of axis name to candidate values.

    Returns:
        One dict per combination, covering every axis. An axis with no values
        yields no combinations at all.
    """
    names = sorted(axes)
    return [
        dict(zip(names, values, strict=True))
        for values in itertools.product(*(axes[name] for name in names))
    ]


def count_combinations(axes: Mapping[str, Sequence[Any]]) -> int:
    """Number of combinations `combinations(axes)` would produce."""
    total = 1
    for values in axes.values():
        total *= len(values)
    return total
