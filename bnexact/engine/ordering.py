"""
bnexact/engine/ordering.py

Elimination orders for variable elimination.

Orders are computed from factor scopes only; no arithmetic is done here.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Sequence

import numpy as np

from bnexact.core.registry import VariableRegistry
from bnexact.tensor.codec import canonical


def lexicographic_order(hidden: Iterable[str]) -> List[str]:
    """Hidden variables sorted by name."""
    return list(canonical(hidden))


def elimination_weight(
    variable: str,
    scopes: Sequence[FrozenSet[str]],
    registry: VariableRegistry,
) -> int:
    """
    Size of the product factor that eliminating variable would build.

    That is the product of domain sizes over every variable appearing in a
    scope that mentions variable; 0 if no scope mentions it.
    """
    involved = set()
    for scope in scopes:
        if variable in scope:
            involved |= scope
    if not involved:
        return 0
    return int(np.prod(registry.cards(involved), dtype=np.int64))


def min_weight_order(
    scopes: Iterable[Iterable[str]],
    hidden: Iterable[str],
    registry: VariableRegistry,
) -> List[str]:
    """
    Greedy min-weight elimination order.

    At each step the remaining variable with the smallest elimination weight
    is chosen; ties go to the lexicographically smallest name. The scopes that
    mention it are then replaced by their union minus the variable, as the
    real elimination would do.
    """
    current = [frozenset(s) for s in scopes]
    remaining = sorted(set(hidden))
    order: List[str] = []

    while remaining:
        best = remaining[0]
        best_weight = elimination_weight(best, current, registry)
        for var in remaining[1:]:
            w = elimination_weight(var, current, registry)
            if w < best_weight:
                best, best_weight = var, w

        order.append(best)
        remaining.remove(best)

        merged = set()
        rest = []
        for scope in current:
            if best in scope:
                merged |= scope
            else:
                rest.append(scope)
        merged.discard(best)
        if merged:
            rest.append(frozenset(merged))
        current = rest

    return order
