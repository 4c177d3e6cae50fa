"""
bnexact/algebra/cpt.py

Conditional probability tables.

The flat table puts the variable's own value on the fastest-varying axis, then
the parents from last-declared (second fastest) to first-declared (slowest).
That is row-major order over the scope (parents..., variable), so a CPT is
indexed with the same IndexCodec as a Factor over that scope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence, Tuple

import numpy as np

from bnexact.core.errors import MalformedNetwork
from bnexact.core.registry import VariableRegistry
from bnexact.tensor.codec import IndexCodec


@dataclass(frozen=True, eq=False)
class CPT:
    """
    P(variable | parents) as a flat probability array.

    Attributes:
        variable: Name of the child variable
        parents: Ordered parent names; order defines the table layout
        table: Flat float64 array of length |variable| * prod(|parent|)
        registry: Variable registry resolving every name above
    """
    variable: str
    parents: Tuple[str, ...]
    table: np.ndarray
    registry: VariableRegistry = field(repr=False)

    def __post_init__(self):
        object.__setattr__(self, "parents", tuple(self.parents))
        self.registry.resolve(self.variable)
        for p in self.parents:
            self.registry.resolve(p)

        table = np.array(self.table, dtype=np.float64).reshape(-1)
        expected = self.codec.size
        if table.size != expected:
            raise MalformedNetwork(
                f"CPT for {self.variable}: table has {table.size} entries, expected {expected}"
            )
        table.flags.writeable = False
        object.__setattr__(self, "table", table)

    @property
    def scope(self) -> Tuple[str, ...]:
        """Table axes in slowest-to-fastest order: parents then the variable."""
        return self.parents + (self.variable,)

    @property
    def codec(self) -> IndexCodec:
        return IndexCodec(self.scope, self.registry.cards(self.scope))

    def index(self, value: str, parent_assignment: Mapping[str, str]) -> int:
        """Flat table index of (value, parent_assignment)."""
        coords = [self.registry[p].index(parent_assignment[p]) for p in self.parents]
        coords.append(self.registry[self.variable].index(value))
        return self.codec.encode(coords)

    def probability(self, value: str, parent_assignment: Mapping[str, str]) -> float:
        """
        P(variable=value | parents=parent_assignment).

        parent_assignment must give a value for every declared parent; extra
        entries are ignored.
        """
        return float(self.table[self.index(value, parent_assignment)])

    def __repr__(self) -> str:
        given = ",".join(self.parents)
        return f"CPT(P({self.variable}|{given}), size={self.table.size})"


def make_cpt(
    variable: str,
    parents: Sequence[str],
    table: Sequence[float],
    registry: VariableRegistry,
) -> CPT:
    """Convenience constructor taking any sequence of probabilities."""
    return CPT(variable, tuple(parents), np.asarray(table, dtype=np.float64), registry)
