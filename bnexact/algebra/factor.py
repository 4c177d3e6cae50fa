"""
bnexact/algebra/factor.py

A Factor is a non-negative function over the joint domain of an ordered scope,
stored as a flat table indexed by the scope's IndexCodec.

Key operations:
  - restrict:  fix one variable to a value, dropping it from the scope
  - multiply:  join-product on the union scope
  - sum_out:   marginalize one variable
  - normalize: divide by the total mass

Design constraints:
  - Factors are immutable; every operation returns a new Factor.
  - Scope order is an indexing convention only. Callers compare factors by
    evaluating assignments, never by raw index.
  - multiply and sum_out return their OperationCost alongside the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

import numpy as np

from bnexact.algebra.cost import OperationCost, ZERO_COST
from bnexact.algebra.cpt import CPT
from bnexact.core.errors import DegenerateFactor
from bnexact.core.registry import VariableRegistry
from bnexact.tensor.codec import IndexCodec, coords_of


@dataclass(frozen=True, eq=False)
class Factor:
    """
    Flat-table factor over an ordered scope.

    Attributes:
        scope: Ordered variable names (last varies fastest in the table)
        table: Flat float64 array of length prod(|domain(v)| for v in scope)
        registry: Variable registry resolving the scope
    """
    scope: Tuple[str, ...]
    table: np.ndarray
    registry: VariableRegistry = field(repr=False)

    def __post_init__(self):
        object.__setattr__(self, "scope", tuple(self.scope))
        if len(set(self.scope)) != len(self.scope):
            raise ValueError(f"Factor scope has duplicates: {self.scope}")

        table = np.array(self.table, dtype=np.float64).reshape(-1)
        if table.size != self.codec.size:
            raise ValueError(
                f"Factor table size mismatch: {table.size} entries for scope {self.scope} "
                f"of size {self.codec.size}"
            )
        table.flags.writeable = False
        object.__setattr__(self, "table", table)

    @staticmethod
    def from_cpt(cpt: CPT) -> "Factor":
        """Factor over (parents..., variable) sharing the CPT's layout."""
        return Factor(cpt.scope, cpt.table, cpt.registry)

    @staticmethod
    def constant(value: float, registry: VariableRegistry) -> "Factor":
        """Single-cell factor over the empty scope."""
        return Factor((), np.array([value]), registry)

    @property
    def codec(self) -> IndexCodec:
        return IndexCodec(self.scope, self.registry.cards(self.scope))

    @property
    def size(self) -> int:
        return int(self.table.size)

    def mentions(self, variable: str) -> bool:
        return variable in self.scope

    def probability(self, assignment: Mapping[str, str]) -> float:
        """
        Value of the factor at an assignment covering its whole scope.

        Variables outside the scope are ignored. Raises KeyError if a scope
        variable is missing from the assignment.
        """
        coords = coords_of(assignment, self.scope, self.registry)
        return float(self.table[self.codec.encode(coords)])

    def restrict(self, variable: str, value: str) -> "Factor":
        """
        Fix variable=value and drop it from the scope.

        Returns self unchanged if variable is not in the scope.
        """
        if variable not in self.scope:
            return self

        pos = self.scope.index(variable)
        value_idx = self.registry[variable].index(value)
        new_scope = self.scope[:pos] + self.scope[pos + 1:]
        new_codec = IndexCodec(new_scope, self.registry.cards(new_scope))

        # Decode every reduced index, re-insert the fixed coordinate, re-encode.
        kept = new_codec.decode_all()
        full = np.insert(kept, pos, value_idx, axis=0)
        table = self.table[self.codec.encode_all(full)]
        return Factor(new_scope, table, self.registry)

    def multiply(self, other: "Factor") -> Tuple["Factor", OperationCost]:
        """
        Join-product on the union scope.

        (f * g)(x_{U+W}) = f(x_U) * g(x_W)

        The union keeps self's order and appends other's remaining variables.
        One multiplication is counted per output cell.
        """
        union = self.scope + tuple(v for v in other.scope if v not in self.scope)
        codec = IndexCodec(union, self.registry.cards(union))
        coords = codec.decode_all()

        a = self.table[self.codec.project(coords, union)]
        b = other.table[other.codec.project(coords, union)]
        out = Factor(union, a * b, self.registry)
        return out, OperationCost(multiplications=codec.size)

    def sum_out(self, variable: str) -> Tuple["Factor", OperationCost]:
        """
        Marginalize variable out of the factor.

        (sum_v f)(x_T) = sum over values of v of f(x_T, v)

        Returns (self, zero cost) if variable is not in the scope. If the
        scope becomes empty the result is a single-cell constant factor.
        Each accumulation into an already occupied cell counts one addition.
        """
        if variable not in self.scope:
            return self, ZERO_COST

        new_scope = tuple(v for v in self.scope if v != variable)
        new_codec = IndexCodec(new_scope, self.registry.cards(new_scope))

        old_coords = self.codec.decode_all()
        new_index = new_codec.project(old_coords, self.scope)
        table = np.bincount(new_index, weights=self.table, minlength=new_codec.size)

        out = Factor(new_scope, table, self.registry)
        return out, OperationCost(additions=self.size - new_codec.size)

    def total(self) -> float:
        return float(np.sum(self.table))

    def normalize(self) -> "Factor":
        """
        Divide every entry by the total mass.

        Raises DegenerateFactor if the total is exactly zero.
        """
        s = self.total()
        if s == 0.0:
            raise DegenerateFactor(f"Cannot normalize factor over {self.scope}: total probability is zero")
        return Factor(self.scope, self.table / s, self.registry)

    def assignments(self) -> Iterator[Dict[str, str]]:
        """Yield the assignment of every table cell, in flat-index order."""
        labels = [self.registry[v].domain for v in self.scope]
        for coords in self.codec.decode_all().T:
            yield {v: labels[i][int(coords[i])] for i, v in enumerate(self.scope)}

    def as_dict(self) -> Dict[Tuple[str, ...], float]:
        """Map from value tuples (in scope order) to table entries."""
        return {
            tuple(a[v] for v in self.scope): float(p)
            for a, p in zip(self.assignments(), self.table)
        }

    def __repr__(self) -> str:
        return f"Factor(scope={self.scope}, size={self.size})"


def multiply_all(factors: Sequence[Factor]) -> Tuple[Factor, OperationCost]:
    """
    Left-fold product of a non-empty list of factors.

    Returns the product and the summed cost of the pairwise joins.
    """
    if not factors:
        raise ValueError("multiply_all needs at least one factor")

    acc = factors[0]
    cost = ZERO_COST
    for f in factors[1:]:
        acc, c = acc.multiply(f)
        cost = cost + c
    return acc, cost


def partition(factors: Sequence[Factor], variable: str) -> Tuple[List[Factor], List[Factor]]:
    """Split factors into (mentioning variable, not mentioning variable)."""
    relevant: List[Factor] = []
    rest: List[Factor] = []
    for f in factors:
        (relevant if f.mentions(variable) else rest).append(f)
    return relevant, rest
