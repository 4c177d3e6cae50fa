"""
bnexact/core/registry.py

Variables and the immutable name -> Variable registry.

The registry is passed explicitly to every CPT and Factor; there is no
module-level lookup table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Tuple

from bnexact.core.errors import MalformedNetwork, UnresolvedReference


@dataclass(frozen=True)
class Variable:
    """
    A named discrete random variable.

    Attributes:
        name: Variable name
        domain: Ordered outcome labels; position is the canonical index
    """
    name: str
    domain: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "domain", tuple(self.domain))
        if not self.domain:
            raise MalformedNetwork(f"Variable {self.name} has an empty domain")
        if len(set(self.domain)) != len(self.domain):
            raise MalformedNetwork(f"Variable {self.name} has duplicate outcomes: {self.domain}")

    @property
    def card(self) -> int:
        return len(self.domain)

    def index(self, value: str) -> int:
        """Position of value in the domain. Raises ValueError if absent."""
        return self.domain.index(value)

    def __contains__(self, value: object) -> bool:
        return value in self.domain


class VariableRegistry(Mapping[str, Variable]):
    """
    Read-only mapping from variable name to Variable.
    """

    def __init__(self, variables: Iterable[Variable]):
        self._vars: Dict[str, Variable] = {}
        for v in variables:
            if v.name in self._vars:
                raise MalformedNetwork(f"Duplicate variable: {v.name}")
            self._vars[v.name] = v

    @staticmethod
    def build(domains: Mapping[str, Iterable[str]]) -> "VariableRegistry":
        """Build a registry from a map of name -> ordered outcome labels."""
        return VariableRegistry(Variable(name, tuple(labels)) for name, labels in domains.items())

    def __getitem__(self, name: str) -> Variable:
        return self._vars[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def resolve(self, name: str) -> Variable:
        """Look up a variable, raising UnresolvedReference if it is unknown."""
        try:
            return self._vars[name]
        except KeyError:
            raise UnresolvedReference(f"Unknown variable: {name}") from None

    def cards(self, names: Iterable[str]) -> Tuple[int, ...]:
        """Domain sizes of the given variables, in order."""
        return tuple(self.resolve(n).card for n in names)

    def __repr__(self) -> str:
        return f"VariableRegistry(vars={len(self._vars)})"
