"""
bnexact/core/errors.py

Error taxonomy for network construction and query evaluation.

Construction-time errors (CyclicNetwork, UnresolvedReference, MalformedNetwork)
abort network loading. Per-query errors (MalformedQuery, InvalidAlgorithm,
DegenerateFactor) abort only the query that raised them.
"""

from __future__ import annotations

from typing import Sequence


class BayesNetError(Exception):
    """Base class for all bnexact errors."""


class CyclicNetwork(BayesNetError):
    """The parent/child graph of the network contains a cycle."""

    def __init__(self, cycle: Sequence[str] = ()):
        self.cycle = tuple(cycle)
        if self.cycle:
            path = " -> ".join(self.cycle + (self.cycle[0],))
            msg = f"Network contains a cycle: {path}"
        else:
            msg = "Network contains a cycle"
        super().__init__(msg)


class UnresolvedReference(BayesNetError, ValueError):
    """A CPT references a variable name absent from the variable set."""


class MalformedNetwork(BayesNetError, ValueError):
    """Network definition is inconsistent (e.g. CPT table size mismatch)."""


class MalformedQuery(BayesNetError, ValueError):
    """Query text does not match the grammar or names unknown variables/values."""


class InvalidAlgorithm(BayesNetError, ValueError):
    """Algorithm selector outside {1, 2, 3}."""


class DegenerateFactor(BayesNetError, ArithmeticError):
    """Total probability mass is zero, so the factor cannot be normalized."""
