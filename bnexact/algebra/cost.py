"""
bnexact/algebra/cost.py

Arithmetic operation counts, composed by the caller.

Every addition combines two terms, so summing k terms costs k - 1.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OperationCost:
    """Additions and multiplications performed by one or more operations."""
    additions: int = 0
    multiplications: int = 0

    def __add__(self, other: "OperationCost") -> "OperationCost":
        if not isinstance(other, OperationCost):
            return NotImplemented
        return OperationCost(
            additions=self.additions + other.additions,
            multiplications=self.multiplications + other.multiplications,
        )

    @staticmethod
    def summation(terms: int) -> "OperationCost":
        """Cost of adding up `terms` values."""
        return OperationCost(additions=max(terms - 1, 0))


ZERO_COST = OperationCost()
