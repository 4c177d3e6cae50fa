"""
Algebra module: CPTs, factors and operation counts.
"""

from bnexact.algebra.cost import OperationCost, ZERO_COST
from bnexact.algebra.cpt import CPT, make_cpt
from bnexact.algebra.factor import Factor, multiply_all, partition

__all__ = [
    "OperationCost",
    "ZERO_COST",
    "CPT",
    "make_cpt",
    "Factor",
    "multiply_all",
    "partition",
]
