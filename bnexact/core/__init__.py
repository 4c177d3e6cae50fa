"""
Core module: variable registry and error taxonomy.
"""

from bnexact.core.errors import (
    BayesNetError,
    CyclicNetwork,
    UnresolvedReference,
    MalformedNetwork,
    MalformedQuery,
    InvalidAlgorithm,
    DegenerateFactor,
)
from bnexact.core.registry import Variable, VariableRegistry

__all__ = [
    "BayesNetError",
    "CyclicNetwork",
    "UnresolvedReference",
    "MalformedNetwork",
    "MalformedQuery",
    "InvalidAlgorithm",
    "DegenerateFactor",
    "Variable",
    "VariableRegistry",
]
