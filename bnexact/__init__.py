"""
bnexact: exact inference over discrete Bayesian networks

Answers joint queries by the chain rule and conditional queries by full
enumeration or variable elimination (lexicographic or min-weight order).

Key components:
- core: variable registry and error taxonomy
- tensor: mixed-radix index codec shared by CPTs and factors
- algebra: CPTs, factors and operation counting
- topology: network structure and topological order
- query: query text parsing and assignment enumeration
- engine: inference algorithms and elimination orderings
- io: XMLBIF and JSON network readers
- api: batch query driver
"""

__version__ = "1.0.0"

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
from bnexact.algebra.cost import OperationCost
from bnexact.algebra.cpt import CPT
from bnexact.algebra.factor import Factor
from bnexact.topology.structure import NetworkStructure
from bnexact.query.processor import QueryProcessor, ConditionalQuery
from bnexact.engine.inference import InferenceEngine, Result
from bnexact.network import BayesianNetwork

__all__ = [
    # Errors
    "BayesNetError",
    "CyclicNetwork",
    "UnresolvedReference",
    "MalformedNetwork",
    "MalformedQuery",
    "InvalidAlgorithm",
    "DegenerateFactor",
    # Model
    "Variable",
    "VariableRegistry",
    "CPT",
    "Factor",
    "OperationCost",
    "NetworkStructure",
    # Queries
    "QueryProcessor",
    "ConditionalQuery",
    "InferenceEngine",
    "Result",
    "BayesianNetwork",
]
