"""
Engine module: inference algorithms and elimination orderings.
"""

from bnexact.engine.inference import (
    ALGORITHMS,
    ENUMERATION,
    ELIMINATION_LEXICOGRAPHIC,
    ELIMINATION_MIN_WEIGHT,
    InferenceEngine,
    Result,
)
from bnexact.engine.ordering import lexicographic_order, min_weight_order, elimination_weight

__all__ = [
    "ALGORITHMS",
    "ENUMERATION",
    "ELIMINATION_LEXICOGRAPHIC",
    "ELIMINATION_MIN_WEIGHT",
    "InferenceEngine",
    "Result",
    "lexicographic_order",
    "min_weight_order",
    "elimination_weight",
]
