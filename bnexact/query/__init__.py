"""
Query module: query text parsing and assignment enumeration.
"""

from bnexact.query.processor import Assignment, ConditionalQuery, QueryProcessor

__all__ = [
    "Assignment",
    "ConditionalQuery",
    "QueryProcessor",
]
