"""
Topology module: network structure and topological order.
"""

from bnexact.topology.structure import NetworkStructure

__all__ = [
    "NetworkStructure",
]
