"""
bnexact/network.py

BayesianNetwork: the entry point tying a network definition to the
structure, query processor and inference engine.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Mapping, Sequence, Tuple

from bnexact.algebra.cpt import CPT, make_cpt
from bnexact.core.errors import MalformedNetwork
from bnexact.core.registry import VariableRegistry
from bnexact.engine.inference import InferenceEngine, Result
from bnexact.io.jsonnet import load_network_json
from bnexact.io.xmlbif import load_xmlbif
from bnexact.query.processor import QueryProcessor
from bnexact.topology.structure import NetworkStructure

log = logging.getLogger(__name__)

_LOADERS = {
    ".xml": load_xmlbif,
    ".json": load_network_json,
}


class BayesianNetwork:
    """
    A loaded network, ready to answer queries.

    Example:
        >>> bn = BayesianNetwork.build(
        ...     {"Rain": ["T", "F"], "WetGrass": ["T", "F"]},
        ...     {"Rain": ((), [0.2, 0.8]), "WetGrass": (("Rain",), [0.9, 0.1, 0.1, 0.9])},
        ... )
        >>> round(bn.conditional_probability("P(Rain=T|WetGrass=T)", 2).probability, 5)
        0.69231
    """

    def __init__(self, variables: VariableRegistry, cpts: Mapping[str, CPT]):
        self.structure = NetworkStructure(variables, cpts)
        self.processor = QueryProcessor(self.structure)
        self.engine = InferenceEngine(self.structure, self.processor)

    @staticmethod
    def build(
        domains: Mapping[str, Iterable[str]],
        cpts: Mapping[str, Tuple[Sequence[str], Sequence[float]]],
    ) -> "BayesianNetwork":
        """
        Build a network from plain data.

        Args:
            domains: Map from variable name to ordered outcome labels
            cpts: Map from variable name to (parents, flat table)
        """
        registry = VariableRegistry.build(domains)
        built: Dict[str, CPT] = {
            name: make_cpt(name, parents, table, registry)
            for name, (parents, table) in cpts.items()
        }
        return BayesianNetwork(registry, built)

    @staticmethod
    def from_file(filepath: str) -> "BayesianNetwork":
        """Load a network; the format is chosen by file extension (.xml or .json)."""
        suffix = Path(filepath).suffix.lower()
        loader = _LOADERS.get(suffix)
        if loader is None:
            raise MalformedNetwork(f"Unsupported network format {suffix!r}: expected one of {sorted(_LOADERS)}")
        log.info("Loading network from %s", filepath)
        return BayesianNetwork(*loader(filepath))

    @property
    def variables(self) -> VariableRegistry:
        return self.structure.variables()

    def joint_probability(self, query: str) -> Result:
        return self.engine.joint_probability(query)

    def conditional_probability(self, query: str, algorithm: int) -> Result:
        return self.engine.conditional_probability(query, algorithm)

    def __repr__(self) -> str:
        return f"BayesianNetwork(vars={len(self.variables)}, order={self.structure.topological_order()})"
