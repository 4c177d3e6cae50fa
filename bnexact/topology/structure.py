"""
bnexact/topology/structure.py

Network structure: variables, CPTs, parent/child adjacency and a topological
order in which every variable follows all of its ancestors.

Built once from a network definition and read-only afterwards.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Set, Tuple

import networkx as nx

from bnexact.algebra.cpt import CPT
from bnexact.core.errors import CyclicNetwork, UnresolvedReference
from bnexact.core.registry import VariableRegistry

log = logging.getLogger(__name__)


class NetworkStructure:
    """
    Structure of a Bayesian network.

    Maintains:
    - The variable registry
    - CPTs keyed by child variable
    - A directed parent -> child graph
    - The topological order
    """

    def __init__(self, variables: VariableRegistry, cpts: Mapping[str, CPT]):
        self._variables = variables
        self._cpts: Dict[str, CPT] = dict(cpts)
        self.graph = nx.DiGraph()

        self._build_graph()
        self._order: Tuple[str, ...] = self._topological_sort()
        log.debug("Built %r with order %s", self, self._order)

    def _build_graph(self) -> None:
        for name in self._variables:
            self.graph.add_node(name)

        for key, cpt in self._cpts.items():
            if key != cpt.variable:
                raise UnresolvedReference(f"CPT registered under {key} is for {cpt.variable}")
            if cpt.variable not in self._variables:
                raise UnresolvedReference(f"CPT for unknown variable: {cpt.variable}")
            for parent in cpt.parents:
                if parent not in self._variables:
                    raise UnresolvedReference(
                        f"CPT for {cpt.variable} references unknown parent: {parent}"
                    )
                self.graph.add_edge(parent, cpt.variable)

        missing = [v for v in self._variables if v not in self._cpts]
        if missing:
            log.warning("Variables without a CPT are ignored by inference: %s", missing)

    def _topological_sort(self) -> Tuple[str, ...]:
        """
        Depth-first topological sort.

        A node is finished once all its children are finished; the order is
        the reverse of finishing order. Reaching a node that is still on the
        DFS path means the graph has a cycle.
        """
        finished: List[str] = []
        visited: Set[str] = set()
        on_path: Dict[str, int] = {}

        for root in self._variables:
            if root in visited:
                continue
            path: List[str] = [root]
            stack = [iter(self.children(root))]
            on_path[root] = 0

            while stack:
                child = next(stack[-1], None)
                if child is None:
                    done = path.pop()
                    stack.pop()
                    del on_path[done]
                    visited.add(done)
                    finished.append(done)
                    continue
                if child in on_path:
                    raise CyclicNetwork(path[on_path[child]:])
                if child in visited:
                    continue
                on_path[child] = len(path)
                path.append(child)
                stack.append(iter(self.children(child)))

        finished.reverse()
        return tuple(finished)

    def topological_order(self) -> Tuple[str, ...]:
        return self._order

    def variables(self) -> VariableRegistry:
        return self._variables

    def cpts(self) -> Mapping[str, CPT]:
        return self._cpts

    def cpt(self, variable: str) -> CPT:
        return self._cpts[variable]

    def has_cpt(self, variable: str) -> bool:
        return variable in self._cpts

    def parents(self, variable: str) -> Tuple[str, ...]:
        """Declared parents of a variable, in CPT order."""
        cpt = self._cpts.get(variable)
        return cpt.parents if cpt is not None else ()

    def children(self, variable: str) -> Tuple[str, ...]:
        if variable not in self.graph:
            return ()
        return tuple(self.graph.successors(variable))

    def ancestors(self, variable: str) -> Set[str]:
        return nx.ancestors(self.graph, variable)

    def __repr__(self) -> str:
        return f"NetworkStructure(vars={len(self._variables)}, cpts={len(self._cpts)})"
