"""
bnexact/query/processor.py

Query text <-> assignment mappings.

Grammar:
    joint:        P(V1=v1,V2=v2,...)
    conditional:  P(V=v|E1=e1,E2=e2,...)      evidence may be empty: P(V=v|)
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Sequence, Union

from bnexact.core.errors import MalformedQuery
from bnexact.topology.structure import NetworkStructure

Assignment = Dict[str, str]


@dataclass(frozen=True)
class ConditionalQuery:
    """
    A parsed conditional query P(variable=value | evidence).

    Attributes:
        variable: Query variable name
        value: Queried outcome label
        evidence: Observed variable -> label
    """
    variable: str
    value: str
    evidence: Mapping[str, str] = field(default_factory=dict)

    @property
    def query(self) -> Assignment:
        return {self.variable: self.value}


class QueryProcessor:
    """
    Parses and renders assignments and enumerates joint assignments.
    """

    def __init__(self, structure: NetworkStructure):
        self.structure = structure

    @staticmethod
    def _body(text: str) -> str:
        text = text.strip()
        if not (text.startswith("P(") and text.endswith(")")):
            raise MalformedQuery(f"Expected P(...), got: {text!r}")
        return text[2:-1]

    @staticmethod
    def _parse_pairs(body: str) -> Assignment:
        assignment: Assignment = {}
        body = body.strip()
        if not body:
            return assignment

        for pair in body.split(","):
            parts = pair.split("=")
            if len(parts) != 2:
                raise MalformedQuery(f"Malformed assignment {pair!r}: expected VAR=value")
            var, value = parts[0].strip(), parts[1].strip()
            if not var or not value:
                raise MalformedQuery(f"Malformed assignment {pair!r}: empty name or value")
            if var in assignment and assignment[var] != value:
                raise MalformedQuery(f"Conflicting values for {var}: {assignment[var]} and {value}")
            assignment[var] = value
        return assignment

    def parse_assignments(self, text: str) -> Assignment:
        """
        Parse P(X=x,Y=y,...) into {X: x, Y: y, ...}.

        An empty body yields an empty mapping.
        """
        return self._parse_pairs(self._body(text))

    @staticmethod
    def assignments_to_string(assignment: Mapping[str, str]) -> str:
        """Render an assignment as comma-joined var=value pairs, sorted by name."""
        return ",".join(f"{var}={assignment[var]}" for var in sorted(assignment))

    def validate(self, assignment: Mapping[str, str]) -> None:
        """Raise MalformedQuery if a variable or label is not in the network."""
        variables = self.structure.variables()
        for var, value in assignment.items():
            if var not in variables:
                raise MalformedQuery(f"Unknown variable in query: {var}")
            if value not in variables[var]:
                raise MalformedQuery(
                    f"Unknown value {value!r} for {var}; expected one of {variables[var].domain}"
                )

    def parse_conditional(self, text: str) -> ConditionalQuery:
        """
        Parse P(V=v|E1=e1,...) and validate it against the network.

        The '|' separator is mandatory; the evidence list may be empty.
        """
        body = self._body(text)
        if body.count("|") != 1:
            raise MalformedQuery(f"Conditional query needs exactly one '|': {text!r}")

        query_part, evidence_part = body.split("|")
        query = self._parse_pairs(query_part)
        if len(query) != 1:
            raise MalformedQuery(f"Conditional query needs exactly one query variable: {text!r}")
        evidence = self._parse_pairs(evidence_part)

        (variable, value), = query.items()
        if variable in evidence:
            raise MalformedQuery(f"Query variable {variable} also appears in the evidence")

        self.validate(query)
        self.validate(evidence)
        return ConditionalQuery(variable, value, evidence)

    def is_directly_in_cpt(self, query: Union[str, ConditionalQuery]) -> bool:
        """
        True if the evidence names exactly the parents of the query variable,
        so the answer is a single CPT entry.
        """
        if isinstance(query, str):
            query = self.parse_conditional(query)
        if not self.structure.has_cpt(query.variable):
            return False
        parents = self.structure.parents(query.variable)
        return len(parents) == len(query.evidence) and set(parents) == set(query.evidence)

    def generate_all_assignments(self, vars_: Sequence[str]) -> Iterator[Assignment]:
        """
        Lazily enumerate the Cartesian product of the variables' domains.

        The first variable varies slowest. An empty variable list yields one
        empty assignment.
        """
        variables = self.structure.variables()
        vars_ = list(vars_)
        domains = [variables[v].domain for v in vars_]
        for values in itertools.product(*domains):
            yield dict(zip(vars_, values))
