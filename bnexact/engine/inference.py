"""
bnexact/engine/inference.py

Exact inference over a NetworkStructure.

Joint queries are answered by the chain rule over the topological order.
Conditional queries are answered by one of three algorithms:

    1  full enumeration over the hidden variables
    2  variable elimination, lexicographic elimination order
    3  variable elimination, greedy min-weight elimination order

A conditional query whose evidence is exactly the parent set of the query
variable is answered straight from its CPT at zero cost.

The engine holds no per-query state; all working factors are local to one
call, so one engine can serve concurrent queries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from bnexact.algebra.cost import OperationCost, ZERO_COST
from bnexact.algebra.factor import Factor, multiply_all, partition
from bnexact.core.errors import DegenerateFactor, InvalidAlgorithm, MalformedQuery
from bnexact.engine.ordering import lexicographic_order, min_weight_order
from bnexact.query.processor import ConditionalQuery, QueryProcessor
from bnexact.topology.structure import NetworkStructure

log = logging.getLogger(__name__)

ENUMERATION = 1
ELIMINATION_LEXICOGRAPHIC = 2
ELIMINATION_MIN_WEIGHT = 3

ALGORITHMS = {
    ENUMERATION: "enumeration",
    ELIMINATION_LEXICOGRAPHIC: "variable elimination (lexicographic)",
    ELIMINATION_MIN_WEIGHT: "variable elimination (min-weight)",
}


@dataclass(frozen=True)
class Result:
    """Answer to one query plus the arithmetic it took."""
    probability: float
    additions: int = 0
    multiplications: int = 0

    @staticmethod
    def of(probability: float, cost: OperationCost) -> "Result":
        return Result(float(probability), cost.additions, cost.multiplications)

    @property
    def cost(self) -> OperationCost:
        return OperationCost(self.additions, self.multiplications)


class InferenceEngine:
    """
    Answers joint and conditional queries against an immutable network.
    """

    def __init__(self, structure: NetworkStructure, processor: Optional[QueryProcessor] = None):
        self.structure = structure
        self.processor = processor if processor is not None else QueryProcessor(structure)

    # ------------------------------------------------------------------
    # Joint queries
    # ------------------------------------------------------------------

    def _chain_rule(self, assignment: Mapping[str, str]) -> Tuple[float, int]:
        """Product of CPT entries for the assigned variables, and the number of factors."""
        probability = 1.0
        count = 0
        for var in self.structure.topological_order():
            if var not in assignment or not self.structure.has_cpt(var):
                continue
            cpt = self.structure.cpt(var)
            missing = [p for p in cpt.parents if p not in assignment]
            if missing:
                raise MalformedQuery(f"Joint query assigns {var} but not its parents {missing}")
            probability *= cpt.probability(assignment[var], assignment)
            count += 1
        return probability, count

    def joint_probability(self, query: str) -> Result:
        """
        P(V1=v1, V2=v2, ...) by the chain rule.

        Variables absent from the assignment are skipped; every assigned
        variable's parents must also be assigned.
        """
        assignment = self.processor.parse_assignments(query)
        self.processor.validate(assignment)
        probability, count = self._chain_rule(assignment)
        return Result(probability, 0, max(count - 1, 0))

    # ------------------------------------------------------------------
    # Conditional queries
    # ------------------------------------------------------------------

    def conditional_probability(self, query: str, algorithm: int) -> Result:
        """
        P(V=v | E1=e1, ...) using the selected algorithm (1, 2 or 3).
        """
        cq = self.processor.parse_conditional(query)

        if self.processor.is_directly_in_cpt(cq):
            log.debug("Answering %s directly from the CPT of %s", query, cq.variable)
            return self.from_cpt(cq)

        if algorithm not in ALGORITHMS:
            raise InvalidAlgorithm(f"Invalid algorithm: {algorithm!r} (expected one of {sorted(ALGORITHMS)})")

        log.debug("Answering %s with %s", query, ALGORITHMS[algorithm])
        if algorithm == ENUMERATION:
            return self.enumeration(cq)
        return self.variable_elimination(cq, heuristic=(algorithm == ELIMINATION_MIN_WEIGHT))

    def from_cpt(self, cq: ConditionalQuery) -> Result:
        """Read P(V=v | parents) straight from V's CPT."""
        cpt = self.structure.cpt(cq.variable)
        return Result(cpt.probability(cq.value, cq.evidence), 0, 0)

    def hidden_variables(self, cq: ConditionalQuery) -> List[str]:
        """All variables other than the query variable and the evidence, sorted by name."""
        return sorted(
            v for v in self.structure.variables()
            if v != cq.variable and v not in cq.evidence
        )

    def enumeration(self, cq: ConditionalQuery) -> Result:
        """
        Full enumeration.

        numerator   = sum over hidden h of P(query, evidence, h)
        denominator = sum over values x of the query variable of the same sum
                      with the query variable set to x
        """
        hidden = self.hidden_variables(cq)
        domain = self.structure.variables()[cq.variable].domain
        cost = ZERO_COST

        def marginal(value: str) -> Tuple[float, OperationCost]:
            total = 0.0
            terms = 0
            mults = 0
            for h in self.processor.generate_all_assignments(hidden):
                full: Dict[str, str] = dict(cq.evidence)
                full.update(h)
                full[cq.variable] = value
                joint = self.joint_probability(f"P({self.processor.assignments_to_string(full)})")
                total += joint.probability
                mults += joint.multiplications
                terms += 1
            return total, OperationCost.summation(terms) + OperationCost(multiplications=mults)

        numerator, c = marginal(cq.value)
        cost = cost + c

        denominator = 0.0
        for value in domain:
            if value == cq.value:
                denominator += numerator
                continue
            part, c = marginal(value)
            denominator += part
            cost = cost + c
        cost = cost + OperationCost.summation(len(domain))

        if denominator == 0.0:
            raise DegenerateFactor(f"Evidence {dict(cq.evidence)} has zero probability")

        log.debug("Enumeration over %d hidden variables: %s", len(hidden), cost)
        return Result.of(numerator / denominator, cost)

    def initial_factors(self, evidence: Mapping[str, str], keep: str) -> Tuple[List[Factor], float]:
        """
        One factor per CPT, restricted by every evidence variable it mentions.

        Factors that collapse to a single cell are constants. Unless they
        mention `keep`, they are dropped and their product is returned as the
        second element, so callers can detect evidence of zero probability.
        """
        factors: List[Factor] = []
        scale = 1.0
        for cpt in self.structure.cpts().values():
            factor = Factor.from_cpt(cpt)
            for var, value in evidence.items():
                factor = factor.restrict(var, value)
            if factor.size > 1 or factor.mentions(keep):
                factors.append(factor)
            else:
                scale *= factor.total()
        return factors, scale

    def elimination_order(self, factors: Sequence[Factor], hidden: Sequence[str], heuristic: bool) -> List[str]:
        if heuristic:
            return min_weight_order([f.scope for f in factors], hidden, self.structure.variables())
        return lexicographic_order(hidden)

    def variable_elimination(self, cq: ConditionalQuery, heuristic: bool = False) -> Result:
        """
        Variable elimination.

        For each hidden variable in order, the factors mentioning it are
        joined smallest-first and the variable is summed out. Constants that
        do not mention the query variable are dropped along the way; if any
        of them is zero the evidence is impossible. The remaining factors are
        joined and normalized over the query variable.
        """
        factors, scale = self.initial_factors(cq.evidence, keep=cq.variable)
        hidden = self.hidden_variables(cq)
        order = self.elimination_order(factors, hidden, heuristic)
        log.debug("Eliminating %s from %d factors", order, len(factors))

        cost = ZERO_COST
        for var in order:
            relevant, rest = partition(factors, var)
            if not relevant:
                continue

            relevant.sort(key=lambda f: f.size)
            product, c = multiply_all(relevant)
            cost = cost + c

            summed, c = product.sum_out(var)
            cost = cost + c

            if summed.size > 1 or summed.mentions(cq.variable):
                rest.append(summed)
            else:
                scale *= summed.total()
            factors = rest

        if not factors:
            raise DegenerateFactor(f"No factor left over query variable {cq.variable}")

        if scale == 0.0:
            raise DegenerateFactor(f"Evidence {dict(cq.evidence)} has zero probability")

        final, c = multiply_all(factors)
        cost = cost + c

        posterior = final.normalize()
        domain = self.structure.variables()[cq.variable].domain
        cost = cost + OperationCost.summation(len(domain))

        log.debug("Elimination finished: final scope %s, %s", final.scope, cost)
        return Result.of(posterior.probability(cq.query), cost)
