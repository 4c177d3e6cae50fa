"""
Tests for elimination orderings.
"""

import pytest

from bnexact.core.registry import VariableRegistry
from bnexact.engine.ordering import elimination_weight, lexicographic_order, min_weight_order


@pytest.fixture
def binary_registry():
    return VariableRegistry.build({v: ["0", "1"] for v in "ABCD"})


class TestLexicographic:
    def test_sorted_by_name(self):
        assert lexicographic_order({"M", "A", "Earthquake"}) == ["A", "Earthquake", "M"]


class TestElimationWeight:
    def test_weight_is_product_of_involved_domains(self):
        reg = VariableRegistry.build({"A": ["0", "1", "2"], "B": ["0", "1"], "C": ["0", "1"]})
        scopes = [frozenset("A"), frozenset("AB"), frozenset("BC")]
        assert elimination_weight("A", scopes, reg) == 6
        assert elimination_weight("B", scopes, reg) == 12
        assert elimination_weight("C", scopes, reg) == 4

    def test_unmentioned_variable_weighs_zero(self, binary_registry):
        assert elimination_weight("D", [frozenset("AB")], binary_registry) == 0


class TestMinWeight:
    def test_ties_broken_by_name(self, binary_registry):
        scopes = [("A",), ("A", "B"), ("B", "C")]
        assert min_weight_order(scopes, ["C", "B", "A"], binary_registry) == ["A", "B", "C"]

    def test_prefers_small_factors(self):
        reg = VariableRegistry.build({"A": ["0", "1", "2"], "B": ["0", "1"], "C": ["0", "1"]})
        scopes = [("A",), ("A", "B"), ("B", "C")]
        # C (4) first; then A and B both weigh 6, A wins the tie
        assert min_weight_order(scopes, ["A", "B", "C"], reg) == ["C", "A", "B"]

    def test_simulated_merge_changes_weights(self, binary_registry):
        # After A is gone, B and C both touch (B,C,D); B wins the tie.
        # Weights from the initial scopes alone would put C before B.
        scopes = [("A", "B"), ("B", "C", "D")]
        assert min_weight_order(scopes, ["A", "B", "C"], binary_registry) == ["A", "B", "C"]

    def test_unmentioned_variables_go_first(self, binary_registry):
        order = min_weight_order([("A", "B")], ["A", "D"], binary_registry)
        assert order == ["D", "A"]
