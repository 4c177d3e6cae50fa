"""
Tests for Factor operations.
"""

import itertools

import numpy as np
import pytest

from bnexact.algebra.cost import OperationCost
from bnexact.algebra.cpt import make_cpt
from bnexact.algebra.factor import Factor, multiply_all, partition
from bnexact.core.errors import DegenerateFactor
from bnexact.core.registry import VariableRegistry


@pytest.fixture
def registry():
    return VariableRegistry.build({
        "A": ["a0", "a1"],
        "B": ["b0", "b1", "b2"],
        "C": ["c0", "c1"],
    })


@pytest.fixture
def f_ab(registry):
    return Factor(("A", "B"), np.arange(1.0, 7.0), registry)


@pytest.fixture
def g_bc(registry):
    return Factor(("B", "C"), np.arange(1.0, 7.0) * 0.5, registry)


def all_assignments(registry, scope):
    for values in itertools.product(*(registry[v].domain for v in scope)):
        yield dict(zip(scope, values))


class TestFactorBasics:
    def test_creation(self, f_ab):
        assert f_ab.scope == ("A", "B")
        assert f_ab.size == 6

    def test_size_mismatch_raises(self, registry):
        with pytest.raises(ValueError):
            Factor(("A", "B"), np.ones(5), registry)

    def test_duplicate_scope_raises(self, registry):
        with pytest.raises(ValueError):
            Factor(("A", "A"), np.ones(4), registry)

    def test_probability_row_major(self, f_ab):
        assert f_ab.probability({"A": "a0", "B": "b1"}) == 2.0
        assert f_ab.probability({"A": "a1", "B": "b0"}) == 4.0

    def test_probability_missing_variable_raises(self, f_ab):
        with pytest.raises(KeyError):
            f_ab.probability({"A": "a0"})

    def test_from_cpt_shares_layout(self, registry):
        cpt = make_cpt("C", ("A",), [0.9, 0.1, 0.3, 0.7], registry)
        f = Factor.from_cpt(cpt)

        assert f.scope == ("A", "C")
        for a in all_assignments(registry, ("A", "C")):
            assert f.probability(a) == cpt.probability(a["C"], a)

    def test_as_dict(self, registry):
        f = Factor(("A",), np.array([0.25, 0.75]), registry)
        assert f.as_dict() == {("a0",): 0.25, ("a1",): 0.75}

    def test_constant(self, registry):
        f = Factor.constant(3.0, registry)
        assert f.scope == ()
        assert f.probability({}) == 3.0
        assert list(f.assignments()) == [{}]


class TestRestrict:
    def test_restrict(self, f_ab):
        r = f_ab.restrict("B", "b1")
        assert r.scope == ("A",)
        assert r.table.tolist() == [2.0, 5.0]

    def test_restrict_matches_original(self, registry, f_ab, g_bc):
        h, _ = f_ab.multiply(g_bc)
        r = h.restrict("B", "b2")
        for a in all_assignments(registry, r.scope):
            assert r.probability(a) == h.probability(dict(a, B="b2"))

    def test_restrict_absent_variable_is_noop(self, f_ab):
        assert f_ab.restrict("C", "c0") is f_ab

    def test_restrict_to_constant(self, registry):
        f = Factor(("A",), np.array([0.25, 0.75]), registry)
        r = f.restrict("A", "a1")
        assert r.scope == ()
        assert r.size == 1
        assert r.probability({}) == 0.75


class TestMultiply:
    def test_join_values(self, f_ab, g_bc):
        h, cost = f_ab.multiply(g_bc)

        assert set(h.scope) == {"A", "B", "C"}
        assert h.probability({"A": "a1", "B": "b2", "C": "c1"}) == 6.0 * 3.0
        assert cost == OperationCost(multiplications=12)

    def test_commutative(self, registry, f_ab, g_bc):
        h1, _ = f_ab.multiply(g_bc)
        h2, _ = g_bc.multiply(f_ab)

        assert h1.scope != h2.scope
        for a in all_assignments(registry, ("A", "B", "C")):
            assert h1.probability(a) == pytest.approx(h2.probability(a))

    def test_associative(self, registry, f_ab, g_bc):
        k = Factor(("C", "A"), np.array([0.1, 0.2, 0.3, 0.4]), registry)

        left, _ = multiply_all([f_ab, g_bc, k])
        gk, _ = g_bc.multiply(k)
        right, _ = f_ab.multiply(gk)

        for a in all_assignments(registry, ("A", "B", "C")):
            assert left.probability(a) == pytest.approx(right.probability(a))

    def test_disjoint_scopes_outer_product(self, registry):
        f = Factor(("A",), np.array([2.0, 3.0]), registry)
        g = Factor(("C",), np.array([4.0, 5.0]), registry)
        h, cost = f.multiply(g)

        assert h.size == 4
        assert h.probability({"A": "a1", "C": "c0"}) == 12.0
        assert cost.multiplications == 4

    def test_multiply_all_sums_costs(self, f_ab, g_bc):
        _, cost = multiply_all([f_ab, g_bc, f_ab])
        assert cost.multiplications == 12 + 12

    def test_multiply_all_empty_raises(self):
        with pytest.raises(ValueError):
            multiply_all([])


class TestSumOut:
    def test_sum_out_first_axis(self, f_ab):
        m, cost = f_ab.sum_out("A")
        assert m.scope == ("B",)
        assert m.table.tolist() == [5.0, 7.0, 9.0]
        assert cost == OperationCost(additions=3)

    def test_sum_out_last_axis(self, f_ab):
        m, cost = f_ab.sum_out("B")
        assert m.scope == ("A",)
        assert m.table.tolist() == [6.0, 15.0]
        assert cost.additions == 4

    def test_sum_out_middle_axis(self, registry, f_ab, g_bc):
        h, _ = f_ab.multiply(g_bc)
        m, _ = h.sum_out("B")

        for a in all_assignments(registry, m.scope):
            expected = sum(h.probability(dict(a, B=b)) for b in registry["B"].domain)
            assert m.probability(a) == pytest.approx(expected)

    def test_sum_out_to_constant(self, registry):
        f = Factor(("A",), np.array([0.25, 0.5]), registry)
        m, cost = f.sum_out("A")
        assert m.scope == ()
        assert m.table.tolist() == [0.75]
        assert cost.additions == 1

    def test_sum_out_absent_variable(self, f_ab):
        m, cost = f_ab.sum_out("C")
        assert m is f_ab
        assert cost == OperationCost()


class TestNormalize:
    def test_normalize_sums_to_one(self, f_ab):
        n = f_ab.normalize()
        assert np.isclose(n.total(), 1.0)
        assert n.probability({"A": "a1", "B": "b2"}) == pytest.approx(6.0 / 21.0)

    def test_normalize_zero_raises(self, registry):
        f = Factor(("A",), np.zeros(2), registry)
        with pytest.raises(DegenerateFactor):
            f.normalize()

    def test_normalize_returns_new_factor(self, f_ab):
        n = f_ab.normalize()
        assert n is not f_ab
        assert f_ab.total() == 21.0


class TestPartition:
    def test_partition(self, f_ab, g_bc):
        relevant, rest = partition([f_ab, g_bc], "A")
        assert relevant == [f_ab]
        assert rest == [g_bc]
