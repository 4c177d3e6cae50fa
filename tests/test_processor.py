"""
Tests for query parsing and assignment enumeration.
"""

from typing import Iterator

import pytest

from bnexact.core.errors import MalformedQuery


class TestParseAssignments:
    def test_joint(self, rain_network):
        qp = rain_network.processor
        assert qp.parse_assignments("P(Rain=T,WetGrass=F)") == {"Rain": "T", "WetGrass": "F"}

    def test_whitespace_stripped(self, rain_network):
        qp = rain_network.processor
        assert qp.parse_assignments(" P( Rain = T , WetGrass=F ) ") == {"Rain": "T", "WetGrass": "F"}

    def test_empty_body(self, rain_network):
        assert rain_network.processor.parse_assignments("P()") == {}

    @pytest.mark.parametrize("text", [
        "P(Rain)",
        "P(Rain=T=F)",
        "P(Rain=T,)",
        "Rain=T",
        "P(Rain=T",
        "P(Rain=T,Rain=F)",
    ])
    def test_malformed(self, rain_network, text):
        with pytest.raises(MalformedQuery):
            rain_network.processor.parse_assignments(text)

    def test_render_is_sorted(self, rain_network):
        qp = rain_network.processor
        assert qp.assignments_to_string({"WetGrass": "T", "Rain": "F"}) == "Rain=F,WetGrass=T"

    def test_render_parse_inverse(self, alarm_network):
        qp = alarm_network.processor
        a = {"M": "T", "B": "F", "J": "F"}
        assert qp.parse_assignments(f"P({qp.assignments_to_string(a)})") == a


class TestParseConditional:
    def test_conditional(self, alarm_network):
        cq = alarm_network.processor.parse_conditional("P(B=T|J=T,M=F)")
        assert cq.variable == "B"
        assert cq.value == "T"
        assert dict(cq.evidence) == {"J": "T", "M": "F"}
        assert cq.query == {"B": "T"}

    def test_empty_evidence(self, alarm_network):
        cq = alarm_network.processor.parse_conditional("P(B=T|)")
        assert dict(cq.evidence) == {}

    @pytest.mark.parametrize("text", [
        "P(B=T)",
        "P(B=T|J=T|M=T)",
        "P(B=T,E=T|J=T)",
        "P(|J=T)",
        "P(B=T|B=F)",
        "P(Q=T|J=T)",
        "P(B=maybe|J=T)",
        "P(B=T|J=sometimes)",
    ])
    def test_malformed(self, alarm_network, text):
        with pytest.raises(MalformedQuery):
            alarm_network.processor.parse_conditional(text)


class TestDirectlyInCPT:
    def test_evidence_equals_parents(self, rain_network):
        assert rain_network.processor.is_directly_in_cpt("P(WetGrass=T|Rain=T)")

    def test_evidence_is_child(self, rain_network):
        assert not rain_network.processor.is_directly_in_cpt("P(Rain=T|WetGrass=T)")

    def test_root_with_empty_evidence(self, rain_network):
        assert rain_network.processor.is_directly_in_cpt("P(Rain=T|)")

    def test_parents_in_any_order(self, alarm_network):
        assert alarm_network.processor.is_directly_in_cpt("P(A=T|E=F,B=T)")

    def test_subset_of_parents(self, alarm_network):
        assert not alarm_network.processor.is_directly_in_cpt("P(A=T|B=T)")

    def test_same_size_other_variables(self, alarm_network):
        assert not alarm_network.processor.is_directly_in_cpt("P(A=T|B=T,J=T)")


class TestGenerateAllAssignments:
    def test_first_variable_outermost(self, mixed_network):
        gen = mixed_network.processor.generate_all_assignments(["Y", "X"])
        assert isinstance(gen, Iterator)

        rows = [(a["Y"], a["X"]) for a in gen]
        assert rows == [
            ("y0", "x0"), ("y0", "x1"), ("y0", "x2"),
            ("y1", "x0"), ("y1", "x1"), ("y1", "x2"),
        ]

    def test_count_is_product_of_domains(self, mixed_network):
        rows = list(mixed_network.processor.generate_all_assignments(["X", "Z", "W"]))
        assert len(rows) == 3 * 3 * 2
        assert len({tuple(sorted(r.items())) for r in rows}) == len(rows)

    def test_no_variables(self, mixed_network):
        assert list(mixed_network.processor.generate_all_assignments([])) == [{}]
