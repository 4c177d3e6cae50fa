"""
bnexact/io/xmlbif.py

XMLBIF network reader.

Expected format:
    <NETWORK>
      <VARIABLE TYPE="nature">
        <NAME>Rain</NAME>
        <OUTCOME>T</OUTCOME>
        <OUTCOME>F</OUTCOME>
      </VARIABLE>
      <DEFINITION>
        <FOR>WetGrass</FOR>
        <GIVEN>Rain</GIVEN>
        <TABLE>0.9 0.1 0.1 0.9</TABLE>
      </DEFINITION>
    </NETWORK>

TABLE values follow the CPT layout: the variable's own value varies fastest,
then the GIVEN parents from last to first.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Dict, Tuple

import numpy as np

from bnexact.algebra.cpt import CPT
from bnexact.core.errors import MalformedNetwork
from bnexact.core.registry import Variable, VariableRegistry

log = logging.getLogger(__name__)


def _text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        raise MalformedNetwork(f"<{element.tag}> is missing <{tag}>")
    return child.text.strip()


def parse_xmlbif(root: ET.Element) -> Tuple[VariableRegistry, Dict[str, CPT]]:
    """Build the registry and CPTs from a parsed XMLBIF document."""
    variables = []
    for node in root.iter("VARIABLE"):
        name = _text(node, "NAME")
        outcomes = tuple(o.text.strip() for o in node.findall("OUTCOME") if o.text)
        variables.append(Variable(name, outcomes))
    registry = VariableRegistry(variables)

    cpts: Dict[str, CPT] = {}
    for node in root.iter("DEFINITION"):
        name = _text(node, "FOR")
        parents = tuple(g.text.strip() for g in node.findall("GIVEN") if g.text)
        try:
            table = np.array(_text(node, "TABLE").split(), dtype=np.float64)
        except ValueError as e:
            raise MalformedNetwork(f"Non-numeric TABLE for {name}: {e}") from e
        if name in cpts:
            raise MalformedNetwork(f"Duplicate DEFINITION for {name}")
        cpts[name] = CPT(name, parents, table, registry)

    log.debug("Parsed XMLBIF: %d variables, %d CPTs", len(registry), len(cpts))
    return registry, cpts


def load_xmlbif(filepath: str) -> Tuple[VariableRegistry, Dict[str, CPT]]:
    """Load a network from an XMLBIF file."""
    try:
        tree = ET.parse(filepath)
    except ET.ParseError as e:
        raise MalformedNetwork(f"Invalid XML in {filepath}: {e}") from e
    return parse_xmlbif(tree.getroot())


def loads_xmlbif(text: str) -> Tuple[VariableRegistry, Dict[str, CPT]]:
    """Load a network from an XMLBIF string."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedNetwork(f"Invalid XML: {e}") from e
    return parse_xmlbif(root)
