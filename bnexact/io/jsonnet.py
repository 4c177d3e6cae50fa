"""
bnexact/io/jsonnet.py

JSON network format.

Expected format:
{
    "variables": {"Rain": ["T", "F"], "WetGrass": ["T", "F"]},
    "cpts": {
        "Rain": {"parents": [], "table": [0.2, 0.8]},
        "WetGrass": {"parents": ["Rain"], "table": [0.9, 0.1, 0.1, 0.9]}
    }
}
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Tuple

import numpy as np

from bnexact.algebra.cpt import CPT
from bnexact.core.errors import MalformedNetwork
from bnexact.core.registry import VariableRegistry


def network_from_dict(data: Mapping[str, Any]) -> Tuple[VariableRegistry, Dict[str, CPT]]:
    """Build the registry and CPTs from a decoded JSON document."""
    try:
        registry = VariableRegistry.build(data["variables"])
        cpts = {
            name: CPT(
                name,
                tuple(cdata.get("parents", ())),
                np.array(cdata["table"], dtype=np.float64),
                registry,
            )
            for name, cdata in data["cpts"].items()
        }
    except KeyError as e:
        raise MalformedNetwork(f"Missing key in network definition: {e}") from e
    return registry, cpts


def network_to_dict(registry: VariableRegistry, cpts: Mapping[str, CPT]) -> Dict[str, Any]:
    return {
        "variables": {name: list(var.domain) for name, var in registry.items()},
        "cpts": {
            name: {"parents": list(cpt.parents), "table": cpt.table.tolist()}
            for name, cpt in cpts.items()
        },
    }


def load_network_json(filepath: str) -> Tuple[VariableRegistry, Dict[str, CPT]]:
    """Load a network from a JSON file."""
    with open(filepath, "r") as f:
        data = json.load(f)
    return network_from_dict(data)


def save_network_json(filepath: str, registry: VariableRegistry, cpts: Mapping[str, CPT]) -> None:
    """Write a network to a JSON file."""
    with open(filepath, "w") as f:
        json.dump(network_to_dict(registry, cpts), f, indent=2)
