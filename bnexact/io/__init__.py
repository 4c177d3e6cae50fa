"""
IO module: network readers.
"""

from bnexact.io.xmlbif import load_xmlbif, loads_xmlbif, parse_xmlbif
from bnexact.io.jsonnet import load_network_json, save_network_json, network_from_dict, network_to_dict

__all__ = [
    "load_xmlbif",
    "loads_xmlbif",
    "parse_xmlbif",
    "load_network_json",
    "save_network_json",
    "network_from_dict",
    "network_to_dict",
]
