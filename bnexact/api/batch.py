"""
bnexact/api/batch.py

Batch driver: a list of query lines in, one result line per query out.

Input file format:
    line 1:      path to the network file (.xml or .json)
    other lines: one query each
                 P(A=a,B=b,...)            joint
                 P(A=a|E=e,...),N          conditional, algorithm N in {1,2,3}

Output lines are "probability,additions,multiplications" with the
probability rendered to PRECISION decimals.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from bnexact.core.errors import BayesNetError, MalformedQuery
from bnexact.engine.inference import Result
from bnexact.network import BayesianNetwork

log = logging.getLogger(__name__)

PRECISION = 5


def split_algorithm(line: str) -> Tuple[str, Optional[int]]:
    """
    Split a query line into (probability expression, algorithm).

    Conditional lines carry the algorithm after their last comma; joint lines
    have no selector and yield None.
    """
    line = line.strip()
    if "|" not in line:
        return line, None

    expr, sep, selector = line.rpartition(",")
    if not sep or not expr.endswith(")"):
        raise MalformedQuery(f"Conditional query needs a trailing ',N' algorithm selector: {line!r}")
    try:
        return expr.strip(), int(selector.strip())
    except ValueError:
        raise MalformedQuery(f"Algorithm must be an integer, got {selector.strip()!r}") from None


def process_query(network: BayesianNetwork, line: str) -> Result:
    """Evaluate one query line."""
    expr, algorithm = split_algorithm(line)
    if algorithm is None:
        return network.joint_probability(expr)
    return network.conditional_probability(expr, algorithm)


def format_result(result: Result, precision: int = PRECISION) -> str:
    return f"{result.probability:.{precision}f},{result.additions},{result.multiplications}"


def run_batch(network: BayesianNetwork, lines: Iterable[str]) -> List[str]:
    """
    Evaluate every non-blank query line.

    A query that fails with a BayesNetError produces an "error: ..." line and
    does not stop the batch.
    """
    out: List[str] = []
    for line in lines:
        if not line.strip():
            continue
        try:
            result = process_query(network, line)
        except BayesNetError as e:
            log.warning("Query %r failed: %s", line.strip(), e)
            out.append(f"error: {e}")
            continue
        log.debug("%s -> %s", line.strip(), result)
        out.append(format_result(result))
    return out


def read_input(filepath: str) -> Tuple[str, List[str]]:
    """
    Read a batch input file.

    Returns the network path and the non-blank query lines. A relative
    network path that does not exist from the working directory is resolved
    against the input file's directory.
    """
    with open(filepath, "r") as f:
        lines = [ln.rstrip("\n") for ln in f]
    if not lines or not lines[0].strip():
        raise MalformedQuery(f"{filepath}: first line must name the network file")

    network_path = Path(lines[0].strip())
    if not network_path.is_absolute() and not network_path.exists():
        candidate = Path(filepath).parent / network_path
        if candidate.exists():
            network_path = candidate
    return str(network_path), [ln for ln in lines[1:] if ln.strip()]


def process_file(input_path: str, output_path: Optional[str] = None) -> List[str]:
    """Run a batch input file; write the result lines to output_path if given."""
    network_path, queries = read_input(input_path)
    network = BayesianNetwork.from_file(network_path)
    results = run_batch(network, queries)

    if output_path is not None:
        with open(output_path, "w") as f:
            for line in results:
                f.write(line + "\n")
        log.info("Wrote %d results to %s", len(results), output_path)
    return results
