#!/usr/bin/env python3
"""
bnexact: exact inference over discrete Bayesian networks

Usage:
    # Answer one query against a network file
    python main.py query --network alarm.xml "P(B=T|J=T,M=T)" --algorithm 2

    # Run a batch input file (first line: network file, then one query per line)
    python main.py batch --input input.txt --output output.txt

    # Run demos
    python main.py demo --example rain

    # Run tests
    python main.py test
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from bnexact import BayesianNetwork, BayesNetError, __version__
from bnexact.api.batch import format_result, process_file, process_query
from bnexact.engine.inference import ALGORITHMS


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] [%(name)s] - %(message)s",
    )
    logging.getLogger("networkx").setLevel(logging.WARNING)


def rain_network() -> BayesianNetwork:
    """Rain -> WetGrass."""
    return BayesianNetwork.build(
        {"Rain": ["T", "F"], "WetGrass": ["T", "F"]},
        {
            "Rain": ((), [0.2, 0.8]),
            "WetGrass": (("Rain",), [0.9, 0.1, 0.1, 0.9]),
        },
    )


def alarm_network() -> BayesianNetwork:
    """Burglary and Earthquake -> Alarm -> JohnCalls, MaryCalls."""
    return BayesianNetwork.build(
        {
            "B": ["T", "F"],
            "E": ["T", "F"],
            "A": ["T", "F"],
            "J": ["T", "F"],
            "M": ["T", "F"],
        },
        {
            "B": ((), [0.001, 0.999]),
            "E": ((), [0.002, 0.998]),
            "A": (("B", "E"), [0.95, 0.05, 0.94, 0.06, 0.29, 0.71, 0.001, 0.999]),
            "J": (("A",), [0.9, 0.1, 0.05, 0.95]),
            "M": (("A",), [0.7, 0.3, 0.01, 0.99]),
        },
    )


def run_demo(name: str, network: BayesianNetwork, joint: str, conditionals) -> bool:
    print("=" * 60)
    print(f"Demo: {name}")
    print("=" * 60)
    print(f"\nTopological order: {', '.join(network.structure.topological_order())}")

    result = network.joint_probability(joint)
    print(f"\n{joint} = {format_result(result)}")

    all_match = True
    for query in conditionals:
        print(f"\n{query}")
        results = {}
        for algorithm, label in ALGORITHMS.items():
            results[algorithm] = network.conditional_probability(query, algorithm)
            print(f"  [{algorithm}] {label:40s} {format_result(results[algorithm])}")
        probs = [r.probability for r in results.values()]
        match = bool(np.allclose(probs, probs[0], atol=1e-9))
        print(f"  Algorithms agree: {match}")
        all_match = all_match and match

    return all_match


def demo_rain() -> bool:
    return run_demo(
        "Rain -> WetGrass",
        rain_network(),
        "P(Rain=T,WetGrass=T)",
        ["P(WetGrass=T|Rain=T)", "P(Rain=T|WetGrass=T)"],
    )


def demo_alarm() -> bool:
    return run_demo(
        "Burglary alarm",
        alarm_network(),
        "P(B=F,E=T,A=T,M=T,J=F)",
        ["P(B=T|J=T,M=T)", "P(J=T|B=T)", "P(E=T|)"],
    )


def cmd_query(args):
    """Execute the query command."""
    try:
        network = BayesianNetwork.from_file(args.network)
    except (BayesNetError, OSError) as e:
        print(f"Error loading network: {e}")
        return 1

    line = args.query if "|" not in args.query else f"{args.query},{args.algorithm}"
    try:
        result = process_query(network, line)
    except BayesNetError as e:
        print(f"Error: {e}")
        return 1

    print(format_result(result))
    return 0


def cmd_batch(args):
    """Execute the batch command."""
    try:
        results = process_file(args.input, args.output)
    except (BayesNetError, OSError) as e:
        print(f"Error: {e}")
        return 1

    if args.output is None:
        for line in results:
            print(line)
    return 0


def cmd_demo(args):
    """Execute the demo command."""
    demos = {
        "rain": demo_rain,
        "alarm": demo_alarm,
    }

    if args.example == "all":
        results = [(name, func()) for name, func in demos.items()]
        print()
        print("=" * 60)
        print("Summary")
        print("=" * 60)
        for name, passed in results:
            print(f"  {name}: {'PASS' if passed else 'FAIL'}")
        return 0 if all(passed for _, passed in results) else 1

    return 0 if demos[args.example]() else 1


def cmd_test(args):
    """Execute the test command."""
    import subprocess

    test_dir = Path(__file__).parent / "tests"
    if not test_dir.exists():
        print(f"Test directory not found: {test_dir}")
        return 1

    cmd = [sys.executable, "-m", "pytest", str(test_dir)]
    if args.verbose:
        cmd.append("-v")
    if args.coverage:
        cmd.extend(["--cov=bnexact", "--cov-report=term-missing"])

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def cmd_info(args):
    """Display system information."""
    import networkx

    print(f"bnexact v{__version__}")
    print("Exact inference over discrete Bayesian networks")
    print()
    print("Algorithms:")
    for algorithm, label in ALGORITHMS.items():
        print(f"  {algorithm} - {label}")
    print()
    print("Network formats: .xml (XMLBIF), .json")
    print()
    print("Python:", sys.version.split()[0])
    print("NumPy:", np.__version__)
    print("NetworkX:", networkx.__version__)
    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="bnexact",
        description="bnexact: exact inference over discrete Bayesian networks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Joint query
  bnexact query --network net.xml "P(A=T,B=F)"

  # Conditional query with variable elimination (min-weight order)
  bnexact query --network net.xml "P(A=T|B=F)" --algorithm 3

  # Batch file
  bnexact batch --input input.txt --output output.txt

  # Run demos
  bnexact demo --example all
"""
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"bnexact {__version__}"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Query command
    query_parser = subparsers.add_parser("query", help="Answer a single query")
    query_parser.add_argument("query", type=str, help="P(X=x,...) or P(X=x|E=e,...)")
    query_parser.add_argument("--network", "-n", type=str, required=True, help="Network file (.xml or .json)")
    query_parser.add_argument(
        "--algorithm", "-a",
        type=int,
        default=2,
        help="Conditional algorithm: 1 enumeration, 2 VE lexicographic, 3 VE min-weight (default: 2)"
    )

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Run a batch input file")
    batch_parser.add_argument("--input", "-i", type=str, required=True, help="Input file")
    batch_parser.add_argument("--output", "-o", type=str, help="Output file (default: stdout)")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demonstration examples")
    demo_parser.add_argument(
        "--example", "-e",
        choices=["rain", "alarm", "all"],
        default="all",
        help="Which example to run (default: all)"
    )

    # Test command
    test_parser = subparsers.add_parser("test", help="Run test suite")
    test_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    test_parser.add_argument("--coverage", "-c", action="store_true", help="With coverage")

    # Info command
    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "query": cmd_query,
        "batch": cmd_batch,
        "demo": cmd_demo,
        "test": cmd_test,
        "info": cmd_info,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
