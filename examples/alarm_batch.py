"""
Example: batch queries against the XMLBIF alarm network.

Runs input.txt (network file on the first line, one query per line) and
prints "probability,additions,multiplications" for each query.
"""

from pathlib import Path

from bnexact.api.batch import process_file


def main():
    here = Path(__file__).parent
    queries = (here / "input.txt").read_text().splitlines()[1:]
    results = process_file(str(here / "input.txt"))

    for query, line in zip(queries, results):
        print(f"{query:32s} {line}")


if __name__ == "__main__":
    main()
