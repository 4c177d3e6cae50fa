"""
API module: batch query driver.
"""

from bnexact.api.batch import PRECISION, format_result, process_file, process_query, run_batch, split_algorithm

__all__ = [
    "PRECISION",
    "format_result",
    "process_file",
    "process_query",
    "run_batch",
    "split_algorithm",
]
