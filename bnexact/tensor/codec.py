"""
bnexact/tensor/codec.py

Mixed-radix codec between assignments and flat table indices.

An IndexCodec fixes an ordered scope and the domain size of each variable.
Indices are row-major: the last variable of the scope varies fastest, with
stride 1, and each earlier variable's stride is the product of the sizes of
the variables after it. This is the layout used by CPT tables (own value
fastest, then parents from last-declared to first-declared) and by every
Factor, so restrict, multiply and sum_out can move between scopes by decoding
with one codec and encoding with another.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Sequence, Tuple

import numpy as np


def canonical(vars_: Iterable[str]) -> Tuple[str, ...]:
    """Return canonical (sorted) ordering of variables."""
    return tuple(sorted(vars_))


def strides(shape: Sequence[int]) -> Tuple[int, ...]:
    """Row-major strides of a mixed-radix shape (last axis has stride 1)."""
    out = [1] * len(shape)
    acc = 1
    for i in range(len(shape) - 1, -1, -1):
        out[i] = acc
        acc *= shape[i]
    return tuple(out)


@dataclass(frozen=True)
class IndexCodec:
    """
    Encoder/decoder for one ordered scope.

    Attributes:
        scope: Ordered variable names
        shape: Domain size of each scope variable, same order
    """
    scope: Tuple[str, ...]
    shape: Tuple[int, ...]

    def __post_init__(self):
        if len(self.scope) != len(self.shape):
            raise ValueError(
                f"IndexCodec scope/shape mismatch: {len(self.scope)} vars but {len(self.shape)} sizes"
            )
        if len(set(self.scope)) != len(self.scope):
            raise ValueError(f"IndexCodec scope has duplicates: {self.scope}")

    @property
    def size(self) -> int:
        return int(np.prod(self.shape, dtype=np.int64)) if self.shape else 1

    @property
    def strides(self) -> Tuple[int, ...]:
        return strides(self.shape)

    def axis_pos(self) -> Dict[str, int]:
        return {v: i for i, v in enumerate(self.scope)}

    def encode(self, coords: Sequence[int]) -> int:
        """Flat index of one coordinate tuple (one value index per scope variable)."""
        if not self.scope:
            return 0
        return int(np.ravel_multi_index(tuple(coords), self.shape))

    def decode(self, index: int) -> Tuple[int, ...]:
        """Coordinate tuple of one flat index."""
        if not self.scope:
            return ()
        return tuple(int(c) for c in np.unravel_index(index, self.shape))

    def decode_all(self) -> np.ndarray:
        """
        Coordinates of every flat index, as an int array of shape (len(scope), size).

        Row i holds the value index of scope[i] for each flat index 0..size-1.
        """
        if not self.scope:
            return np.zeros((0, 1), dtype=np.intp)
        return np.stack(np.unravel_index(np.arange(self.size), self.shape))

    def encode_all(self, coords: np.ndarray) -> np.ndarray:
        """Flat indices of a (len(scope), n) coordinate array."""
        if not self.scope:
            return np.zeros(coords.shape[1] if coords.ndim == 2 else 1, dtype=np.intp)
        return np.ravel_multi_index(tuple(coords), self.shape)

    def project(self, coords: np.ndarray, source_scope: Sequence[str]) -> np.ndarray:
        """
        Flat indices in this codec for coordinates laid out over source_scope.

        Every variable of self.scope must appear in source_scope; the rest are
        dropped.
        """
        pos = {v: i for i, v in enumerate(source_scope)}
        n = coords.shape[1]
        if not self.scope:
            return np.zeros(n, dtype=np.intp)
        rows = coords[[pos[v] for v in self.scope]]
        return np.ravel_multi_index(tuple(rows), self.shape)


def coords_of(assignment: Mapping[str, str], scope: Sequence[str], registry) -> Tuple[int, ...]:
    """
    Value indices of a label assignment over scope.

    Raises KeyError if the assignment omits a scope variable and ValueError
    if a label is outside its variable's domain.
    """
    return tuple(registry[v].index(assignment[v]) for v in scope)
