"""
Tensor module: mixed-radix index codec with canonical ordering.
"""

from bnexact.tensor.codec import IndexCodec, canonical, strides, coords_of

__all__ = [
    "IndexCodec",
    "canonical",
    "strides",
    "coords_of",
]
