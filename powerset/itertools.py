from collections.abc import Hashable, Iterable, Iterator
from typing import TypeVar

import numpy as np

from .bits import WORD_BITS, check_width
from .enumeration import powerset

_T = TypeVar("_T", bound=Hashable)

# Widest source whose mask range fits np.arange over int64.
DENSE_BITS = 62


def iter_subsets(set_: Iterable[_T]) -> Iterator[set[_T]]:
    """Iterate over all subsets of a set, in order of increasing mask."""
    list_ = list(set_)
    for subset in powerset(list_):
        yield set(subset)


def indicator_matrix(n: int, *, width: int = WORD_BITS) -> np.ndarray:
    """
    Dense boolean matrix of shape `(2^n, n)` whose row `s` marks the positions
    belonging to the `s`-th enumerated subset.

    Unlike `powerset()` this allocates every subset at once, `2^n * n` bytes,
    so it is only practical for small n. Sources wider than `DENSE_BITS` are
    rejected even if `width` allows them.
    """
    num_subsets = check_width(n, width)
    if n > DENSE_BITS:
        raise ValueError(f"dense matrix of {n} columns would overflow int64 masks")
    masks = np.arange(num_subsets, dtype=np.int64)
    positions = np.arange(n, dtype=np.int64)
    return ((masks[:, None] >> positions[None, :]) & 1).astype(bool)


def subset_sizes(n: int, *, width: int = WORD_BITS) -> np.ndarray:
    """Cardinalities of the `2^n` enumerated subsets, in enumeration order."""
    return indicator_matrix(n, width=width).sum(axis=1, dtype=np.int64)
