"""
# Lazy enumeration of the powerset of a sequence.

`powerset(source)` walks the masks `0, 1, ..., 2^n - 1` in increasing order,
producing one `Subset` view per mask. A view yields the source elements whose
position bit is set, from low to high position, without building a
collection. Example:
```
for subset in powerset([1, 2, 3]):
    print(subset.size_hint(), list(subset))
```
prints `(0, 0) []`, `(1, 1) [1]`, `(1, 1) [2]`, `(2, 2) [1, 2]`, and so on up
to `(3, 3) [1, 2, 3]`.

Both iterators are single pass. Call `powerset()` again for a fresh pass.
"""

import logging
import sys
from collections.abc import Iterator
from typing import Generic, TypeVar

from .bits import WORD_BITS, check_width, count_from, is_exhausted
from .containers import Source, num_elements
from .metrics import COUNTERS

logger = logging.getLogger(__name__)
counter = COUNTERS[__name__]

T = TypeVar("T")


class Subset(Generic[T]):
    """Iterator over the elements of one subset, in order of position."""

    __slots__ = ("_source", "_mask", "_pos")

    def __init__(self, source: Source[T], mask: int) -> None:
        assert mask >= 0
        self._source = source
        self._mask = mask
        self._pos = 0

    @property
    def mask(self) -> int:
        """Bitmask of the positions in this subset."""
        return self._mask

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        mask = self._mask
        pos = self._pos
        # Once 1 << pos exceeds the mask, no higher bit can be set.
        while not is_exhausted(mask, pos):
            pos += 1
            if mask >> (pos - 1) & 1:
                self._pos = pos
                return self._source[pos - 1]
        self._pos = pos
        raise StopIteration

    def size_hint(self) -> tuple[int, int]:
        """Exact lower and upper bounds on the number of remaining elements."""
        remaining = count_from(self._mask, self._pos)
        return remaining, remaining

    def __length_hint__(self) -> int:
        return count_from(self._mask, self._pos)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mask={self._mask:#b}, pos={self._pos})"


class PowersetIterator(Generic[T]):
    """Iterator over all subsets of a source, in increasing order of mask."""

    __slots__ = ("_source", "_next", "_stop")

    def __init__(self, source: Source[T], *, width: int = WORD_BITS) -> None:
        n = num_elements(source)
        self._source = source
        self._next = 0
        self._stop = check_width(n, width)
        logger.debug(f"Enumerating {self._stop} subsets of {n} elements")

    def __iter__(self) -> Iterator[Subset[T]]:
        return self

    def __next__(self) -> Subset[T]:
        mask = self._next
        if mask >= self._stop:
            raise StopIteration
        counter["powerset.next"] += 1
        self._next = mask + 1
        return Subset(self._source, mask)

    def __length_hint__(self) -> int:
        # operator.length_hint() requires a Py_ssize_t.
        return min(self._stop - self._next, sys.maxsize)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(next={self._next}, stop={self._stop})"


def powerset(source: Source[T], *, width: int = WORD_BITS) -> PowersetIterator[T]:
    """
    Enumerate all subsets of `source` lazily.

    Args:
        source: A sequence, or any `SizableContainer`. It is borrowed, not
            copied, and must not be mutated during enumeration.
        width: Width of the subset counter in bits. Sources with more
            elements are rejected.

    Returns:
        An iterator over `2^n` `Subset` views, starting with the empty subset
        and ending with the full source.

    Raises:
        ValueError: If the source has more than `width` elements.
    """
    counter["powerset"] += 1
    return PowersetIterator(source, width=width)


class PowersetMixin:
    """Mixin adding a `.powerset()` method to a `SizableContainer`."""

    def powerset(self, *, width: int = WORD_BITS) -> PowersetIterator:
        return powerset(self, width=width)  # type: ignore[arg-type]
