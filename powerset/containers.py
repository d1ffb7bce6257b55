"""
# Containers that can be enumerated.

A source is anything that reports how many elements it holds and can be read
by position. Built-in sequences qualify through `len()` and indexing; other
types may instead implement the `SizableContainer` protocol, whose
`num_elements()` should return the greatest valid index plus one.

Sources are borrowed, never copied. Mutating a source while an iterator over
it is alive is a caller error with undefined results.
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class SizableContainer(Protocol[T_co]):
    """A finite container with positional read access."""

    def num_elements(self) -> int:
        """Number of elements, i.e. one past the greatest valid index."""
        ...

    def __getitem__(self, index: int) -> T_co: ...


Source = SizableContainer[T] | Sequence[T]


def num_elements(source: Source) -> int:
    """Return the element count of a source."""
    if isinstance(source, SizableContainer):
        n = source.num_elements()
    else:
        n = len(source)
    if n < 0:
        raise ValueError(f"source reports a negative element count: {n}")
    return n
