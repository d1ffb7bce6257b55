"""
# Bit arithmetic on subset masks.

A subset of an n-element source is identified by a mask in `[0, 2^n)`, where
bit k set means the element at position k belongs to the subset. Masks are
plain Python ints, but the enumeration is limited to a fixed counter width so
that it agrees with a fixed-width unsigned implementation; see
`powerset.solvers` for machine-checked proofs of the facts used here.
"""

import logging

logger = logging.getLogger(__name__)

# Default width of the subset counter, in bits.
WORD_BITS = 64


def check_width(n: int, width: int = WORD_BITS) -> int:
    """
    Return the number of subsets `2^n` of an n-element source, or raise
    `ValueError` if n elements cannot be addressed by a `width`-bit counter.
    """
    if width <= 0:
        raise ValueError(f"counter width must be positive, got {width}")
    if n > width:
        logger.warning(f"Rejecting source of {n} elements for width {width}")
        raise ValueError(
            f"cannot enumerate subsets of {n} elements with a {width}-bit counter"
        )
    return 1 << n


def is_exhausted(mask: int, pos: int) -> bool:
    """Whether no bit of `mask` at or above `pos` is set."""
    return (1 << pos) > mask


def count_from(mask: int, pos: int) -> int:
    """Number of set bits of `mask` at positions `>= pos`."""
    return (mask >> pos).bit_count()
