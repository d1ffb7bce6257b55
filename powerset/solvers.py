"""
# Proving the bit arithmetic of subset enumeration with Z3.

Subset views rely on two numeric facts about a mask `s` and a cursor `p`:

- Early exit: if `(1 << p) > s` then no bit of `s` at or above `p` is set, so
  a scan may stop without visiting the remaining positions.
- Exact counting: the number of elements left to yield is
  `popcount(s >> p)`, which drops by exactly the bit at `p` when the cursor
  advances, and is zero iff nothing is left.

Python ints are unbounded, so these are checked here over fixed-width
bit-vectors, matching the counter width the enumerator enforces.
"""

import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager

import z3
from z3 import And, Implies, LShR, Not, ULT

from .bits import WORD_BITS
from .metrics import COUNTERS

logger = logging.getLogger(__name__)
counter = COUNTERS[__name__]

# https://microsoft.github.io/z3guide/programming/Parameters/#global-parameters
DEFAULT_TIMEOUT_MS = 4294967295


@contextmanager
def solver_timeout(
    solver: z3.Solver, *, timeout_ms: int
) -> Generator[None, None, None]:
    """Context manager to temporarily set a timeout on a Z3 solver."""
    old_timeout_ms = getattr(solver, "timeout_ms", DEFAULT_TIMEOUT_MS)
    solver.set(timeout=timeout_ms)
    solver.timeout_ms = timeout_ms
    try:
        yield
    finally:
        solver.set(timeout=old_timeout_ms)
        solver.timeout_ms = old_timeout_ms


def try_prove(
    solver: z3.Solver, formula: z3.ExprRef, *, timeout_ms: int = 1000
) -> tuple[bool | None, str | None]:
    """
    Try to prove a quantifier-free formula over bit-vector constants, such as
    a lemma about a mask `s` and cursor `p`, holds for every assignment.

    The solver is left unchanged: the negated formula is checked in a pushed
    scope under a temporary timeout.

    Returns:
        Tuple of:
        - True if formula proved valid
        - False if formula proved invalid
        - None if the solver gave up
        And the counterexample assignment of `s` and `p` (if formula is invalid)
    """
    counter["try_prove"] += 1
    with solver, solver_timeout(solver, timeout_ms=timeout_ms):
        solver.add(Not(formula))
        result = solver.check()
        if result == z3.unsat:
            return True, None
        if result == z3.sat:
            model = solver.model()
            assert model is not None, "Got sat result but no model!"
            model_str = "\n".join(f"{d} = {model[d]}" for d in model.decls())
            return False, model_str
        if result == z3.unknown:
            return None, None
        raise ValueError(f"Z3 returned unexpected result: {result}")


def popcount(x: z3.BitVecRef) -> z3.BitVecRef:
    """Number of set bits of a bit-vector, as a bit-vector of the same width."""
    width = x.size()
    bits = [z3.ZeroExt(width - 1, z3.Extract(i, i, x)) for i in range(width)]
    return z3.Sum(*bits)


def mask_and_cursor(width: int) -> tuple[z3.BitVecRef, z3.BitVecRef]:
    s = z3.BitVec("s", width)
    p = z3.BitVec("p", width)
    return s, p


def early_exit(width: int) -> z3.ExprRef:
    """`(1 << p) > s` implies `s >> p == 0`."""
    s, p = mask_and_cursor(width)
    one = z3.BitVecVal(1, width)
    return Implies(And(ULT(p, width), ULT(s, one << p)), LShR(s, p) == 0)


def count_decrement(width: int) -> z3.ExprRef:
    """
    `popcount(s >> p) == bit(s, p) + popcount(s >> (p + 1))`, stated once per
    cursor position `p < width`.

    With constant shifts both sides simplify to sums of the same bits of `s`,
    whereas a symbolic shift under two popcounts times out at 64 bits.
    """
    s = z3.BitVec("s", width)
    cases = []
    for p in range(width):
        bit = z3.ZeroExt(width - 1, z3.Extract(p, p, s))
        cases.append(popcount(LShR(s, p)) == bit + popcount(LShR(s, p + 1)))
    return And(*cases)


def count_zero(width: int) -> z3.ExprRef:
    """`popcount(s >> p) == 0` iff `s >> p == 0`."""
    s, p = mask_and_cursor(width)
    rest = LShR(s, p)
    return Implies(ULT(p, width), (popcount(rest) == 0) == (rest == 0))


LEMMAS: dict[str, Callable[[int], z3.ExprRef]] = {
    "early_exit": early_exit,
    "count_decrement": count_decrement,
    "count_zero": count_zero,
}


def prove_bit_lemmas(
    width: int = WORD_BITS, *, timeout_ms: int = 10000
) -> dict[str, bool | None]:
    """Try to prove each lemma at a given counter width."""
    solver = z3.Solver()
    results: dict[str, bool | None] = {}
    for name, lemma in LEMMAS.items():
        valid, model = try_prove(solver, lemma(width), timeout_ms=timeout_ms)
        if valid is True:
            logger.info(f"Proved {name} at width {width}")
        elif valid is False:
            logger.error(f"Disproved {name} at width {width}:\n{model}")
        else:
            logger.warning(f"Timed out proving {name} at width {width}")
        results[name] = valid
    return results
