import logging

import pytest
import z3
from z3 import And, Implies, LShR, ULE, ULT

from powerset.bits import WORD_BITS
from powerset.solvers import (
    LEMMAS,
    popcount,
    prove_bit_lemmas,
    solver_timeout,
    try_prove,
)

logger = logging.getLogger(__name__)

WIDTHS = [1, 2, 8, 16, WORD_BITS]


@pytest.mark.timeout(60)
@pytest.mark.parametrize("width", WIDTHS)
@pytest.mark.parametrize("name", sorted(LEMMAS))
def test_lemma(name: str, width: int) -> None:
    solver = z3.Solver()
    valid, model = try_prove(solver, LEMMAS[name](width), timeout_ms=30000)
    assert valid is True, model


@pytest.mark.timeout(10)
def test_wrong_early_exit_is_disproved() -> None:
    width = 8
    s = z3.BitVec("s", width)
    p = z3.BitVec("p", width)
    one = z3.BitVecVal(1, width)
    # Off by one: s == 1 << p still has bit p set.
    formula = Implies(And(ULT(p, width), ULE(s, one << p)), LShR(s, p) == 0)
    valid, model = try_prove(z3.Solver(), formula, timeout_ms=5000)
    logger.debug(model)
    assert valid is False
    assert model is not None


@pytest.mark.timeout(10)
@pytest.mark.parametrize("value", [0, 1, 0b1011, 0xFF])
def test_popcount(value: int) -> None:
    x = z3.BitVecVal(value, 8)
    assert z3.simplify(popcount(x)).as_long() == bin(value).count("1")


def test_solver_timeout() -> None:
    solver = z3.Solver()
    with solver_timeout(solver, timeout_ms=123):
        assert solver.timeout_ms == 123
        with solver_timeout(solver, timeout_ms=456):
            assert solver.timeout_ms == 456
        assert solver.timeout_ms == 123


@pytest.mark.timeout(60)
def test_prove_bit_lemmas() -> None:
    results = prove_bit_lemmas(8)
    assert results == {name: True for name in LEMMAS}


@pytest.mark.timeout(120)
def test_prove_bit_lemmas_default_width() -> None:
    results = prove_bit_lemmas(timeout_ms=30000)
    assert results == {name: True for name in LEMMAS}


@pytest.mark.timeout(10)
def test_count_decrement_covers_every_cursor() -> None:
    width = 4
    formula = LEMMAS["count_decrement"](width)
    assert z3.is_and(formula)
    assert formula.num_args() == width


@pytest.mark.timeout(10)
def test_wrong_count_decrement_is_disproved() -> None:
    width = 8
    s = z3.BitVec("s", width)
    # Off by one: the bit that leaves the count is bit p, not bit p + 1.
    cases = [
        popcount(LShR(s, p))
        == z3.ZeroExt(width - 1, z3.Extract(p + 1, p + 1, s))
        + popcount(LShR(s, p + 1))
        for p in range(width - 1)
    ]
    valid, model = try_prove(z3.Solver(), And(*cases), timeout_ms=5000)
    logger.debug(model)
    assert valid is False
