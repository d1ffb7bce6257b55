import logging

import pytest

from powerset.bits import WORD_BITS, check_width, count_from, is_exhausted


def test_check_width() -> None:
    assert check_width(0) == 1
    assert check_width(4) == 16
    assert check_width(WORD_BITS) == 2**WORD_BITS
    assert check_width(8, width=8) == 256
    with pytest.raises(ValueError):
        check_width(WORD_BITS + 1)
    with pytest.raises(ValueError):
        check_width(9, width=8)
    with pytest.raises(ValueError):
        check_width(0, width=0)


def test_check_width_logs_rejection(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="powerset.bits"):
        with pytest.raises(ValueError):
            check_width(9, width=8)
    assert [r.levelno for r in caplog.records] == [logging.WARNING]
    assert "9 elements for width 8" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="powerset.bits"):
        check_width(8, width=8)
    assert not caplog.records


@pytest.mark.parametrize("mask", [0, 1, 0b1010, 0b1011_0001, 2**64 - 1])
def test_is_exhausted(mask: int) -> None:
    for pos in range(70):
        assert is_exhausted(mask, pos) == (mask >> pos == 0)


@pytest.mark.parametrize("mask", [0, 1, 0b1010, 0b1011_0001, 2**64 - 1])
def test_count_from(mask: int) -> None:
    for pos in range(70):
        expected = sum(1 for k in range(pos, 70) if mask >> k & 1)
        assert count_from(mask, pos) == expected
