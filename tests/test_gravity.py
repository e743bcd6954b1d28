import pytest

from tetris_core.utils import BASE_GRAVITY_MS, gravity_interval_ms, gravity_ticks


def test_gravity_speed_increases_with_level():
    assert gravity_interval_ms(0) == BASE_GRAVITY_MS
    assert gravity_interval_ms(1) < gravity_interval_ms(0)
    assert gravity_interval_ms(4) == pytest.approx(BASE_GRAVITY_MS / 5)


def test_negative_level_rejected():
    with pytest.raises(ValueError):
        gravity_interval_ms(-1)


def test_gravity_ticks_carry_remainder():
    ticks, remainder = gravity_ticks(1200.0, 0)
    assert ticks == 2
    assert remainder == pytest.approx(200.0)
    ticks, remainder = gravity_ticks(remainder, 1)
    assert ticks == 0
    assert remainder == pytest.approx(200.0)
