import pytest

from zodiac_wheel.core.houses import equal_house_cusps, house_cusps, house_of, whole_sign_cusps


def test_whole_sign_starts_at_sign_of_ascendant():
    cusps = whole_sign_cusps(335.9)
    assert cusps[0] == 330.0
    assert cusps[1] == 0.0
    assert len(cusps) == 12


def test_equal_houses_from_ascendant():
    cusps = equal_house_cusps(335.9)
    assert cusps[0] == pytest.approx(335.9)
    assert cusps[1] == pytest.approx(5.9)


def test_house_of_wraps_through_aries():
    cusps = whole_sign_cusps(335.9)
    assert house_of(331.0, cusps) == 1
    assert house_of(10.0, cusps) == 2
    assert house_of(329.0, cusps) == 12


def test_unknown_system():
    with pytest.raises(ValueError):
        house_cusps(0.0, "placidus")
