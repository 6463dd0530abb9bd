import math

import pytest

from zodiac_wheel.core.zodiac import (
    AYANAMSHA_PRESETS,
    ayanamsa_lahiri_approx_deg,
    format_deg_min,
    from_sidereal,
    nakshatra_of,
    norm360,
    resolve_ayanamsha,
    sign_of,
    to_dms,
    to_sidereal,
)


@pytest.mark.parametrize("lon", [-720.5, -360.0, -1e-17, -0.25, 0.0, 12.5, 359.999, 360.0, 725.0, 1e9])
def test_norm360_range_and_idempotent(lon):
    x = norm360(lon)
    assert 0.0 <= x < 360.0
    assert norm360(x) == x


def test_norm360_non_finite_is_zero():
    assert norm360(float("nan")) == 0.0
    assert norm360(float("inf")) == 0.0


@pytest.mark.parametrize("trop", [0.0, 5.0, 23.0, 180.0, 359.9])
@pytest.mark.parametrize("ayan", [0.0, 22.5, 24.1, 24.42])
def test_sidereal_round_trip(trop, ayan):
    sid = to_sidereal(trop, ayan)
    assert 0.0 <= sid < 360.0
    back = from_sidereal(sid, ayan)
    d = abs(back - trop) % 360.0
    assert min(d, 360.0 - d) < 1e-9


def test_sidereal_wraps_below_zero():
    assert to_sidereal(10.0, 24.1) == pytest.approx(345.9)


def test_sign_of_floors_degree_and_minute():
    z = sign_of(45.999)
    assert z["signIndex"] == 1
    assert z["sign"] == "Taurus"
    assert z["signGlyph"] == "वृषभ"
    assert z["deg"] == 15
    assert z["min"] == 59


def test_sign_of_negative_longitude():
    z = sign_of(-15.0)
    assert z["sign"] == "Pisces"
    assert z["deg"] == 15
    assert z["raw"] == pytest.approx(345.0)


def test_nakshatra_start_of_zodiac():
    nk = nakshatra_of(0.0)
    assert nk["index"] == 0
    assert nk["name"] == "Ashwini"
    assert nk["pada"] == 1


def test_nakshatra_end_of_zodiac():
    nk = nakshatra_of(359.99)
    assert nk["index"] == 26
    assert nk["name"] == "Revati"
    assert nk["pada"] == 4


def test_nakshatra_pada_boundaries():
    size = 360.0 / 27.0
    assert nakshatra_of(size)["index"] == 1
    assert nakshatra_of(size)["pada"] == 1
    assert nakshatra_of(size + size / 4 * 2 + 0.01)["pada"] == 3


def test_to_dms_carries_rounded_seconds():
    assert to_dms(29.999999) == {"deg": 30, "min": 0, "sec": 0}
    assert to_dms(359.9999999) == {"deg": 0, "min": 0, "sec": 0}


def test_format_deg_min_pads_minutes():
    assert format_deg_min(7, 5) == "7°05′"


def test_resolve_ayanamsha_presets_and_numbers():
    assert resolve_ayanamsha("lahiri") == AYANAMSHA_PRESETS["LAHIRI"]
    assert resolve_ayanamsha("Fagan/Bradley") == 24.42
    assert resolve_ayanamsha("23.5") == 23.5
    assert resolve_ayanamsha(22) == 22.0
    with pytest.raises(ValueError):
        resolve_ayanamsha("nope")


@pytest.mark.parametrize("value", ["nan", "inf", "-Infinity", float("nan"), float("inf")])
def test_resolve_ayanamsha_rejects_non_finite(value):
    with pytest.raises(ValueError):
        resolve_ayanamsha(value)


def test_lahiri_date_preset():
    assert ayanamsa_lahiri_approx_deg(2451545.0) == pytest.approx(23.85675)
    # ~25 years later, ~0.35° more
    later = resolve_ayanamsha("LAHIRI_DATE", 2451545.0 + 25 * 365.25)
    assert later == pytest.approx(23.85675 + 25 * 50.290966 / 3600.0)
    assert math.isclose(later, 24.2060, abs_tol=1e-3)
    with pytest.raises(ValueError):
        resolve_ayanamsha("LAHIRI_DATE")
