from datetime import datetime, timezone

import pytest

from zodiac_wheel.core.exceptions import InvalidDateTimeError, InvalidTimezoneError
from zodiac_wheel.core.jd import julian_day_ut, local_to_utc, utc_iso
from zodiac_wheel.core.playback import advance_offset, instant_at


def test_iana_zone():
    dt = local_to_utc("2025-12-31T10:30:00", tz="Asia/Kolkata")
    assert utc_iso(dt) == "2025-12-31T05:00:00Z"


def test_fixed_offset():
    dt = local_to_utc("2025-06-01T08:00", utc_offset_hours=-4)
    assert utc_iso(dt) == "2025-06-01T12:00:00Z"


def test_explicit_z_wins():
    dt = local_to_utc("2025-06-01T08:00:00Z", tz="Asia/Kolkata")
    assert utc_iso(dt) == "2025-06-01T08:00:00Z"


def test_unknown_zone_raises():
    with pytest.raises(InvalidTimezoneError):
        local_to_utc("2025-06-01T08:00", tz="Mars/Olympus_Mons")


def test_offset_out_of_range():
    with pytest.raises(InvalidTimezoneError):
        local_to_utc("2025-06-01T08:00", utc_offset_hours=20)


def test_bad_datetime():
    with pytest.raises(InvalidDateTimeError):
        local_to_utc("yesterday-ish", tz="UTC")


def test_julian_day_j2000():
    assert julian_day_ut(datetime(2000, 1, 1, 12, tzinfo=timezone.utc)) == pytest.approx(2451545.0)


def test_advance_offset_steps_and_wraps():
    assert advance_offset(0, 6, 30) == 6
    assert advance_offset(720, 6, 30) == -720
    assert advance_offset(-720, -6, 30) == 720
    assert advance_offset(714, 6, 30) == 720


def test_instant_at():
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert utc_iso(instant_at(base, -36)) == "2024-12-30T12:00:00Z"
