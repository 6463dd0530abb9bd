from __future__ import annotations
from datetime import datetime, timezone, timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from zodiac_wheel.core.exceptions import InvalidDateTimeError, InvalidTimezoneError

UNIX_EPOCH_JD = 2440587.5


def parse_local(datetime_local: str) -> datetime:
    """
    "2025-12-31T10:30" or "2025-12-31T10:30:00" (naive, local wall clock).
    An explicit offset/Z in the string wins over tz/utc_offset_hours.
    """
    s = str(datetime_local or "").strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError as e:
        raise InvalidDateTimeError(f"bad datetime {datetime_local!r}: {e}") from e


def resolve_tzinfo(tz: Optional[str] = None, utc_offset_hours: Optional[float] = None):
    if tz:
        try:
            return ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidTimezoneError(f"Unknown timezone: {tz}") from e
    if utc_offset_hours is not None:
        if not -14.0 <= float(utc_offset_hours) <= 14.0:
            raise InvalidTimezoneError(f"UTC offset out of range: {utc_offset_hours}")
        return timezone(timedelta(hours=float(utc_offset_hours)))
    return timezone.utc


def local_to_utc(datetime_local: str, tz: Optional[str] = None, utc_offset_hours: Optional[float] = None) -> datetime:
    """
    Input:  datetime_local like "2025-12-31T10:30:00"
            tz like "Asia/Kolkata"  OR  utc_offset_hours like 5.5
    Output: aware datetime in UTC
    """
    dt_local = parse_local(datetime_local)
    if dt_local.tzinfo is None:
        dt_local = dt_local.replace(tzinfo=resolve_tzinfo(tz, utc_offset_hours))
    return dt_local.astimezone(timezone.utc)


def utc_iso(dt: datetime) -> str:
    """ISO with Z"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def julian_day_ut(dt: datetime) -> float:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp() / 86400.0 + UNIX_EPOCH_JD
