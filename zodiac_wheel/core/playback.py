# zodiac_wheel/core/playback.py
"""Time scroller: an hour offset from a base instant, bounded by ±range."""
from datetime import datetime, timedelta


def advance_offset(offset_hours: float, step_hours: float, range_days: float) -> float:
    """
    One tick. Running past either end jumps to the opposite end
    (so a negative step also loops).
    """
    limit = float(range_days) * 24.0
    nxt = float(offset_hours) + float(step_hours)
    if nxt > limit:
        return -limit
    if nxt < -limit:
        return limit
    return nxt


def instant_at(base_utc: datetime, offset_hours: float) -> datetime:
    return base_utc + timedelta(hours=float(offset_hours))
