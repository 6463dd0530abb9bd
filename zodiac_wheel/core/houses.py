# zodiac_wheel/core/houses.py
from typing import List

from zodiac_wheel.core.zodiac import norm360

HOUSE_WHOLE_SIGN = "whole_sign"
HOUSE_EQUAL = "equal"
HOUSE_SYSTEMS = (HOUSE_WHOLE_SIGN, HOUSE_EQUAL)


def equal_house_cusps(asc_deg: float) -> List[float]:
    # 12 cusps (equal houses): 1st = asc, then +30°
    return [norm360(asc_deg + i * 30.0) for i in range(12)]


def whole_sign_cusps(asc_deg: float) -> List[float]:
    # 1st house = whole sign holding the asc
    start = (norm360(asc_deg) // 30.0) * 30.0
    return [norm360(start + i * 30.0) for i in range(12)]


def house_cusps(asc_deg: float, system: str = HOUSE_WHOLE_SIGN) -> List[float]:
    if system == HOUSE_EQUAL:
        return equal_house_cusps(asc_deg)
    if system == HOUSE_WHOLE_SIGN:
        return whole_sign_cusps(asc_deg)
    raise ValueError(f"unknown house system: {system!r}")


def house_of(lon: float, cusps: List[float]) -> int:
    """1-based house holding lon for 12 ascending (wrapping) cusps"""
    lon = norm360(lon)
    for i in range(12):
        start = cusps[i]
        span = norm360(cusps[(i + 1) % 12] - start) or 30.0
        if norm360(lon - start) < span:
            return i + 1
    return 12
