# zodiac_wheel/core/ascendant.py
"""
Ascendant (rising ecliptic point) via pure math.

CONVENTIONS
-----------
• Longitude: +East, -West
• θ = local apparent sidereal time as an angle (GAST * 15 + east longitude)
• Ecliptic latitude of the candidate point is always 0
• Returns TROPICAL longitudes; ayanamsha is applied by the caller

Two strategies:
1) "bisection" (default): scan the ecliptic for horizon crossings
   (altitude sign changes), bisect each bracket, keep the crossing whose
   azimuth is nearest due east (90°).
2) "closed_form": λ = atan2(cosθ, -(sinθ·cosε + tanφ·sinε)).
   Fast, no guarantee about the branch near the poles.

No crossing -> AscendantResult.longitude is None (undefined), never 0.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

DEG2RAD = math.pi / 180.0
RAD2DEG = 180.0 / math.pi

LAT_LIMIT = 89.9999
SCAN_STEP_DEG = 5.0
BISECT_ITERATIONS = 30
COS_ALT_EPS = 1e-12

METHOD_BISECTION = "bisection"
METHOD_CLOSED_FORM = "closed_form"
METHODS = (METHOD_BISECTION, METHOD_CLOSED_FORM)


# ----------------- helpers -----------------

def _wrap360(x: float) -> float:
    x = float(x) % 360.0
    return 0.0 if x >= 360.0 else x


def _wrap_pi(x: float) -> float:
    """Normalize radians into (-π, π]"""
    h = (x + math.pi) % (2 * math.pi) - math.pi
    if h <= -math.pi:
        h += 2 * math.pi
    return h


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def clamp_latitude(lat_deg: float) -> float:
    return _clamp(float(lat_deg), -LAT_LIMIT, LAT_LIMIT)


def local_sidereal_deg(gast_hours: float, lon_deg_east: float) -> float:
    """Local sidereal angle θ (degrees) from Greenwich sidereal time in hours"""
    return _wrap360(float(gast_hours) * 15.0 + float(lon_deg_east))


def azimuth_distance(az_deg: float, target_deg: float = 90.0) -> float:
    """Circular distance between two azimuths (0..180)"""
    d = abs(_wrap360(az_deg) - _wrap360(target_deg))
    return min(d, 360.0 - d)


# ----------------- coordinate transforms -----------------

def ecl_to_equ(lam: float, eps: float) -> Tuple[float, float]:
    """Ecliptic (β=0) → Equatorial (radians)"""
    ra = math.atan2(math.sin(lam) * math.cos(eps), math.cos(lam))
    dec = math.asin(_clamp(math.sin(lam) * math.sin(eps), -1.0, 1.0))
    return ra, dec


def alt_az(lam_deg: float, theta_deg: float, eps_deg: float, lat_deg: float) -> Tuple[float, float]:
    """
    Horizontal coordinates of ecliptic longitude lam_deg for an observer at
    lat_deg when the local sidereal angle is theta_deg.

    Returns (altitude deg, azimuth deg in [0, 360), north = 0, east = 90).
    """
    lam = lam_deg * DEG2RAD
    theta = theta_deg * DEG2RAD
    eps = eps_deg * DEG2RAD
    phi = clamp_latitude(lat_deg) * DEG2RAD

    ra, dec = ecl_to_equ(lam, eps)
    h = _wrap_pi(theta - ra)

    sin_alt = math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(h)
    sin_alt = _clamp(sin_alt, -1.0, 1.0)
    alt = math.asin(sin_alt)

    cos_alt = max(math.cos(alt), COS_ALT_EPS)
    sin_az = -math.sin(h) * math.cos(dec) / cos_alt
    cos_az = (math.sin(dec) - sin_alt * math.sin(phi)) / (cos_alt * math.cos(phi))
    az = math.atan2(sin_az, cos_az)

    return alt * RAD2DEG, _wrap360(az * RAD2DEG)


# ----------------- result -----------------

@dataclass
class Crossing:
    longitude: float
    azimuth: float


@dataclass
class AscendantResult:
    longitude: Optional[float]
    azimuth: Optional[float]
    method: str
    crossings: List[Crossing] = field(default_factory=list)

    @property
    def defined(self) -> bool:
        return self.longitude is not None

    def to_dict(self) -> Dict:
        return {
            "defined": self.defined,
            "longitude": self.longitude,
            "azimuth": self.azimuth,
            "method": self.method,
            "crossings": [{"longitude": c.longitude, "azimuth": c.azimuth} for c in self.crossings],
        }


# ----------------- solvers -----------------

def _bisect(lo: float, hi: float, f_lo: float, theta: float, eps: float, lat: float) -> float:
    for _ in range(BISECT_ITERATIONS):
        mid = 0.5 * (lo + hi)
        f_mid, _ = alt_az(mid, theta, eps, lat)
        if f_lo * f_mid <= 0.0:
            hi = mid
        else:
            lo, f_lo = mid, f_mid
    return 0.5 * (lo + hi)


def find_horizon_crossings(theta_deg: float, eps_deg: float, lat_deg: float) -> List[Crossing]:
    """
    All points where the ecliptic meets the horizon, in increasing longitude.
    The last bracket wraps from 355° back to 360° (= 0°).
    """
    n = int(round(360.0 / SCAN_STEP_DEG))
    alts = [alt_az(k * SCAN_STEP_DEG, theta_deg, eps_deg, lat_deg)[0] for k in range(n)]

    out: List[Crossing] = []
    for k in range(n):
        a = k * SCAN_STEP_DEG
        b = a + SCAN_STEP_DEG
        alt_a = alts[k]
        alt_b = alts[(k + 1) % n]

        if alt_a == 0.0:
            lam = a
        elif alt_a * alt_b < 0.0:
            lam = _bisect(a, b, alt_a, theta_deg, eps_deg, lat_deg)
        else:
            continue

        lam = _wrap360(lam)
        _, az = alt_az(lam, theta_deg, eps_deg, lat_deg)
        out.append(Crossing(longitude=lam, azimuth=az))

    return out


def solve_ascendant_bisection(theta_deg: float, eps_deg: float, lat_deg: float) -> AscendantResult:
    crossings = find_horizon_crossings(theta_deg, eps_deg, lat_deg)
    if not crossings:
        return AscendantResult(longitude=None, azimuth=None, method=METHOD_BISECTION)

    # min() keeps the first of equal candidates (lowest longitude)
    best = min(crossings, key=lambda c: azimuth_distance(c.azimuth, 90.0))
    return AscendantResult(
        longitude=best.longitude,
        azimuth=best.azimuth,
        method=METHOD_BISECTION,
        crossings=crossings,
    )


def solve_ascendant_closed_form(theta_deg: float, eps_deg: float, lat_deg: float) -> AscendantResult:
    theta = theta_deg * DEG2RAD
    eps = eps_deg * DEG2RAD
    phi = clamp_latitude(lat_deg) * DEG2RAD

    y = math.cos(theta)
    x = -(math.sin(theta) * math.cos(eps) + math.tan(phi) * math.sin(eps))
    lam = math.atan2(y, x) * RAD2DEG
    if not math.isfinite(lam):
        return AscendantResult(longitude=None, azimuth=None, method=METHOD_CLOSED_FORM)

    lam = _wrap360(lam)
    _, az = alt_az(lam, theta_deg, eps_deg, lat_deg)
    return AscendantResult(longitude=lam, azimuth=az, method=METHOD_CLOSED_FORM)


def ascendant(theta_deg: float, eps_deg: float, lat_deg: float, method: str = METHOD_BISECTION) -> AscendantResult:
    """
    Rising ecliptic longitude (tropical) for local sidereal angle theta_deg,
    obliquity eps_deg and latitude lat_deg.
    """
    values = (float(theta_deg), float(eps_deg), float(lat_deg))
    if not all(math.isfinite(v) for v in values):
        return AscendantResult(longitude=None, azimuth=None, method=method)

    if method == METHOD_CLOSED_FORM:
        return solve_ascendant_closed_form(*values)
    if method == METHOD_BISECTION:
        return solve_ascendant_bisection(*values)
    raise ValueError(f"unknown ascendant method: {method!r}")
