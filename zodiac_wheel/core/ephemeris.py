# zodiac_wheel/core/ephemeris.py
"""
Skyfield-backed ephemeris: the only place that talks to the JPL kernel.

Everything returned here is TROPICAL (ecliptic of date), geocentric.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import numpy as np
from skyfield.api import Loader
from skyfield.framelib import ecliptic_frame

from zodiac_wheel.core.exceptions import EphemerisError
from zodiac_wheel.core.settings import get_settings

log = logging.getLogger(__name__)

# Mean obliquity at J2000 (deg), used when the true value is unavailable
J2000_OBLIQUITY_DEG = 23.4392911

# (display name, kernel key, optional = outer planet)
PLANETS = [
    ("Sun", "sun", False),
    ("Moon", "moon", False),
    ("Mercury", "mercury", False),
    ("Venus", "venus", False),
    ("Mars", "mars barycenter", False),
    ("Jupiter", "jupiter barycenter", False),
    ("Saturn", "saturn barycenter", False),
    ("Uranus", "uranus barycenter", True),
    ("Neptune", "neptune barycenter", True),
    ("Pluto", "pluto barycenter", True),
]

# +/- 1 minute for the longitude speed finite difference
SPEED_STEP_DAYS = 1.0 / 1440.0


@dataclass
class BodyPosition:
    name: str
    lon: float          # ecliptic longitude (0-360), tropical of date
    lat: float = 0.0    # ecliptic latitude
    dist_au: float = 0.0
    speed_lon: float = 0.0  # deg/day (approx)
    optional: bool = False
    is_node: bool = False

    @property
    def retrograde(self) -> bool:
        return self.is_node or self.speed_lon < 0


def _wrap360(x: float) -> float:
    x = float(x) % 360.0
    return 0.0 if x >= 360.0 else x


def _signed_delta(d: float) -> float:
    if d > 180:
        d -= 360
    if d < -180:
        d += 360
    return d


class SkyfieldEphemeris:
    """
    Loads the timescale + kernel lazily (once) and answers the questions the
    chart pipeline asks: positions, sidereal time, obliquity, true node.
    """

    def __init__(self, ephemeris_file: Optional[str] = None, data_dir: Optional[str] = None):
        settings = get_settings()
        self.ephemeris_file = ephemeris_file or settings.ephemeris_file
        self.data_dir = data_dir or settings.data_dir
        self._ts = None
        self._eph = None

    def _ensure_loaded(self):
        if self._ts is not None and self._eph is not None:
            return
        try:
            load = Loader(self.data_dir, verbose=False)
            if self._ts is None:
                self._ts = load.timescale()
            if self._eph is None:
                log.info("loading ephemeris kernel %s from %s", self.ephemeris_file, self.data_dir)
                self._eph = load(self.ephemeris_file)
        except Exception as e:
            raise EphemerisError(f"cannot load ephemeris {self.ephemeris_file}: {e}") from e

    def _time(self, instant: datetime):
        self._ensure_loaded()
        if instant.tzinfo is None:
            raise ValueError("instant must be timezone-aware (UTC)")
        return self._ts.from_datetime(instant)

    def _ecliptic_lon(self, observer, body, t) -> float:
        ecl = observer.at(t).observe(body).apparent().frame_latlon(ecliptic_frame)
        return _wrap360(ecl[1].degrees)

    # ---------------------------------------------------------
    # Planet positions tropical with speed
    # ---------------------------------------------------------
    def positions(self, instant: datetime) -> List[BodyPosition]:
        """
        Ecliptic longitude/latitude for planets as seen from geocenter,
        and approx speed in deg/day for longitude (finite difference).
        """
        t = self._time(instant)
        t_plus = self._ts.tt_jd(t.tt + SPEED_STEP_DAYS)
        t_minus = self._ts.tt_jd(t.tt - SPEED_STEP_DAYS)

        earth = self._eph["earth"]
        results = []

        for disp, key, optional in PLANETS:
            body = self._eph[key]
            astrometric = earth.at(t).observe(body).apparent()

            lat_e, lon_e, dist = astrometric.frame_latlon(ecliptic_frame)
            lon = _wrap360(lon_e.degrees)

            lon_p = self._ecliptic_lon(earth, body, t_plus)
            lon_m = self._ecliptic_lon(earth, body, t_minus)
            speed_lon = (_signed_delta(lon_p - lon_m) / 2.0) / SPEED_STEP_DAYS

            results.append(
                BodyPosition(
                    name=disp,
                    lon=lon,
                    lat=float(lat_e.degrees),
                    dist_au=float(dist.au),
                    speed_lon=float(speed_lon),
                    optional=optional,
                )
            )

        return results

    def sidereal_time_hours(self, instant: datetime) -> float:
        """Greenwich apparent sidereal time (hours)"""
        return float(self._time(instant).gast) % 24.0

    def obliquity_deg(self, instant: datetime) -> float:
        """
        True obliquity of date = mean obliquity + nutation Δε.
        Falls back to the J2000 mean value.
        """
        try:
            t = self._time(instant)
            _, d_eps = t._nutation_angles_radians
            eps = math.degrees(float(t._mean_obliquity_radians) + float(d_eps))
            if not math.isfinite(eps):
                raise ValueError(f"non-finite obliquity {eps}")
            return eps
        except EphemerisError:
            raise
        except Exception as e:
            log.warning("true obliquity unavailable (%s); using J2000 %.7f", e, J2000_OBLIQUITY_DEG)
            return J2000_OBLIQUITY_DEG

    def true_node_deg(self, instant: datetime) -> Optional[float]:
        """
        Osculating ascending node of the Moon (tropical):
        h = r x v in the ecliptic frame, node direction = z x h.
        None when the geometry is degenerate.
        """
        t = self._time(instant)
        moon = self._eph["earth"].at(t).observe(self._eph["moon"])
        pos, vel = moon.frame_xyz_and_velocity(ecliptic_frame)

        h = np.cross(pos.au, vel.au_per_d)
        node = np.cross(np.array([0.0, 0.0, 1.0]), h)
        if not np.all(np.isfinite(node)) or math.hypot(node[0], node[1]) < 1e-18:
            return None
        return _wrap360(math.degrees(math.atan2(node[1], node[0])))


# process-wide instance (loads once)
_DEFAULT: Optional[SkyfieldEphemeris] = None


def get_ephemeris() -> SkyfieldEphemeris:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = SkyfieldEphemeris()
    return _DEFAULT
