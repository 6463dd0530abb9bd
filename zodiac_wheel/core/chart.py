# zodiac_wheel/core/chart.py
"""
One render = one pipeline run:
ephemeris -> nodes -> ayanamsha -> ascendant/houses -> sign/nakshatra
-> aspects/drishti -> label bumps.

Nothing here keeps state between calls; the ephemeris is passed in.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from zodiac_wheel.core.ascendant import METHOD_BISECTION, AscendantResult, ascendant, local_sidereal_deg
from zodiac_wheel.core.aspects import DEFAULT_ENABLED_ASPECTS, DEFAULT_ORB, Aspect, Drishti, find_aspects, find_drishti
from zodiac_wheel.core.ephemeris import BodyPosition
from zodiac_wheel.core.exceptions import InvalidCoordinatesError
from zodiac_wheel.core.houses import HOUSE_WHOLE_SIGN, house_cusps, house_of
from zodiac_wheel.core.jd import julian_day_ut, utc_iso
from zodiac_wheel.core.labels import DEFAULT_THRESHOLD_DEG, label_levels
from zodiac_wheel.core.nodes import lunar_nodes
from zodiac_wheel.core.zodiac import nakshatra_of, norm360, sign_of, to_sidereal

log = logging.getLogger(__name__)

SCRIPT_LATIN = "latin"
SCRIPT_DEVANAGARI = "devanagari"
LABEL_SCRIPTS = (SCRIPT_LATIN, SCRIPT_DEVANAGARI)


@dataclass
class Observer:
    lat: float
    lon: float          # east positive
    elev: float = 0.0   # metres; not used by the geometric ascendant

    def __post_init__(self):
        for name, value, limit in (("lat", self.lat, 90.0), ("lon", self.lon, 180.0)):
            v = float(value)
            if math.isfinite(v) and abs(v) > limit:
                raise InvalidCoordinatesError(f"{name}={v} outside ±{limit}")


@dataclass
class ChartConfig:
    use_sidereal: bool = True
    ayanamsha: float = 24.1
    show_outer_planets: bool = True
    show_nakshatra_grid: bool = True
    show_aspects: bool = True
    show_drishti: bool = False
    use_mean_node: bool = True
    aspect_orb: float = DEFAULT_ORB
    enabled_aspects: Dict[float, bool] = field(default_factory=lambda: dict(DEFAULT_ENABLED_ASPECTS))
    show_ascendant: bool = True
    show_houses: bool = True
    house_system: str = HOUSE_WHOLE_SIGN
    ascendant_method: str = METHOD_BISECTION
    label_script: str = SCRIPT_LATIN
    label_threshold: float = DEFAULT_THRESHOLD_DEG


@dataclass
class ChartPoint:
    name: str
    tropical_lon: float
    sidereal_lon: float
    lon: float              # in the chart frame (sidereal or tropical)
    speed_lon: float
    retrograde: bool
    is_node: bool
    sign: Dict[str, Any]
    nakshatra: Dict[str, Any]
    house: Optional[int] = None
    label_level: int = 0


@dataclass
class Chart:
    instant: datetime
    jd_ut: float
    observer: Observer
    config: ChartConfig
    ayanamsha: float
    obliquity: float
    sidereal_time_hours: float
    local_sidereal_deg: float
    node_mode: str
    ascendant: AscendantResult
    ascendant_lon: Optional[float]      # chart frame
    house_cusps: List[float]
    points: List[ChartPoint]
    aspects: List[Aspect]
    drishti: List[Drishti]

    def to_dict(self) -> Dict[str, Any]:
        asc = self.ascendant.to_dict()
        asc["chartLongitude"] = self.ascendant_lon
        asc["sign"] = sign_of(self.ascendant_lon) if self.ascendant_lon is not None else None
        return {
            "meta": {
                "utc_iso": utc_iso(self.instant),
                "jd_ut": self.jd_ut,
                "lat": self.observer.lat,
                "lon": self.observer.lon,
                "elev": self.observer.elev,
                "frame": "sidereal" if self.config.use_sidereal else "tropical",
                "ayanamsha": self.ayanamsha,
                "obliquity": self.obliquity,
                "siderealTimeHours": self.sidereal_time_hours,
                "localSiderealDeg": self.local_sidereal_deg,
                "nodeMode": self.node_mode,
            },
            "config": {**asdict(self.config), "enabled_aspects": {str(k): v for k, v in self.config.enabled_aspects.items()}},
            "ascendant": asc,
            "houseCusps": self.house_cusps,
            "points": [asdict(p) for p in self.points],
            "aspects": [asdict(a) for a in self.aspects],
            "drishti": [asdict(d) for d in self.drishti],
        }


def _node_bodies(jd_ut: float, instant: datetime, ephemeris, use_mean_node: bool):
    rahu, ketu, mode = lunar_nodes(jd_ut, instant, ephemeris, use_mean_node)
    tag = "Mean" if mode == "mean" else "True"
    nodes = [
        BodyPosition(name=f"Rahu ({tag})", lon=rahu, is_node=True),
        BodyPosition(name=f"Ketu ({tag})", lon=ketu, is_node=True),
    ]
    return nodes, mode


def build_chart(instant: datetime, observer: Observer, config: ChartConfig, ephemeris) -> Chart:
    jd_ut = julian_day_ut(instant)
    ayan = float(config.ayanamsha) if math.isfinite(float(config.ayanamsha)) else 0.0

    bodies = list(ephemeris.positions(instant))
    nodes, node_mode = _node_bodies(jd_ut, instant, ephemeris, config.use_mean_node)
    bodies.extend(nodes)
    if not config.show_outer_planets:
        bodies = [b for b in bodies if not b.optional]

    gast = ephemeris.sidereal_time_hours(instant)
    eps = ephemeris.obliquity_deg(instant)
    theta = local_sidereal_deg(gast, observer.lon)

    asc = ascendant(theta, eps, observer.lat, config.ascendant_method)
    if not asc.defined:
        log.warning("ascendant undefined at lat=%s lon=%s %s", observer.lat, observer.lon, utc_iso(instant))

    def frame(lon: float) -> float:
        return to_sidereal(lon, ayan) if config.use_sidereal else norm360(lon)

    asc_lon = frame(asc.longitude) if asc.defined else None
    cusps = house_cusps(asc_lon, config.house_system) if asc_lon is not None else []

    points: List[ChartPoint] = []
    for b in bodies:
        trop = norm360(b.lon)
        sid = to_sidereal(trop, ayan)
        lon = frame(trop)
        points.append(
            ChartPoint(
                name=b.name,
                tropical_lon=trop,
                sidereal_lon=sid,
                lon=lon,
                speed_lon=float(b.speed_lon) if math.isfinite(b.speed_lon) else 0.0,
                retrograde=b.retrograde,
                is_node=b.is_node,
                sign=sign_of(lon),
                nakshatra=nakshatra_of(sid),
                house=house_of(lon, cusps) if cusps else None,
            )
        )

    for p, lvl in zip(points, label_levels([p.lon for p in points], config.label_threshold)):
        p.label_level = lvl

    pairs = [(p.name, p.lon) for p in points]
    aspects = find_aspects(pairs, config.enabled_aspects, config.aspect_orb) if config.show_aspects else []
    drishti = find_drishti(pairs) if config.show_drishti else []

    return Chart(
        instant=instant,
        jd_ut=jd_ut,
        observer=observer,
        config=config,
        ayanamsha=ayan,
        obliquity=eps,
        sidereal_time_hours=gast,
        local_sidereal_deg=theta,
        node_mode=node_mode,
        ascendant=asc,
        ascendant_lon=asc_lon,
        house_cusps=cusps,
        points=points,
        aspects=aspects,
        drishti=drishti,
    )
