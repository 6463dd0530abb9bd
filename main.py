# main.py: zodiac wheel backend (chart JSON / SVG / CSV + ascendant + playback)
from datetime import datetime, timezone
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from typing import Any, Dict, List, Optional
import hashlib
import logging
import time

from zodiac_wheel.core.ascendant import METHOD_BISECTION, METHOD_CLOSED_FORM, ascendant, local_sidereal_deg
from zodiac_wheel.core.aspects import DEFAULT_ENABLED_ASPECTS
from zodiac_wheel.core.chart import Chart, ChartConfig, Observer, build_chart
from zodiac_wheel.core.ephemeris import get_ephemeris
from zodiac_wheel.core.exceptions import EphemerisError, ZodiacWheelError
from zodiac_wheel.core.jd import julian_day_ut, local_to_utc, utc_iso
from zodiac_wheel.core.models import (
    AscendantReq,
    AscendantResp,
    ChartReq,
    ChartResp,
    CsvReq,
    PlaceTimeReq,
    PlaybackReq,
    PlaybackResp,
    PresetItem,
)
from zodiac_wheel.core.playback import advance_offset, instant_at
from zodiac_wheel.core.render import chart_to_csv, render_wheel_svg
from zodiac_wheel.core.settings import get_settings
from zodiac_wheel.core.zodiac import AYANAMSHA_LABELS, AYANAMSHA_PRESETS, resolve_ayanamsha

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("zodiac_wheel")


# -------------------------------------------------
# App
# -------------------------------------------------
app = FastAPI(title="Zodiac Wheel Backend", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EphemerisError)
def _ephemeris_error(request: Request, exc: EphemerisError):
    log.error("ephemeris failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(ZodiacWheelError)
def _input_error(request: Request, exc: ZodiacWheelError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# -------------------------------------------------
# Startup warm-up (kernel load is the slow part)
# -------------------------------------------------
@app.on_event("startup")
def _startup_warm():
    if not settings.warm_on_startup:
        return
    try:
        eph = get_ephemeris()
        eph.positions(datetime.now(timezone.utc))
        log.info("[STARTUP] warm ok")
    except EphemerisError as e:
        log.warning("[STARTUP] warm fail: %s", e)


# -------------------------------------------------
# Health
# -------------------------------------------------
@app.get("/health")
def health():
    return {"ok": True, "service": "zodiac-wheel"}


# -------------------------------------------------
# Utilities
# -------------------------------------------------
def _make_key(kind: str, req: PlaceTimeReq) -> str:
    # exact instant (microseconds included); each render is for its own moment
    instant = _instant(req).isoformat()
    rest = req.model_dump_json(exclude={"datetimeLocal", "tz", "utcOffsetHours", "offsetHours"})
    raw = f"{kind}|{instant}|{rest}"
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


# -------------------------------------------------
# In-memory cache (simple, later Redis)
# -------------------------------------------------
_CACHE: Dict[str, Dict[str, Any]] = {}


def _gc():
    now = time.time()
    dead = [k for k, v in _CACHE.items() if now - float(v.get("_ts", now)) > settings.cache_ttl_sec]
    for k in dead:
        _CACHE.pop(k, None)


def _cache_get(key: str):
    _gc()
    v = _CACHE.get(key)
    return v.get("data") if v else None


def _cache_set(key: str, data: Any):
    _gc()
    _CACHE[key] = {"_ts": time.time(), "data": data}


def _instant(req: PlaceTimeReq) -> datetime:
    base = local_to_utc(req.datetimeLocal, req.tz, req.utcOffsetHours)
    return instant_at(base, req.offsetHours)


def _enabled_aspects(raw: Optional[Dict[str, bool]]) -> Dict[float, bool]:
    if raw is None:
        return dict(DEFAULT_ENABLED_ASPECTS)
    try:
        return {float(k): bool(v) for k, v in raw.items()}
    except ValueError:
        raise HTTPException(status_code=400, detail=f"enabledAspects keys must be angles: {list(raw)}")


def _config(req: ChartReq, instant: datetime) -> ChartConfig:
    raw_ayan = settings.default_ayanamsha if req.ayanamsha is None else req.ayanamsha
    try:
        ayan = resolve_ayanamsha(raw_ayan, julian_day_ut(instant))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"unknown ayanamsha: {raw_ayan!r}")

    return ChartConfig(
        use_sidereal=req.sidereal,
        ayanamsha=ayan,
        show_outer_planets=req.outerPlanets,
        show_nakshatra_grid=req.nakshatraGrid,
        show_aspects=req.aspects,
        show_drishti=req.drishti,
        use_mean_node=req.meanNode,
        aspect_orb=req.aspectOrb,
        enabled_aspects=_enabled_aspects(req.enabledAspects),
        show_ascendant=req.showAscendant,
        show_houses=req.showHouses,
        house_system=req.houseSystem,
        ascendant_method=req.ascendantMethod,
        label_script=req.labelScript,
        label_threshold=req.labelThreshold,
    )


def _chart(req: ChartReq, eph) -> Chart:
    instant = _instant(req)
    observer = Observer(lat=req.lat, lon=req.lon, elev=req.elev)
    return build_chart(instant, observer, _config(req, instant), eph)


# -------------------------------------------------
# Presets
# -------------------------------------------------
@app.get("/api/ayanamsha/presets", response_model=List[PresetItem])
def ayanamsha_presets():
    return [{"key": k, "name": AYANAMSHA_LABELS[k], "value": v} for k, v in AYANAMSHA_PRESETS.items()]


# -------------------------------------------------
# Chart API (cached)
# -------------------------------------------------
@app.post("/api/chart", response_model=ChartResp)
def chart_json(req: ChartReq, eph=Depends(get_ephemeris)):
    key = _make_key("chart", req)
    cached = _cache_get(key)
    if cached:
        return cached

    out = _chart(req, eph).to_dict()
    _cache_set(key, out)
    return out


@app.post("/api/chart/svg")
def chart_svg(req: ChartReq, eph=Depends(get_ephemeris)):
    key = _make_key("svg", req)
    svg = _cache_get(key)
    if not svg:
        svg = render_wheel_svg(_chart(req, eph))
        _cache_set(key, svg)
    return Response(content=svg, media_type="image/svg+xml")


@app.post("/api/chart/csv")
def chart_csv(req: CsvReq, eph=Depends(get_ephemeris)):
    delimiter = "\t" if req.delimiter == "tab" else ","
    text = chart_to_csv(_chart(req, eph), delimiter=delimiter)
    media = "text/tab-separated-values" if delimiter == "\t" else "text/csv"
    return Response(content=text, media_type=f"{media}; charset=utf-8")


# -------------------------------------------------
# Ascendant API (both strategies side by side)
# -------------------------------------------------
@app.post("/api/ascendant", response_model=AscendantResp)
def ascendant_both(req: AscendantReq, eph=Depends(get_ephemeris)):
    instant = _instant(req)
    observer = Observer(lat=req.lat, lon=req.lon, elev=req.elev)

    eps = eph.obliquity_deg(instant)
    theta = local_sidereal_deg(eph.sidereal_time_hours(instant), observer.lon)

    return {
        "utc_iso": utc_iso(instant),
        "jd_ut": julian_day_ut(instant),
        "obliquity": eps,
        "localSiderealDeg": theta,
        "bisection": ascendant(theta, eps, observer.lat, METHOD_BISECTION).to_dict(),
        "closed_form": ascendant(theta, eps, observer.lat, METHOD_CLOSED_FORM).to_dict(),
    }


# -------------------------------------------------
# Playback (time scroller tick)
# -------------------------------------------------
@app.post("/api/playback/step", response_model=PlaybackResp)
def playback_step(req: PlaybackReq):
    base = local_to_utc(req.datetimeLocal, req.tz, req.utcOffsetHours)
    nxt = advance_offset(req.offsetHours, req.stepHours, req.rangeDays)
    return {"offsetHours": nxt, "utc_iso": utc_iso(instant_at(base, nxt))}
