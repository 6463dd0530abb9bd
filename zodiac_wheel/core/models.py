from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union

from zodiac_wheel.core.ascendant import METHOD_BISECTION, METHODS
from zodiac_wheel.core.chart import LABEL_SCRIPTS, SCRIPT_LATIN
from zodiac_wheel.core.houses import HOUSE_SYSTEMS, HOUSE_WHOLE_SIGN


def _one_of(choices) -> str:
    return "^(" + "|".join(choices) + ")$"


class PlaceTimeReq(BaseModel):
    # "2025-12-28T08:30:00"
    datetimeLocal: str = Field(..., description="Local datetime ISO string")
    tz: Optional[str] = Field(None, description="IANA timezone, e.g. Asia/Kolkata")
    utcOffsetHours: Optional[float] = Field(None, description="Used when tz is not given, e.g. 5.5")

    # Mumbai example
    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude (east positive)")
    elev: float = Field(0.0, description="Elevation (m)")

    offsetHours: float = Field(0.0, description="Playback offset from datetimeLocal")


class ChartReq(PlaceTimeReq):
    sidereal: bool = True
    # number or preset name: LAHIRI / RAMAN / KRISHNAMURTI / FAGAN_BRADLEY / LAHIRI_DATE
    ayanamsha: Union[float, str, None] = None

    outerPlanets: bool = True
    nakshatraGrid: bool = True
    aspects: bool = True
    drishti: bool = False
    meanNode: bool = True
    aspectOrb: float = Field(6.0, ge=0.0, le=10.0)
    enabledAspects: Optional[Dict[str, bool]] = None
    showAscendant: bool = True
    showHouses: bool = True
    houseSystem: str = Field(HOUSE_WHOLE_SIGN, pattern=_one_of(HOUSE_SYSTEMS))
    ascendantMethod: str = Field(METHOD_BISECTION, pattern=_one_of(METHODS))
    labelScript: str = Field(SCRIPT_LATIN, pattern=_one_of(LABEL_SCRIPTS))
    labelThreshold: float = Field(3.0, ge=0.0)


class CsvReq(ChartReq):
    delimiter: str = Field("comma", pattern="^(comma|tab)$")


class AscendantReq(PlaceTimeReq):
    pass


class AscendantOut(BaseModel):
    defined: bool
    longitude: Optional[float]
    azimuth: Optional[float]
    method: str
    crossings: List[Dict[str, float]] = []


class AscendantResp(BaseModel):
    utc_iso: str
    jd_ut: float
    obliquity: float
    localSiderealDeg: float
    bisection: AscendantOut
    closed_form: AscendantOut


class PlaybackReq(BaseModel):
    datetimeLocal: str
    tz: Optional[str] = None
    utcOffsetHours: Optional[float] = None
    offsetHours: float = 0.0
    stepHours: float = Field(6.0, description="1/3/6/12/24 in the UI; any value accepted")
    rangeDays: float = Field(90.0, gt=0.0)


class PlaybackResp(BaseModel):
    offsetHours: float
    utc_iso: str


class PresetItem(BaseModel):
    key: str
    name: str
    value: float


class ChartResp(BaseModel):
    meta: Dict[str, Any]
    config: Dict[str, Any]
    ascendant: Dict[str, Any]
    houseCusps: List[float]
    points: List[Dict[str, Any]]
    aspects: List[Dict[str, Any]]
    drishti: List[Dict[str, Any]]
