# zodiac_wheel/core/zodiac.py
"""
Longitude -> rasi / nakshatra helpers
- Every longitude is folded into [0, 360) first
- Sidereal = tropical - ayanamsha
"""
import math
from typing import Dict, List, Optional, Tuple

SIGN_SIZE = 30.0
NAK_SIZE = 360.0 / 27.0   # 13°20'
PADA_SIZE = NAK_SIZE / 4.0  # 3°20'

# (English, Devanagari short label)
SIGNS: List[Tuple[str, str]] = [
    ("Aries", "मेष"),
    ("Taurus", "वृषभ"),
    ("Gemini", "मिथुन"),
    ("Cancer", "कर्क"),
    ("Leo", "सिंह"),
    ("Virgo", "कन्या"),
    ("Libra", "तुला"),
    ("Scorpio", "वृश्चिक"),
    ("Sagittarius", "धनु"),
    ("Capricorn", "मकर"),
    ("Aquarius", "कुंभ"),
    ("Pisces", "मीन"),
]

NAKSHATRAS: List[Tuple[str, str]] = [
    ("Ashwini", "अश्विनी"),
    ("Bharani", "भरणी"),
    ("Krittika", "कृत्तिका"),
    ("Rohini", "रोहिणी"),
    ("Mrigashira", "मृगशीर्षा"),
    ("Ardra", "आर्द्रा"),
    ("Punarvasu", "पुनर्वसु"),
    ("Pushya", "पुष्य"),
    ("Ashlesha", "आश्लेषा"),
    ("Magha", "मघा"),
    ("Purva Phalguni", "पूर्वफल्गुनी"),
    ("Uttara Phalguni", "उत्तरफल्गुनी"),
    ("Hasta", "हस्त"),
    ("Chitra", "चित्रा"),
    ("Swati", "स्वाती"),
    ("Vishakha", "विशाखा"),
    ("Anuradha", "अनुराधा"),
    ("Jyeshtha", "ज्येष्ठा"),
    ("Mula", "मूला"),
    ("Purva Ashadha", "पूर्वाषाढ़ा"),
    ("Uttara Ashadha", "उत्तराषाढ़ा"),
    ("Shravana", "श्रवण"),
    ("Dhanishta", "धनिष्टा"),
    ("Shatabhisha", "शतभिषा"),
    ("Purva Bhadrapada", "पूर्वभाद्रपदा"),
    ("Uttara Bhadrapada", "उत्तरभाद्रपदा"),
    ("Revati", "रेवती"),
]

RASI_DEV = "राशि"

# Fixed ayanamsha presets (deg)
AYANAMSHA_PRESETS: Dict[str, float] = {
    "LAHIRI": 24.10,
    "RAMAN": 22.50,
    "KRISHNAMURTI": 23.86,
    "FAGAN_BRADLEY": 24.42,
}

AYANAMSHA_LABELS: Dict[str, str] = {
    "LAHIRI": "Lahiri (Chitra)",
    "RAMAN": "Raman",
    "KRISHNAMURTI": "Krishnamurti",
    "FAGAN_BRADLEY": "Fagan/Bradley (Western sidereal)",
}


def norm360(x: float) -> float:
    x = float(x)
    if not math.isfinite(x):
        return 0.0
    x = x % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if x >= 360.0 else x


def to_sidereal(tropical_lon: float, ayanamsha_deg: float) -> float:
    return norm360(float(tropical_lon) - float(ayanamsha_deg))


def from_sidereal(sidereal_lon: float, ayanamsha_deg: float) -> float:
    return norm360(float(sidereal_lon) + float(ayanamsha_deg))


def sign_index(lon: float) -> int:
    return min(int(norm360(lon) // SIGN_SIZE), 11)


def sign_of(lon: float) -> Dict:
    """
    Input: longitude in any range
    Output: {signIndex, sign, signGlyph, deg, min, raw}
      deg/min are floored inside the sign (12°59.9' -> 12°59')
    """
    raw = norm360(lon)
    idx = sign_index(raw)
    in_sign = raw - idx * SIGN_SIZE
    d = int(math.floor(in_sign))
    m = int(math.floor((in_sign - d) * 60.0))
    name, glyph = SIGNS[idx]
    return {"signIndex": idx, "sign": name, "signGlyph": glyph, "deg": d, "min": m, "raw": raw}


def nakshatra_of(sidereal_lon: float) -> Dict:
    """
    Input: sidereal longitude
    Output: {index 0..26, name, dev, pada 1..4}
    """
    lon = norm360(sidereal_lon)
    idx = min(int(lon // NAK_SIZE), 26)
    within = lon - idx * NAK_SIZE
    pada = min(int(within // PADA_SIZE) + 1, 4)
    name, dev = NAKSHATRAS[idx]
    return {"index": idx, "name": name, "dev": dev, "pada": pada}


def to_dms(abs_deg: float) -> Dict[str, int]:
    a = norm360(abs_deg)
    deg = int(a)
    mfloat = (a - deg) * 60.0
    minute = int(mfloat)
    sec = int(round((mfloat - minute) * 60.0))
    if sec >= 60:
        sec -= 60
        minute += 1
    if minute >= 60:
        minute -= 60
        deg += 1
    deg = deg % 360
    return {"deg": deg, "min": minute, "sec": sec}


def format_deg_min(deg: int, minute: int) -> str:
    return f"{deg}°{minute:02d}′"


def ayanamsa_lahiri_approx_deg(jd_ut: float) -> float:
    """
    Practical Lahiri-ish ayanamsa approximation.
    Typical value around ~24° in 2025.
    """
    years = (float(jd_ut) - 2451545.0) / 365.25
    # Base Lahiri at J2000 (approx): 23.85675°, precession 50.290966"/yr
    return norm360(23.85675 + years * (50.290966 / 3600.0))


def resolve_ayanamsha(value, jd_ut: Optional[float] = None) -> float:
    """
    Accepts a preset name (case-insensitive), "LAHIRI_DATE" (needs jd_ut)
    or a plain finite number.
    """
    if isinstance(value, str):
        key = value.strip().upper().replace("/", "_").replace(" ", "_")
        if key in AYANAMSHA_PRESETS:
            return AYANAMSHA_PRESETS[key]
        if key == "LAHIRI_DATE":
            if jd_ut is None:
                raise ValueError("LAHIRI_DATE ayanamsha needs a julian day")
            return ayanamsa_lahiri_approx_deg(jd_ut)
    ayan = float(value)
    if not math.isfinite(ayan):
        raise ValueError(f"ayanamsha must be finite, got {value!r}")
    return ayan
