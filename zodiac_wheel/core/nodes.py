# zodiac_wheel/core/nodes.py
import logging
from typing import Tuple

from zodiac_wheel.core.zodiac import norm360

log = logging.getLogger(__name__)


def _jd_T(jd: float) -> float:
    # Julian centuries from J2000.0
    return (jd - 2451545.0) / 36525.0


# ---------------------------------------------------------
# Mean Lunar Node (Rahu) tropical longitude (Meeus)
# ---------------------------------------------------------
def mean_lunar_node_tropical_deg(jd_ut: float) -> float:
    T = _jd_T(jd_ut)
    # Ω = 125.04455501 - 1934.13626197T + 0.0020762T² + T³/467410 - T⁴/60616000
    Om = (
        125.04455501
        - 1934.13626197 * T
        + 0.0020762 * (T * T)
        + (T * T * T) / 467410.0
        - (T * T * T * T) / 60616000.0
    )
    return norm360(Om)


def rahu_ketu(rahu_lon: float) -> Tuple[float, float]:
    """Rahu (ascending) and Ketu (descending, 180° apart)"""
    rahu = norm360(rahu_lon)
    return rahu, norm360(rahu + 180.0)


def lunar_nodes(jd_ut: float, instant, ephemeris, use_mean_node: bool = True) -> Tuple[float, float, str]:
    """
    Returns (rahu, ketu, mode). mode is "mean" or "true".
    A degenerate true node falls back to the mean node.
    """
    if not use_mean_node:
        true_lon = ephemeris.true_node_deg(instant)
        if true_lon is not None:
            rahu, ketu = rahu_ketu(true_lon)
            return rahu, ketu, "true"
        log.warning("true node degenerate at jd %.5f; falling back to mean node", jd_ut)

    rahu, ketu = rahu_ketu(mean_lunar_node_tropical_deg(jd_ut))
    return rahu, ketu, "mean"
