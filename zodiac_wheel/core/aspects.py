# zodiac_wheel/core/aspects.py
"""
Two independent ways to link bodies on the wheel:

- geometric aspects: symmetric, angular separation within an orb of a target
- drishti: directional, counted in whole signs from the aspecting body
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from zodiac_wheel.core.zodiac import norm360, sign_index

DEFAULT_ENABLED_ASPECTS: Dict[float, bool] = {0.0: True, 60.0: False, 90.0: True, 120.0: True, 180.0: True}
DEFAULT_ORB = 6.0

# Sign-distances (1-indexed, counted forward): every graha sees the 7th
DEFAULT_DRISHTI = frozenset({7})
DRISHTI_RULES: Dict[str, frozenset] = {
    "Mars": frozenset({4, 7, 8}),
    "Jupiter": frozenset({5, 7, 9}),
    "Saturn": frozenset({3, 7, 10}),
    "Rahu": frozenset({5, 7, 9}),
    "Ketu": frozenset({5, 7, 9}),
}


@dataclass
class Aspect:
    a: str
    b: str
    angle: float        # target angle matched
    separation: float   # actual minimal separation 0..180
    orb: float          # |separation - angle|


@dataclass
class Drishti:
    source: str
    target: str
    distance: int       # 1..12 signs from source to target


def separation(a: float, b: float) -> float:
    return min(norm360(a - b), norm360(b - a))


def match_aspect(a: float, b: float, targets: Iterable[float], orb: float) -> Optional[Tuple[float, float]]:
    """(target, delta) of the closest target within orb, else None"""
    sep = separation(a, b)
    best = None
    for target in targets:
        delta = abs(sep - float(target))
        if delta <= orb and (best is None or delta < best[1]):
            best = (float(target), delta)
    return best


def enabled_targets(enabled: Mapping) -> List[float]:
    return [float(k) for k, on in enabled.items() if on]


def find_aspects(points: Sequence[Tuple[str, float]], enabled: Mapping = None, orb: float = DEFAULT_ORB) -> List[Aspect]:
    """points: [(name, lon)]; each unordered pair reported at most once"""
    targets = enabled_targets(DEFAULT_ENABLED_ASPECTS if enabled is None else enabled)
    out: List[Aspect] = []
    for i, (name_a, lon_a) in enumerate(points):
        for name_b, lon_b in points[i + 1:]:
            m = match_aspect(lon_a, lon_b, targets, orb)
            if m is None:
                continue
            out.append(Aspect(a=name_a, b=name_b, angle=m[0], separation=separation(lon_a, lon_b), orb=m[1]))
    return out


def sign_distance(from_lon: float, to_lon: float) -> int:
    """Same sign = 1, next sign = 2, ... wraps mod 12"""
    return ((sign_index(to_lon) - sign_index(from_lon)) % 12) + 1


def drishti_rule(name: str, rules: Mapping[str, Set[int]] = None) -> Set[int]:
    rules = DRISHTI_RULES if rules is None else rules
    # "Rahu (Mean)" -> "Rahu"
    base = name.split(" (")[0]
    return set(rules.get(name, rules.get(base, DEFAULT_DRISHTI)))


def find_drishti(points: Sequence[Tuple[str, float]], rules: Mapping[str, Set[int]] = None) -> List[Drishti]:
    """Directional: A -> B does not imply B -> A"""
    out: List[Drishti] = []
    for name_a, lon_a in points:
        allowed = drishti_rule(name_a, rules)
        for name_b, lon_b in points:
            if name_b == name_a:
                continue
            d = sign_distance(lon_a, lon_b)
            if d in allowed:
                out.append(Drishti(source=name_a, target=name_b, distance=d))
    return out
