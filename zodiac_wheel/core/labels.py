# zodiac_wheel/core/labels.py
from typing import List, Sequence

DEFAULT_THRESHOLD_DEG = 3.0


def label_levels(lons: Sequence[float], threshold_deg: float = DEFAULT_THRESHOLD_DEG) -> List[int]:
    """
    Radial bump level per longitude (same order as input).
    Neighbours closer than threshold_deg form a cluster; the n-th member of a
    cluster (ascending longitude) gets level n. A cluster straddling 0° is
    joined across the wrap, starting from its high-longitude side.
    """
    if not lons:
        return []

    arr = sorted(((float(lon) % 360.0, i) for i, lon in enumerate(lons)))

    groups = []
    group = [arr[0]]
    for prev, curr in zip(arr, arr[1:]):
        if curr[0] - prev[0] <= threshold_deg:
            group.append(curr)
        else:
            groups.append(group)
            group = [curr]
    groups.append(group)

    first, last = arr[0], arr[-1]
    if len(groups) > 1 and (first[0] + 360.0 - last[0]) <= threshold_deg:
        tail = groups.pop()
        groups[0] = tail + groups[0]

    levels = [0] * len(lons)
    for g in groups:
        for lvl, (_, i) in enumerate(g):
            levels[i] = lvl
    return levels
