# zodiac_wheel/core/render.py
"""
Wheel drawing + table export.
0° Aries sits at 3 o'clock and longitude grows counter-clockwise.
"""
import csv
import io
import math
from typing import Dict, Tuple

import svgwrite

from zodiac_wheel.core.chart import SCRIPT_DEVANAGARI, Chart
from zodiac_wheel.core.zodiac import NAK_SIZE, RASI_DEV, SIGNS, format_deg_min

SIZE = 740
OUTER_R = 320   # sign ring
INNER_R = 250   # planet ring
LABEL_GAP = 26
LABEL_STEP = 14

BODY_COLORS: Dict[str, str] = {
    "Sun": "#ffb703",
    "Moon": "#8ecae6",
    "Mercury": "#adb5bd",
    "Venus": "#ffafcc",
    "Mars": "#e63946",
    "Jupiter": "#ffd166",
    "Saturn": "#cdb4db",
    "Uranus": "#94d2bd",
    "Neptune": "#90caf9",
    "Pluto": "#bfb8da",
    "Rahu": "#2a9d8f",
    "Ketu": "#264653",
}


def body_color(name: str) -> str:
    return BODY_COLORS.get(name.split(" (")[0], "#334155")


def angle_to_xy(angle_deg: float, r: float, cx: float = SIZE / 2, cy: float = SIZE / 2) -> Tuple[float, float]:
    a = math.radians(-angle_deg)
    return cx + r * math.cos(a), cy + r * math.sin(a)


def _spoke(dwg, g, angle, r0, r1, **kw):
    x1, y1 = angle_to_xy(angle, r0)
    x2, y2 = angle_to_xy(angle, r1)
    g.add(dwg.line(start=(x1, y1), end=(x2, y2), **kw))


def render_wheel_svg(chart: Chart, size: int = SIZE) -> str:
    """Draw chart as an SVG document and return it as a string."""
    cfg = chart.config
    cx = cy = size / 2
    dwg = svgwrite.Drawing(size=(size, size))
    dwg.add(dwg.rect(insert=(0, 0), size=(size, size), fill="#f8fafc"))
    dwg.add(dwg.circle(center=(cx, cy), r=OUTER_R, fill="#ffffff", stroke="#0f172a", stroke_width=2))

    # 12 sign spokes + labels outside the ring
    signs = dwg.g(id="signs")
    for i, (name, glyph) in enumerate(SIGNS):
        angle = i * 30.0
        _spoke(dwg, signs, angle, 0, OUTER_R, stroke="#94a3b8", stroke_width=1)
        mx, my = angle_to_xy(angle + 15.0, OUTER_R + 34)
        text = glyph if cfg.label_script == SCRIPT_DEVANAGARI else name[:3]
        signs.add(dwg.text(text, insert=(mx, my), text_anchor="middle", dominant_baseline="middle",
                           font_size=16, font_weight="bold", fill="#334155"))
    dwg.add(signs)

    if cfg.show_nakshatra_grid:
        nak = dwg.g(id="nakshatras")
        for i in range(27):
            _spoke(dwg, nak, i * NAK_SIZE, OUTER_R, OUTER_R - 22, stroke="#f59e0b", stroke_width=1, opacity=0.8)
        for i in range(108):
            _spoke(dwg, nak, i * (360.0 / 108), OUTER_R, OUTER_R - 12, stroke="#fbbf24", stroke_width=0.8, opacity=0.7)
        dwg.add(nak)

    ticks = dwg.g(id="ticks")
    for i in range(72):
        major = i % 6 == 0
        _spoke(dwg, ticks, i * 5.0, OUTER_R, OUTER_R - (18 if major else 10),
               stroke="#cbd5e1", stroke_width=1.5 if major else 1)
    dwg.add(ticks)

    dwg.add(dwg.circle(center=(cx, cy), r=INNER_R, fill="none", stroke="#e2e8f0", stroke_width=1))

    if cfg.show_houses and chart.house_cusps:
        houses = dwg.g(id="houses")
        for cusp in chart.house_cusps:
            _spoke(dwg, houses, cusp, 0, OUTER_R, stroke="#e5e7eb", stroke_width=1)
        dwg.add(houses)

    # undefined ascendant -> no line at all
    if cfg.show_ascendant and chart.ascendant_lon is not None:
        asc = dwg.g(id="ascendant")
        _spoke(dwg, asc, chart.ascendant_lon, 0, OUTER_R, stroke="#1d4ed8", stroke_width=2)
        ax, ay = angle_to_xy(chart.ascendant_lon, OUTER_R + 12)
        asc.add(dwg.text("Asc", insert=(ax, ay), text_anchor="middle", font_size=11, fill="#1d4ed8"))
        dwg.add(asc)

    by_name = {p.name: p for p in chart.points}

    if chart.aspects:
        asp = dwg.g(id="aspects")
        for a in chart.aspects:
            pa, pb = by_name[a.a], by_name[a.b]
            asp.add(dwg.line(start=angle_to_xy(pa.lon, INNER_R), end=angle_to_xy(pb.lon, INNER_R),
                             stroke="#64748b", stroke_width=1, opacity=0.6))
        dwg.add(asp)

    if chart.drishti:
        dr = dwg.g(id="drishti")
        for d in chart.drishti:
            ps, pt = by_name[d.source], by_name[d.target]
            dr.add(dwg.line(start=angle_to_xy(ps.lon, INNER_R - 6), end=angle_to_xy(pt.lon, INNER_R - 6),
                            stroke=body_color(d.source), stroke_width=1, stroke_dasharray="4,3", opacity=0.7))
        dwg.add(dr)

    planets = dwg.g(id="planets")
    for p in chart.points:
        color = body_color(p.name)
        pos = angle_to_xy(p.lon, INNER_R)
        lab = angle_to_xy(p.lon, INNER_R + LABEL_GAP + p.label_level * LABEL_STEP)
        planets.add(dwg.circle(center=pos, r=7, fill=color, stroke="#0f172a", stroke_width=1))
        planets.add(dwg.line(start=pos, end=lab, stroke=color, stroke_width=1))
        title = p.name + (" ℞" if p.retrograde and not p.is_node else "")
        planets.add(dwg.text(title, insert=(lab[0], lab[1] - 4), text_anchor="middle",
                             font_size=12, font_weight="bold", fill="#1e293b"))
        planets.add(dwg.text(format_deg_min(p.sign["deg"], p.sign["min"]), insert=(lab[0], lab[1] + 10),
                             text_anchor="middle", font_size=11, fill="#475569"))
    dwg.add(planets)

    dwg.add(dwg.circle(center=(cx, cy), r=4, fill="#0f172a"))
    return dwg.tostring()


def chart_to_csv(chart: Chart, delimiter: str = ",") -> str:
    """Body, Rasi, Nakshatra, Longitude; one row per plotted point"""
    buf = io.StringIO()
    w = csv.writer(buf, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    w.writerow(["Body", f"Rasi ({RASI_DEV})", "Nakshatra", "Longitude"])
    for p in chart.points:
        z = p.sign
        nk = p.nakshatra
        w.writerow([
            p.name,
            f"{z['signGlyph']} {z['sign']} {format_deg_min(z['deg'], z['min'])}",
            f"{nk['dev']} {nk['name']} (pada {nk['pada']})",
            f"{z['raw']:.3f}°",
        ])
    return buf.getvalue()
