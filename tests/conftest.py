from datetime import datetime, timezone

import pytest

from zodiac_wheel.core.ephemeris import BodyPosition

J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def circ_diff(a, b):
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


def _default_positions():
    return [
        BodyPosition("Sun", 10.0, speed_lon=1.0),
        BodyPosition("Moon", 100.0, speed_lon=13.2),
        BodyPosition("Mercury", 11.0, speed_lon=-0.4),
        BodyPosition("Venus", 12.0, speed_lon=1.2),
        BodyPosition("Mars", 190.0, speed_lon=0.5),
        BodyPosition("Jupiter", 250.0, speed_lon=0.1),
        BodyPosition("Saturn", 280.0, speed_lon=-0.02),
        BodyPosition("Uranus", 40.0, speed_lon=0.01, optional=True),
        BodyPosition("Neptune", 340.0, speed_lon=0.01, optional=True),
        BodyPosition("Pluto", 300.0, speed_lon=-0.01, optional=True),
    ]


class StubEphemeris:
    """Fixed answers; gast 18h at lon 0 puts the equinox on the eastern horizon."""

    def __init__(self, positions=None, gast_hours=18.0, obliquity=23.4392911, true_node=None):
        self._positions = positions if positions is not None else _default_positions()
        self.gast_hours = gast_hours
        self.obliquity = obliquity
        self.true_node = true_node
        self.calls = 0

    def positions(self, instant):
        self.calls += 1
        return [BodyPosition(**vars(p)) for p in self._positions]

    def sidereal_time_hours(self, instant):
        return self.gast_hours

    def obliquity_deg(self, instant):
        return self.obliquity

    def true_node_deg(self, instant):
        return self.true_node


@pytest.fixture
def stub_ephemeris():
    return StubEphemeris()
