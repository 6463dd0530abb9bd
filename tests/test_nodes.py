import pytest

from zodiac_wheel.core.nodes import lunar_nodes, mean_lunar_node_tropical_deg, rahu_ketu

from conftest import J2000, StubEphemeris


def test_mean_node_at_j2000():
    assert mean_lunar_node_tropical_deg(2451545.0) == pytest.approx(125.04455501)


def test_mean_node_moves_backwards():
    a = mean_lunar_node_tropical_deg(2451545.0)
    b = mean_lunar_node_tropical_deg(2451545.0 + 30.0)
    assert b < a
    # ~19.3°/yr
    assert a - b == pytest.approx(1934.13626197 * 30.0 / 36525.0, rel=1e-3)


def test_rahu_ketu_opposite():
    rahu, ketu = rahu_ketu(350.0)
    assert ketu == pytest.approx(170.0)


def test_true_node_used_when_available():
    rahu, ketu, mode = lunar_nodes(2451545.0, J2000, StubEphemeris(true_node=123.0), use_mean_node=False)
    assert mode == "true"
    assert rahu == 123.0
    assert ketu == 303.0


def test_degenerate_true_node_falls_back_to_mean():
    rahu, _, mode = lunar_nodes(2451545.0, J2000, StubEphemeris(true_node=None), use_mean_node=False)
    assert mode == "mean"
    assert rahu == pytest.approx(125.04455501)
