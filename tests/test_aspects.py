import pytest

from zodiac_wheel.core.aspects import (
    DRISHTI_RULES,
    drishti_rule,
    find_aspects,
    find_drishti,
    match_aspect,
    separation,
    sign_distance,
)

ALL_ON = {0: True, 60: True, 90: True, 120: True, 180: True}


def test_separation_is_minimal_and_wraps():
    assert separation(359.0, 1.0) == pytest.approx(2.0)
    assert separation(10.0, 250.0) == pytest.approx(120.0)


def test_geometric_aspects_within_orb():
    pts = [("Sun", 0.0), ("Moon", 93.0), ("Mars", 185.5), ("Venus", 40.0)]
    found = {(a.a, a.b): a for a in find_aspects(pts, ALL_ON, 6.0)}
    assert found[("Sun", "Moon")].angle == 90.0
    assert found[("Sun", "Moon")].orb == pytest.approx(3.0)
    assert found[("Sun", "Mars")].angle == 180.0
    assert ("Sun", "Venus") not in found


def test_geometric_aspects_are_symmetric():
    assert match_aspect(10.0, 130.0, [120], 2.0) == match_aspect(130.0, 10.0, [120], 2.0)


def test_each_pair_reported_once():
    pts = [("Sun", 0.0), ("Moon", 0.5)]
    assert len(find_aspects(pts, ALL_ON, 6.0)) == 1


def test_disabled_targets_are_ignored():
    pts = [("Sun", 0.0), ("Moon", 60.0)]
    assert find_aspects(pts, {60: False, 90: True}, 6.0) == []
    assert len(find_aspects(pts, {60: True}, 6.0)) == 1


def test_closest_target_wins_with_wide_orb():
    assert match_aspect(0.0, 75.0, [60, 90], 20.0) == (60.0, 15.0)
    assert match_aspect(0.0, 80.0, [60, 90], 20.0) == (90.0, 10.0)


def test_orb_edge_is_inclusive():
    assert match_aspect(0.0, 96.0, [90], 6.0) is not None
    assert match_aspect(0.0, 96.01, [90], 6.0) is None


def test_sign_distance_counts_forward_from_one():
    assert sign_distance(5.0, 20.0) == 1
    assert sign_distance(5.0, 95.0) == 4
    assert sign_distance(340.0, 5.0) == 2


def test_mars_drishti_targets():
    # Mars in Aries; one body in every sign
    pts = [("Mars", 1.0)] + [(f"B{i}", i * 30.0 + 15.0) for i in range(1, 12)]
    links = find_drishti(pts)
    mars_targets = sorted(d.target for d in links if d.source == "Mars")
    assert mars_targets == ["B3", "B6", "B7"]
    assert {d.distance for d in links if d.source == "Mars"} == {4, 7, 8}


def test_drishti_is_directional():
    # Mars (Aries) sees Moon (Cancer, 4th); Moon only sees the 7th (Capricorn)
    pts = [("Mars", 1.0), ("Moon", 95.0)]
    links = {(d.source, d.target) for d in find_drishti(pts)}
    assert ("Mars", "Moon") in links
    assert ("Moon", "Mars") not in links


def test_mutual_seventh_is_both_ways():
    links = {(d.source, d.target) for d in find_drishti([("Sun", 10.0), ("Moon", 190.0)])}
    assert links == {("Sun", "Moon"), ("Moon", "Sun")}


def test_node_names_resolve_to_base_rule():
    assert drishti_rule("Rahu (Mean)") == set(DRISHTI_RULES["Rahu"])
    assert drishti_rule("Sun") == {7}


def test_custom_rules():
    rules = {"Sun": {2}}
    links = find_drishti([("Sun", 10.0), ("Moon", 40.0)], rules)
    assert [(d.source, d.target) for d in links] == [("Sun", "Moon")]
