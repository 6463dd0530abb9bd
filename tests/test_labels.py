from zodiac_wheel.core.labels import label_levels


def test_three_close_bodies_stack_up():
    assert label_levels([10.0, 11.0, 12.0], 4.0) == [0, 1, 2]


def test_levels_follow_input_order():
    assert label_levels([12.0, 10.0, 11.0], 4.0) == [2, 0, 1]


def test_separated_bodies_stay_on_level_zero():
    assert label_levels([10.0, 50.0, 200.0], 3.0) == [0, 0, 0]


def test_cluster_across_zero_aries():
    # 359 starts the cluster, 1 and 2 continue it
    assert label_levels([1.0, 359.0, 2.0, 180.0], 3.0) == [1, 0, 2, 0]


def test_single_cluster_covering_wrap_is_not_merged_twice():
    assert label_levels([0.0, 1.0], 3.0) == [0, 1]


def test_empty():
    assert label_levels([]) == []
