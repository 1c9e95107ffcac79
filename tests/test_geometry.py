import math
import pytest
import numpy as np
from modular_vortex import (
    Vortex,
    VortexResult,
    Label,
    rotate_point,
    points_labels,
    cycle_start,
    cycle_segments,
    point_radius,
    make_layout,
    quick_vortex,
    InvalidArgumentError,
)


def test_rotate_point_is_clockwise_on_screen():
    """With y pointing down, a quarter turn takes 'top' to 'right'."""
    x, y = rotate_point((0.0, -1.0), (0.0, 0.0), math.pi / 2)
    assert x == pytest.approx(1.0)
    assert y == pytest.approx(0.0, abs=1e-12)


def test_points_labels_shape_and_closure():
    points, labels = points_labels(4, start=(0.0, -1.0), center=(0.0, 0.0))
    assert points.shape == (5, 2)
    np.testing.assert_allclose(points[0], [0.0, -1.0])
    np.testing.assert_allclose(points[1], [1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(points[2], [0.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(points[4], points[0], atol=1e-12)
    assert [lb.text for lb in labels] == ["0", "1", "2", "3", "0"]


def test_points_lie_on_circle():
    center = (400.0, 400.0)
    points, _ = points_labels(811, start=(400.0, 50.0), center=center)
    radii = np.hypot(points[:, 0] - center[0], points[:, 1] - center[1])
    np.testing.assert_allclose(radii, 350.0)


def test_labels_sit_outside_points():
    points, labels = points_labels(12, start=(0.0, -100.0), center=(0.0, 0.0),
                                   label_offset=20.0)
    assert isinstance(labels[0], Label)
    assert (labels[0].x, labels[0].y) == pytest.approx((0.0, -120.0))
    for label in labels:
        assert math.hypot(label.x, label.y) == pytest.approx(120.0)


def test_points_labels_rejects_zero_modulus():
    with pytest.raises(InvalidArgumentError):
        points_labels(0, (0, -1), (0, 0))


def test_cycle_start():
    assert cycle_start([2, 4, 8, 6, 2]) == 0
    assert cycle_start([2, 4, 8, 4]) == 1
    assert cycle_start([6, 0, 0]) == 1
    assert cycle_start([]) == 0


def test_cycle_segments_follow_roots():
    points = np.arange(20, dtype=float).reshape(10, 2)
    segs = cycle_segments([2, 4, 8, 6, 2], points)
    assert segs.shape == (4, 2, 2)
    np.testing.assert_array_equal(segs[0], [points[2], points[4]])
    np.testing.assert_array_equal(segs[-1], [points[6], points[2]])


def test_cycle_segments_skip_pre_period():
    points = np.arange(24, dtype=float).reshape(12, 2)
    segs = cycle_segments([2, 4, 8, 4], points)
    assert segs.shape == (2, 2, 2)
    np.testing.assert_array_equal(segs[0], [points[4], points[8]])
    np.testing.assert_array_equal(segs[1], [points[8], points[4]])


def test_cycle_segments_edge_cases():
    points = np.zeros((5, 2))
    assert cycle_segments([], points).shape == (0, 2, 2)
    assert cycle_segments([3], points).shape == (0, 2, 2)
    # fixed point: a single zero-length segment
    assert cycle_segments([1, 1], points).shape == (1, 2, 2)
    with pytest.raises(InvalidArgumentError, match="point 9 "):
        cycle_segments([1, 9, 1], points)
    with pytest.raises(InvalidArgumentError, match="point -2 "):
        cycle_segments([3, -2, 3], points)


def test_point_radius():
    assert point_radius(350.0, 811) == pytest.approx(0.4 * math.pi * 350.0 / 811)
    assert point_radius(350.0, 10) == 5.0
    assert point_radius(350.0, 10, cap=100.0) == pytest.approx(0.4 * math.pi * 35.0)


def test_vortex_layout():
    layout = Vortex(10, 2).layout(size=800)
    assert layout.center == (400.0, 400.0)
    assert layout.radius == 350.0
    np.testing.assert_allclose(layout.points[0], [400.0, 50.0])
    assert len(layout.labels) == 11
    assert layout.segments.shape == (4, 2, 2), "2^k mod 10 has period 4"
    assert layout.point_radius == 5.0
    assert layout.result.tail == [2, 4, 8, 6]


def test_layout_rejects_tiny_canvas():
    with pytest.raises(InvalidArgumentError):
        make_layout(quick_vortex(10, 2), size=100, margin=50)


def test_vortex_result_properties():
    result = Vortex(12, 2).compute()
    assert isinstance(result, VortexResult)
    assert result.roots == [2, 4, 8, 4]
    assert result.tail == [4, 8]
    assert result.steps == 4
    assert result.period == 2
    assert result.pre_period == 1
    d = result.to_dict()
    assert d["period"] == 2 and d["pre_period"] == 1 and d["generator"] == "exp_mod"
    assert "period=2" in result.summary()


def test_vortex_compute_is_cached():
    vortex = Vortex(811, 3)
    assert vortex.compute() is vortex.compute()


def test_vortex_rejects_bad_arguments():
    with pytest.raises(InvalidArgumentError):
        Vortex(0, 3)
    with pytest.raises(InvalidArgumentError):
        Vortex(10, -2)
    with pytest.raises(InvalidArgumentError):
        Vortex(10, 2, generator="nope")


def test_quick_vortex_defaults():
    result = quick_vortex()
    assert (result.modulus, result.multiplier) == (811, 3)
    assert result.pre_period == 0
    assert result.period == result.steps - 1
