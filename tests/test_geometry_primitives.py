"""Tests for geometry_primitives module."""
import numpy as np
import pytest
from shapely.geometry import Polygon

from geometry_primitives import (
    Polyline,
    rectangle,
    rotate_quarter_turns,
)


class TestRotateQuarterTurns:
    """Row-vector quarter-turn rotation used by the edge generator."""

    def test_positive_turn_is_clockwise(self):
        np.testing.assert_allclose(rotate_quarter_turns([1.0, 0.0], 1), [0.0, -1.0], atol=1e-12)
        np.testing.assert_allclose(rotate_quarter_turns([0.0, 1.0], 1), [1.0, 0.0], atol=1e-12)

    def test_negative_turn_is_counter_clockwise(self):
        np.testing.assert_allclose(rotate_quarter_turns([1.0, 0.0], -1), [0.0, 1.0], atol=1e-12)

    def test_half_and_full_turns(self):
        v = [3.0, -2.0]
        np.testing.assert_allclose(rotate_quarter_turns(v, 2), [-3.0, 2.0], atol=1e-12)
        np.testing.assert_allclose(rotate_quarter_turns(v, 4), v, atol=1e-12)

    def test_preserves_length(self):
        v = np.array([120.0, 35.0])
        rotated = rotate_quarter_turns(v, -1)
        assert np.linalg.norm(rotated) == pytest.approx(np.linalg.norm(v))
        assert float(rotated @ v) == pytest.approx(0.0, abs=1e-9)


class TestPolyline:
    """Test Polyline helpers."""

    def test_from_array_and_back(self):
        poly = Polyline.from_array(np.array([[0, 0], [10, 0], [10, 5]]))
        assert poly.points == ((0.0, 0.0), (10.0, 0.0), (10.0, 5.0))
        assert poly.as_array().shape == (3, 2)
        assert len(poly) == 3
        assert poly[1] == (10.0, 0.0)

    def test_is_closed(self):
        assert rectangle(10, 5).is_closed()
        assert not Polyline.from_array([[0, 0], [1, 0], [1, 1]]).is_closed()
        assert Polyline.from_array([[0, 0], [1, 0], [1e-9, 0]]).is_closed()

    def test_single_point_is_not_closed(self):
        assert not Polyline(points=((1.0, 1.0),)).is_closed()

    def test_closed_appends_first_point(self):
        poly = Polyline.from_array([[0, 0], [4, 0], [4, 3]]).closed()
        assert poly.is_closed()
        assert len(poly) == 4
        assert rectangle(2, 2).closed() == rectangle(2, 2)

    def test_bounds_and_size(self):
        poly = Polyline.from_array([[-5, 2], [7, -1], [3, 9]])
        assert poly.bounds == (-5.0, -1.0, 7.0, 9.0)
        assert poly.width == pytest.approx(12.0)
        assert poly.height == pytest.approx(10.0)

    def test_translated(self):
        poly = rectangle(10, 5).translated(100, -50)
        assert poly.bounds == (100.0, -50.0, 110.0, -45.0)

    def test_to_polygon(self):
        polygon = rectangle(200, 100).to_polygon()
        assert isinstance(polygon, Polygon)
        assert polygon.area == pytest.approx(20000.0)

    def test_polylines_compare_by_value(self):
        assert rectangle(3, 4) == rectangle(3, 4)
        assert rectangle(3, 4) != rectangle(4, 3)


class TestValidateGeometry:
    """Test outline sanity checks."""

    def test_rectangle_passes(self):
        assert rectangle(200, 100).validate_geometry() == []

    def test_open_outline_flagged(self):
        poly = Polyline.from_array([[0, 0], [10, 0], [10, 10], [0, 10]])
        issues = poly.validate_geometry()
        assert any("not closed" in issue for issue in issues)

    def test_bowtie_flagged(self):
        poly = Polyline.from_array([[0, 0], [10, 10], [10, 0], [0, 10], [0, 0]])
        issues = poly.validate_geometry()
        assert any("self-intersects" in issue for issue in issues)

    def test_too_few_points(self):
        issues = Polyline.from_array([[0, 0], [1, 1]]).validate_geometry()
        assert len(issues) == 1
