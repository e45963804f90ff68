"""Tests for the path builder."""

import pytest

from whalewatch.services.bounds import compute_bounds
from whalewatch.services.paths import PathDescription, build_geometry, build_price_path
from whalewatch.services.scales import LinearScale, TimeScale
from whalewatch.services.transform import transform_points, transform_prices


def _geometry(raw_points, viewport):
    points = transform_points(raw_points)
    bounds = compute_bounds(points, viewport)
    x_scale = TimeScale(bounds.date_domain, bounds.date_range)
    y_scale = LinearScale(bounds.value_domain, bounds.value_range)
    return build_geometry(points, x_scale, y_scale, bounds.date_range, bounds.value_range), x_scale


class TestPathDescription:
    """Tests for PathDescription."""

    def test_svg_string(self):
        """str() renders SVG path data."""
        path = PathDescription()
        path.move_to(65, 230.5)
        path.line_to(380, 200.25)
        path.close_path()
        assert str(path) == "M65,230.5L380,200.25Z"

    def test_open_path_is_not_closed(self):
        """A path without a close command is open."""
        path = PathDescription()
        path.move_to(0, 0)
        path.line_to(1, 1)
        assert not path.is_closed

    def test_every_subpath_must_be_closed(self):
        """One open subpath makes the whole path open."""
        path = PathDescription()
        path.move_to(0, 0)
        path.line_to(1, 1)
        path.close_path()
        path.move_to(5, 5)
        path.line_to(6, 6)
        assert not path.is_closed

    def test_empty_path(self):
        """An empty path is falsy and not closed."""
        path = PathDescription()
        assert not path
        assert not path.is_closed
        assert str(path) == ""


class TestBuildGeometry:
    """Tests for build_geometry."""

    def test_two_day_scenario(self, two_day_points, small_viewport):
        """Two points with strictly increasing x and stacked y values."""
        geometry, _ = _geometry(two_day_points, small_viewport)
        first, second = geometry.points

        assert first.x == pytest.approx(65)
        assert second.x == pytest.approx(380)
        assert first.x < second.x
        # Combined band sits above (smaller y) the circulating band
        assert first.bank_jewel_y < first.circulating_y
        assert second.bank_jewel_y < second.circulating_y

    def test_pixel_values(self, two_day_points, small_viewport):
        """Pixels follow the inverted value scale."""
        geometry, _ = _geometry(two_day_points, small_viewport)
        first = geometry.points[0]
        # 20 + (345 - 50) / 345 * 260
        assert first.circulating_y == pytest.approx(20 + 295 / 345 * 260)
        assert first.bank_jewel_y == pytest.approx(20 + 95 / 345 * 260)

    def test_paths_are_closed_along_the_bottom(self, two_day_points, small_viewport):
        """Both bands close through the bottom-right and bottom-left corners."""
        geometry, _ = _geometry(two_day_points, small_viewport)
        for path in (geometry.circulating_path, geometry.bank_path):
            assert path.is_closed
            vertices = path.vertices()
            assert vertices[-2] == (380, 280)
            assert vertices[-1] == (65, 280)
            assert path.commands[0][0] == "M"
            assert path.commands[-1][0] == "Z"

    def test_paths_follow_points(self, two_day_points, small_viewport):
        """Path vertices are the placed points in order."""
        geometry, _ = _geometry(two_day_points, small_viewport)
        circulating = geometry.circulating_path.vertices()
        bank = geometry.bank_path.vertices()
        for index, point in enumerate(geometry.points):
            assert circulating[index] == (point.x, point.circulating_y)
            assert bank[index] == (point.x, point.bank_jewel_y)

    def test_x_is_monotonic(self, make_raw_point, small_viewport):
        """Sorted dates give non-decreasing x."""
        raw = [make_raw_point(date=d) for d in ("2021-01-01", "2021-01-01", "2021-01-05", "2021-02-01")]
        geometry, _ = _geometry(raw, small_viewport)
        xs = [p.x for p in geometry.points]
        assert xs == sorted(xs)

    def test_single_point_gives_degenerate_closed_polygon(self, make_raw_point, small_viewport):
        """One point still closes into a valid polygon."""
        geometry, _ = _geometry([make_raw_point()], small_viewport)
        assert len(geometry.points) == 1
        point = geometry.points[0]
        assert point.x == pytest.approx(222.5)

        for path in (geometry.circulating_path, geometry.bank_path):
            assert path.is_closed
            assert len(path.vertices()) == 3

    def test_no_points_gives_empty_paths(self):
        """Empty input produces empty geometry instead of failing."""
        geometry = build_geometry([], TimeScale(), LinearScale(), (0, 1), (0, 1))
        assert geometry.points == []
        assert not geometry.circulating_path
        assert not geometry.bank_path


class TestBuildPricePath:
    """Tests for build_price_path."""

    def test_no_prices_give_empty_line(self, two_day_points, small_viewport):
        """An empty price series gives an empty path."""
        _, x_scale = _geometry(two_day_points, small_viewport)
        prices = transform_prices([])
        path, placed = build_price_path(prices, x_scale, LinearScale((10, 0), (20, 280)))
        assert placed == []
        assert not path

    def test_price_points_are_placed(self, two_day_points, two_day_prices, small_viewport):
        """Each price gets x from the shared date scale and y from its own scale."""
        _, x_scale = _geometry(two_day_points, small_viewport)
        price_scale = LinearScale((10, 0), (20, 280))
        path, placed = build_price_path(transform_prices(two_day_prices), x_scale, price_scale)
        assert len(placed) == 1
        assert placed[0].x == pytest.approx(65)
        assert placed[0].y == pytest.approx(price_scale(8.5))
        assert not path.is_closed
