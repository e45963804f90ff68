"""Tests for the chart widget."""

import pytest
from datetime import datetime, timezone

import pyqtgraph as pg
from PySide6.QtCore import QPointF

from whalewatch.domain.settings import ChartSettings, ViewportSettings
from whalewatch.services.scales import AxisKey
from whalewatch.state.chart_state import ChartState
from whalewatch.ui.components.axis import ValueAxisItem
from whalewatch.ui.components.chart import WhaleWatchChart
from whalewatch.ui.theme.engine import Theme, get_theme_engine


@pytest.fixture
def chart(qtbot, small_viewport):
    chart = WhaleWatchChart(ChartSettings(viewport=small_viewport))
    qtbot.addWidget(chart)
    return chart


def move_to(chart, x, y):
    """Deliver a scene move event and run one display frame."""
    chart.canvas.scene().sigMouseMoved.emit(QPointF(x, y))
    chart.controller.on_frame()


class TestRendering:
    """Tests for drawing the chart."""

    def test_markers_per_point(self, chart, two_day_points):
        """Each point gets a circulating and a combined marker."""
        chart.set_data(two_day_points)
        assert chart.marker_count == 4

    def test_value_axis_follows_scale(self, chart, two_day_points):
        """The left axis spans the plot height and shows the inverted domain."""
        chart.set_data(two_day_points)

        y_axis = chart.y_axis_renderer.surface
        assert isinstance(y_axis, pg.AxisItem)
        assert y_axis.range == pytest.approx([0, 345])
        assert (y_axis.pos().x(), y_axis.pos().y()) == (0, 20)
        assert y_axis.size().height() == pytest.approx(260)

    def test_date_axis_follows_scale(self, chart, two_day_points):
        """The bottom axis is a UTC date axis across the plot width."""
        chart.set_data(two_day_points)

        x_axis = chart.x_axis_renderer.surface
        assert isinstance(x_axis, pg.DateAxisItem)
        assert x_axis.utcOffset == 0
        assert x_axis.range == [
            datetime(2021, 1, 1, tzinfo=timezone.utc).timestamp(),
            datetime(2021, 1, 2, tzinfo=timezone.utc).timestamp(),
        ]
        assert (x_axis.pos().x(), x_axis.pos().y()) == (65, 280)
        assert x_axis.size().width() == pytest.approx(315)

    def test_axes_bound_to_engine_scales(self, chart, two_day_points, small_viewport):
        """Renders keep pushing into the same scale objects the axes hold."""
        chart.set_data(two_day_points)
        chart.set_viewport(ViewportSettings(width=500, height=400, margin=small_viewport.margin))

        assert chart.y_axis_renderer.scale is chart.engine.scale(AxisKey.VALUE)
        assert chart.y_axis_renderer.surface.size().height() == pytest.approx(360)

    def test_value_labels_group_thousands(self, qtbot):
        """Numeric labels use thousands separators and step precision."""
        axis = ValueAxisItem('left')
        assert axis.tickStrings([0, 1_000_000, 2_000_000], 1.0, 1_000_000) == [
            "0",
            "1,000,000",
            "2,000,000",
        ]
        assert axis.tickStrings([0.2, 0.4], 1.0, 0.2) == ["0.2", "0.4"]

    def test_canvas_follows_viewport(self, chart, two_day_points):
        """Changing the viewport resizes the surface and moves the x axis."""
        chart.set_data(two_day_points)
        chart.set_viewport(ViewportSettings(width=500, height=400))

        assert chart.canvas.width() == 500
        assert chart.canvas.height() == 400
        assert chart.x_axis_renderer.surface.pos().y() == 380

    def test_price_axis_only_with_prices(self, chart, two_day_points, two_day_prices):
        """The price overlay and its axis appear only when prices exist."""
        chart.set_data(two_day_points)
        assert not chart.price_axis_renderer.surface.isVisible()

        chart.set_data(two_day_points, two_day_prices)
        assert chart.price_axis_renderer.surface.isVisible()
        assert chart.price_axis_renderer.surface.pos().x() == 380

    def test_empty_data_clears_chart(self, chart, two_day_points):
        """No points means no markers and no scene."""
        chart.set_data(two_day_points)
        chart.set_data([])

        assert chart.marker_count == 0
        assert chart.scene_data is None

    def test_refresh_theme(self, chart, two_day_points):
        """Theme switches redraw without errors."""
        chart.set_data(two_day_points)
        theme = get_theme_engine()
        try:
            theme.set_theme(Theme.LIGHT)
            chart.refresh_theme()
            assert chart.marker_count == 4
        finally:
            theme.set_theme(Theme.DARK)


class TestInteraction:
    """Tests for pointer tracking through the widget."""

    def test_listener_attached_while_inside(self, chart, two_day_points):
        """Enter attaches exactly one move listener, leave removes it."""
        chart.set_data(two_day_points)
        assert chart.canvas.move_listener_count == 0

        chart.canvas.sigPointerEntered.emit()
        chart.canvas.sigPointerEntered.emit()
        assert chart.canvas.move_listener_count == 1

        chart.canvas.sigPointerLeft.emit()
        assert chart.canvas.move_listener_count == 0

    def test_crosshair_follows_pointer(self, chart, two_day_points):
        """Inside the plot the guide lines are shown."""
        chart.set_data(two_day_points)
        chart.canvas.sigPointerEntered.emit()

        move_to(chart, 200, 150)

        assert chart.crosshair_visible
        assert not chart.tooltip.isVisible()

    def test_crosshair_hidden_left_of_plot(self, chart, two_day_points):
        chart.set_data(two_day_points)
        chart.canvas.sigPointerEntered.emit()

        move_to(chart, 30, 150)

        assert not chart.crosshair_visible

    def test_hover_shows_tooltip(self, chart, two_day_points, two_day_prices):
        """Hovering a marker shows the point's rows plus its price."""
        chart.set_data(two_day_points, two_day_prices)
        chart.canvas.sigPointerEntered.emit()
        first = chart.scene_data.points[0]

        move_to(chart, first.x, first.circulating_y)

        assert chart.tooltip.isVisible()
        rows = chart.tooltip.rows()
        assert rows[0] == ("Date:", "Friday, January 1st, 2021")
        assert rows[-1] == ("Price:", "8.5")

    def test_leave_clears_interaction(self, chart, two_day_points):
        """Leaving mid-hover hides the crosshair and the tooltip."""
        chart.set_data(two_day_points)
        chart.canvas.sigPointerEntered.emit()
        first = chart.scene_data.points[0]
        move_to(chart, first.x, first.circulating_y)

        chart.canvas.sigPointerLeft.emit()

        assert not chart.crosshair_visible
        assert not chart.tooltip.isVisible()
        assert chart.state.pointer.value is None
        assert chart.state.hovered.value is None

    def test_moves_ignored_after_leave(self, chart, two_day_points):
        """Scene moves after leaving do not reach the state."""
        chart.set_data(two_day_points)
        chart.canvas.sigPointerEntered.emit()
        chart.canvas.sigPointerLeft.emit()

        move_to(chart, 200, 150)

        assert chart.state.pointer.value is None

    def test_teardown_detaches(self, chart, two_day_points):
        chart.set_data(two_day_points)
        chart.canvas.sigPointerEntered.emit()

        chart.teardown()

        assert chart.canvas.move_listener_count == 0
        assert not chart.controller.tracking


class TestTeardown:
    """Tests for releasing a chart whose state lives on."""

    def test_shared_state_no_longer_redraws(self, qtbot, small_viewport, two_day_points, make_raw_point):
        """State changes after teardown leave the old chart and its scales alone."""
        state = ChartState()
        state.viewport.set(small_viewport)
        chart = WhaleWatchChart(ChartSettings(viewport=small_viewport), state=state)
        qtbot.addWidget(chart)
        chart.set_data(two_day_points)
        scene = chart.scene_data
        bound = chart.y_axis_renderer.scale
        dependencies = bound.dependencies()

        chart.teardown()
        state.raw_points.set(
            [make_raw_point(date=d) for d in ("2021-01-01", "2021-01-02", "2021-01-03")]
        )
        state.viewport.set(ViewportSettings(width=500, height=400))

        assert chart.torn_down
        assert chart.scene_data is scene
        assert chart.marker_count == 4
        assert AxisKey.VALUE not in chart.engine.scales
        assert bound.dependencies() == dependencies

    def test_new_chart_takes_over_shared_state(self, qtbot, small_viewport, two_day_points):
        """A replacement chart on the same state renders alone."""
        state = ChartState()
        state.viewport.set(small_viewport)
        old = WhaleWatchChart(ChartSettings(viewport=small_viewport), state=state)
        qtbot.addWidget(old)
        old.teardown()

        new = WhaleWatchChart(ChartSettings(viewport=small_viewport), state=state)
        qtbot.addWidget(new)
        new.set_data(two_day_points)

        assert new.marker_count == 4
        assert old.marker_count == 0
        assert old.scene_data is None

    def test_teardown_twice(self, chart):
        chart.teardown()
        chart.teardown()
        assert chart.engine.closed
