"""Stacked area chart widget built on a pyqtgraph GraphicsView.

The view keeps pixel coordinates (1 scene unit = 1 pixel, y down), so the
geometry computed by ChartEngine is placed into the scene as is.
"""

import logging
from typing import Callable, Optional, Sequence

import pyqtgraph as pg
from PySide6.QtCore import QPointF, Qt, QTimer, Signal
from PySide6.QtGui import QPainterPath
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsLineItem,
    QGraphicsPathItem,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from whalewatch.domain.models import PointerSample, RawPoint, RawPricePoint
from whalewatch.domain.settings import ChartSettings, ViewportSettings
from whalewatch.services.axes import AxisRenderer
from whalewatch.services.engine import ChartEngine, ChartScene
from whalewatch.services.scales import AxisKey
from whalewatch.services.formatting import tooltip_rows
from whalewatch.state.chart_state import ChartState
from whalewatch.state.pointer import PointerController
from whalewatch.ui.components.axis import DateAxis, ValueAxisItem
from whalewatch.ui.components.painter import to_painter_path
from whalewatch.ui.components.tooltip import ChartTooltip
from whalewatch.ui.theme.engine import get_theme_engine

logger = logging.getLogger(__name__)

# Configure pyqtgraph defaults
pg.setConfigOptions(antialias=True)

MoveCallback = Callable[[PointerSample], None]


class ChartCanvas(pg.GraphicsView):
    """Pixel-space graphics view that reports pointer enter/leave.

    Acts as the PointerSource of the chart: move callbacks are connected to
    the scene's sigMouseMoved only while the controller asks for them.
    """

    sigPointerEntered = Signal()
    sigPointerLeft = Signal()

    def __init__(self, parent: Optional[QWidget] = None, background: str = "default"):
        super().__init__(parent, background=background)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self._move_slots: dict[MoveCallback, Callable[[QPointF], None]] = {}

    def enterEvent(self, ev) -> None:
        super().enterEvent(ev)
        self.sigPointerEntered.emit()

    def leaveEvent(self, ev) -> None:
        super().leaveEvent(ev)
        self.sigPointerLeft.emit()

    @property
    def move_listener_count(self) -> int:
        return len(self._move_slots)

    def sample_at(self, scene_pos: QPointF) -> PointerSample:
        """Pointer sample for a scene position (absolute + local)."""
        global_pos = self.mapToGlobal(self.mapFromScene(scene_pos))
        return PointerSample(
            screen_x=global_pos.x(),
            screen_y=global_pos.y(),
            local_x=scene_pos.x(),
            local_y=scene_pos.y(),
        )

    def connect_move(self, callback: MoveCallback) -> None:
        if callback in self._move_slots:
            return

        def slot(scene_pos: QPointF) -> None:
            callback(self.sample_at(scene_pos))

        self._move_slots[callback] = slot
        self.scene().sigMouseMoved.connect(slot)

    def disconnect_move(self, callback: MoveCallback) -> None:
        slot = self._move_slots.pop(callback, None)
        if slot is not None:
            self.scene().sigMouseMoved.disconnect(slot)


class WhaleWatchChart(QWidget):
    """Stacked circulating/bank area chart with crosshair and tooltip.

    Example:
        >>> chart = WhaleWatchChart()
        >>> chart.set_data(raw_points)
        >>> chart.show()
    """

    def __init__(
        self,
        settings: Optional[ChartSettings] = None,
        state: Optional[ChartState] = None,
        parent: Optional[QWidget] = None,
    ):
        """Initialize chart.

        Args:
            settings: Chart tuning (viewport, headroom, hit radius, frame rate)
            state: Shared chart state; a private one is created if omitted
            parent: Parent widget
        """
        super().__init__(parent)
        self.settings = settings or ChartSettings()
        self.state = state or ChartState()
        if state is None:
            self.state.viewport.set(self.settings.viewport)

        self.engine = ChartEngine(self.settings)
        self.scene_data: Optional[ChartScene] = None
        self._markers: list[QGraphicsEllipseItem] = []
        self._torn_down = False
        self._setup_ui()

        self.controller = PointerController(self.state, self.canvas, self.settings.hit_radius)

        # One pointer update per display frame while the pointer is inside
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(max(1, round(1000 / self.settings.frame_rate)))
        self._frame_timer.timeout.connect(self.controller.on_frame)

        self.canvas.sigPointerEntered.connect(self._on_pointer_entered)
        self.canvas.sigPointerLeft.connect(self._on_pointer_left)

        # The state may be shared and outlive this widget; teardown() undoes these
        self._subscriptions = [
            (self.state.raw_points, self.state.raw_points.subscribe(self._on_input_changed)),
            (self.state.raw_prices, self.state.raw_prices.subscribe(self._on_input_changed)),
            (self.state.viewport, self.state.viewport.subscribe(self._on_input_changed)),
            (self.state.pointer, self.state.pointer.subscribe(self._on_pointer_changed)),
            (self.state.hovered, self.state.hovered.subscribe(self._on_hovered_changed)),
        ]

    def _setup_ui(self) -> None:
        """Set up the scene items."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

        theme = get_theme_engine()
        self.canvas = ChartCanvas(self, background=theme.get_color('canvas'))
        layout.addWidget(self.canvas)
        scene = self.canvas.scene()

        self._bank_item = QGraphicsPathItem()
        self._circulating_item = QGraphicsPathItem()
        self._price_item = QGraphicsPathItem()
        for z, item in enumerate((self._bank_item, self._circulating_item, self._price_item)):
            item.setZValue(z)
            scene.addItem(item)

        self._x_axis_item = DateAxis()
        self._y_axis_item = ValueAxisItem('left')
        self._price_axis_item = ValueAxisItem('right')
        for item in (self._x_axis_item, self._y_axis_item, self._price_axis_item):
            item.setZValue(20)
            scene.addItem(item)
        self._price_axis_item.hide()

        # Each axis is bound once to its persistent scale
        self.x_axis_renderer = AxisRenderer(
            self.engine.scale(AxisKey.DATE), self._x_axis_item, 'date axis'
        )
        self.y_axis_renderer = AxisRenderer(
            self.engine.scale(AxisKey.VALUE), self._y_axis_item, 'value axis'
        )
        self.price_axis_renderer = AxisRenderer(
            self.engine.scale(AxisKey.PRICE), self._price_axis_item, 'price axis'
        )

        self._hover_lines = (QGraphicsLineItem(), QGraphicsLineItem())
        for line in self._hover_lines:
            line.setZValue(100)
            line.setVisible(False)
            scene.addItem(line)

        self.tooltip = ChartTooltip()
        self.tooltip.hide()

        self._apply_item_colors()

    def _apply_item_colors(self) -> None:
        theme = get_theme_engine()
        self._bank_item.setPen(pg.mkPen(theme.get_color('bank_stroke'), width=1.5))
        self._bank_item.setBrush(pg.mkBrush(theme.get_color('bank_fill')))
        self._circulating_item.setPen(pg.mkPen(theme.get_color('circulating_stroke'), width=1.5))
        self._circulating_item.setBrush(pg.mkBrush(theme.get_color('circulating_fill')))
        self._price_item.setPen(pg.mkPen(theme.get_color('price_line'), width=1.5))
        hover_pen = pg.mkPen(theme.get_color('hover_line'), width=1, style=Qt.DashLine)
        for line in self._hover_lines:
            line.setPen(hover_pen)
        self._x_axis_item.apply_color(theme.get_color('axis'))
        self._y_axis_item.apply_color(theme.get_color('axis'))
        self._price_axis_item.apply_color(theme.get_color('price_line'))

    def refresh_theme(self) -> None:
        """Refresh chart colors based on current theme."""
        theme = get_theme_engine()
        self.canvas.setBackground(theme.get_color('canvas'))
        self._apply_item_colors()
        self.tooltip.refresh_theme()
        self.redraw()

    def set_data(
        self,
        raw_points: Sequence[RawPoint],
        raw_prices: Optional[Sequence[RawPricePoint]] = None,
    ) -> None:
        """Replace the chart data.

        Args:
            raw_points: Primary series sorted by date
            raw_prices: Optional price overlay series
        """
        self.state.raw_prices.set(list(raw_prices or []))
        self.state.raw_points.set(list(raw_points))

    def set_viewport(self, viewport: ViewportSettings) -> None:
        """Resize the chart surface."""
        self.state.viewport.set(viewport)

    def redraw(self) -> None:
        """Recompute geometry and update the scene items."""
        if self._torn_down:
            return
        viewport = self.state.viewport.value
        self.canvas.setFixedSize(int(viewport.width), int(viewport.height))

        raw_points = self.state.raw_points.value
        if not raw_points:
            self._clear_geometry()
            return

        scene = self.engine.render(raw_points, viewport, self.state.raw_prices.value)
        self.scene_data = scene

        self._bank_item.setPath(to_painter_path(scene.geometry.bank_path))
        self._circulating_item.setPath(to_painter_path(scene.geometry.circulating_path))
        self._rebuild_markers(scene)

        margin = viewport.margin
        self.x_axis_renderer.render(y=viewport.height - margin.bottom)
        self.y_axis_renderer.render(x=margin.left)

        has_prices = scene.price_path is not None
        self._price_item.setVisible(has_prices)
        if has_prices:
            self._price_item.setPath(to_painter_path(scene.price_path))
            if not self._price_axis_item.isVisible():
                # show() restores the width hide() collapsed
                self._price_axis_item.show()
                self.price_axis_renderer.invalidate()
            self.price_axis_renderer.render(x=viewport.width - margin.right)
        else:
            self._price_item.setPath(QPainterPath())
            self._price_axis_item.hide()

        self.controller.set_ranges(scene.date_range, scene.value_range)
        self.controller.set_points(scene.points)
        self._update_crosshair()
        self._update_tooltip()

    def _clear_geometry(self) -> None:
        self.scene_data = None
        empty = QPainterPath()
        for item in (self._bank_item, self._circulating_item, self._price_item):
            item.setPath(empty)
        self._rebuild_markers(None)
        self.controller.set_points([])

    def _rebuild_markers(self, scene: Optional[ChartScene]) -> None:
        canvas_scene = self.canvas.scene()
        for marker in self._markers:
            canvas_scene.removeItem(marker)
        self._markers = []
        if scene is None:
            return

        theme = get_theme_engine()
        r = self.settings.marker_radius
        fill = pg.mkBrush(theme.get_color('marker_fill'))
        pens = (
            pg.mkPen(theme.get_color('circulating_stroke'), width=1.5),
            pg.mkPen(theme.get_color('bank_stroke'), width=1.5),
        )
        for point in scene.points:
            for y, pen in zip((point.circulating_y, point.bank_jewel_y), pens):
                marker = QGraphicsEllipseItem(point.x - r, y - r, 2 * r, 2 * r)
                marker.setPen(pen)
                marker.setBrush(fill)
                marker.setZValue(10)
                canvas_scene.addItem(marker)
                self._markers.append(marker)

    @property
    def marker_count(self) -> int:
        return len(self._markers)

    @property
    def crosshair_visible(self) -> bool:
        return all(line.isVisible() for line in self._hover_lines)

    def _on_pointer_entered(self) -> None:
        self.controller.enter()
        self._frame_timer.start()

    def _on_pointer_left(self) -> None:
        self._frame_timer.stop()
        self.controller.leave()

    def _on_input_changed(self, _value) -> None:
        self.redraw()

    def _on_hovered_changed(self, _point) -> None:
        self._update_tooltip()

    def _on_pointer_changed(self, _sample: Optional[PointerSample]) -> None:
        self._update_crosshair()
        self._update_tooltip()

    def _update_crosshair(self) -> None:
        crosshair = self.controller.crosshair()
        horizontal, vertical = self._hover_lines
        if crosshair is None:
            horizontal.setVisible(False)
            vertical.setVisible(False)
            return
        horizontal.setLine(*crosshair.horizontal)
        vertical.setLine(*crosshair.vertical)
        horizontal.setVisible(True)
        vertical.setVisible(True)

    def _update_tooltip(self) -> None:
        anchor = self.controller.tooltip()
        if anchor is None:
            self.tooltip.hide()
            return
        price = self.scene_data.price_on(anchor.point.date) if self.scene_data else None
        self.tooltip.show_rows(tooltip_rows(anchor.point, price), anchor.screen_x, anchor.screen_y)

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def teardown(self) -> None:
        """Stop listening and release the persistent scales."""
        if self._torn_down:
            return
        self._torn_down = True
        self._frame_timer.stop()
        for observable, listener in self._subscriptions:
            observable.unsubscribe(listener)
        self._subscriptions = []
        self.controller.teardown()
        self.tooltip.close()
        self.engine.close()
        logger.debug("Chart torn down")

    def closeEvent(self, event) -> None:
        self.teardown()
        super().closeEvent(event)
