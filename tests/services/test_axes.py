"""Tests for dependency-keyed axis updates."""

from datetime import datetime, timezone

from whalewatch.services.axes import AxisRenderer
from whalewatch.services.scales import AxisKey, LinearScale, ScaleRegistry, TimeScale


class RecordingSurface:
    """AxisSurface that records calls."""

    def __init__(self):
        self.scales = []
        self.moves = []

    def set_scale(self, domain, pixel_range):
        self.scales.append((domain, pixel_range))

    def move_to(self, x, y):
        self.moves.append((x, y))


class TestAxisRenderer:
    """Tests for AxisRenderer."""

    def test_first_render_pushes_scale(self):
        """The first render pushes domain and range and positions the surface."""
        surface = RecordingSurface()
        renderer = AxisRenderer(LinearScale((345, 0), (20, 280)), surface)

        assert renderer.render(x=65) is True
        assert surface.scales == [((345.0, 0.0), (20.0, 280.0))]
        assert surface.moves == [(65, 0)]

    def test_dates_are_pushed_as_timestamps(self):
        """A time scale reaches the surface as POSIX seconds."""
        surface = RecordingSurface()
        scale = TimeScale(
            (datetime(2021, 1, 1, tzinfo=timezone.utc), datetime(2021, 1, 2, tzinfo=timezone.utc)),
            (65, 380),
        )
        AxisRenderer(scale, surface).render(y=280)
        assert surface.scales == [((1609459200.0, 1609545600.0), (65.0, 380.0))]

    def test_unchanged_dependencies_skip_update(self):
        """Rendering again without scale changes does nothing."""
        surface = RecordingSurface()
        renderer = AxisRenderer(LinearScale((345, 0), (20, 280)), surface)
        renderer.render(x=65)

        assert renderer.render(x=65) is False
        assert len(surface.scales) == 1
        assert len(surface.moves) == 1

    def test_scale_update_triggers_push(self):
        """Changing any of the four bounds pushes the scale again."""
        registry = ScaleRegistry()
        scale = registry.update(AxisKey.VALUE, (345, 0), (20, 280))
        surface = RecordingSurface()
        renderer = AxisRenderer(scale, surface)
        renderer.render(x=65)

        registry.update(AxisKey.VALUE, (345, 0), (20, 620))
        assert renderer.render(x=65) is True
        assert renderer.dependencies == (345, 0, 20, 620)
        assert surface.scales[-1] == ((345.0, 0.0), (20.0, 620.0))
        assert renderer.scale is registry.get(AxisKey.VALUE)

    def test_translation_does_not_push(self):
        """Moving the axis only repositions the surface."""
        surface = RecordingSurface()
        renderer = AxisRenderer(LinearScale((0, 1), (65, 380)), surface)
        renderer.render(y=280)

        assert renderer.render(y=620) is False
        assert surface.moves == [(0, 280), (0, 620)]
        assert len(surface.scales) == 1

    def test_invalidate_forces_push(self):
        """invalidate() makes the next render push the scale."""
        surface = RecordingSurface()
        renderer = AxisRenderer(LinearScale((345, 0), (20, 280)), surface)
        renderer.render()
        renderer.invalidate()
        assert renderer.render() is True
        assert len(surface.scales) == 2
