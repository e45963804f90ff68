"""Tests for converting path descriptions into Qt painter paths."""

from whalewatch.services.paths import PathDescription
from whalewatch.ui.components.painter import to_painter_path


class TestPainterPath:
    """Tests for to_painter_path."""

    def test_closed_band(self):
        """A closed description gives a closed Qt path with the same extent."""
        description = PathDescription()
        description.move_to(65, 100)
        description.line_to(380, 50)
        description.line_to(380, 280)
        description.line_to(65, 280)
        description.close_path()

        path = to_painter_path(description)

        rect = path.boundingRect()
        assert (rect.left(), rect.top(), rect.right(), rect.bottom()) == (65, 50, 380, 280)
        assert (path.currentPosition().x(), path.currentPosition().y()) == (65, 100)

    def test_empty(self):
        assert to_painter_path(PathDescription()).isEmpty()

    def test_subpaths_are_kept(self):
        """Each move starts a new subpath in the Qt path."""
        description = PathDescription()
        description.move_to(0, 0)
        description.line_to(10, 0)
        description.move_to(0, 5)
        description.line_to(10, 5)

        path = to_painter_path(description)

        assert len(path.toSubpathPolygons()) == 2
