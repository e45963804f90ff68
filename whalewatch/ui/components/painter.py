"""Conversion of path descriptions to Qt painter paths."""

from PySide6.QtGui import QPainterPath

from whalewatch.services.paths import CLOSE, LINE, MOVE, PathDescription


def to_painter_path(description: PathDescription) -> QPainterPath:
    """Replay a PathDescription into a QPainterPath."""
    path = QPainterPath()
    for command, args in description.commands:
        if command == MOVE:
            path.moveTo(*args)
        elif command == LINE:
            path.lineTo(*args)
        elif command == CLOSE:
            path.closeSubpath()
    return path
