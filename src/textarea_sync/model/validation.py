"""Validation helpers shared across model services."""

from __future__ import annotations

from .document import LineDocument
from .range import Position


class DocumentValidationError(RuntimeError):
    """Raised when callers provide positions outside the document."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


def ensure_position(document: LineDocument, position: Position) -> Position:
    if position.line < 1 or position.line > document.get_line_count():
        raise DocumentValidationError("Line out of range", position=position)
    if position.column < 1 or position.column > document.get_line_max_column(
        position.line
    ):
        raise DocumentValidationError("Column out of range", position=position)
    return position
