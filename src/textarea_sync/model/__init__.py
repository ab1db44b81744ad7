"""Reference line model and the buffer that consumes deduced input."""

from .range import EndOfLinePreference, Position, Range, Selection
from .document import LineDocument
from .validation import DocumentValidationError, ensure_position
from .buffer import BufferDelta, EditBuffer

__all__ = [
    "EndOfLinePreference",
    "Position",
    "Range",
    "Selection",
    "LineDocument",
    "DocumentValidationError",
    "ensure_position",
    "BufferDelta",
    "EditBuffer",
]
