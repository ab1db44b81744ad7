"""Text area snapshots, input deduction and screen reader paging."""

from .widget import TextAreaWrapper, Utf16TextAreaWrapper
from .snapshot import TextAreaState, TextAreaStateError
from .diff import TextDiff, TypeData, deduce_input
from .paging import PagedScreenReaderStrategy, SimpleModel

__all__ = [
    "TextAreaWrapper",
    "Utf16TextAreaWrapper",
    "TextAreaState",
    "TextAreaStateError",
    "TextDiff",
    "TypeData",
    "deduce_input",
    "PagedScreenReaderStrategy",
    "SimpleModel",
]
