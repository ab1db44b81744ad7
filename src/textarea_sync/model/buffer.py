"""Structured buffer that consumes edits deduced from the text area."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from textarea_sync.runtime import telemetry
from textarea_sync.state.diff import TypeData

from .document import LineDocument
from .range import EndOfLinePreference, Range, Selection
from .validation import ensure_position


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selection: Selection
    label: str


class EditBuffer:
    """Document plus selection; applies ``TypeData`` the way a caret would.

    Offsets exchanged with the text area count a line break as one
    character, so edits are resolved against LF-joined text whatever the
    document's own separator.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[LineDocument] = None,
        selection: Optional[Selection] = None,
    ) -> None:
        self.name = name
        self.document = document or LineDocument()
        self.selection = selection or Selection(1, 1, 1, 1)

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "EditBuffer":
        return cls(name=name, document=LineDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    def set_selection(self, selection: Selection) -> None:
        ensure_position(self.document, selection.anchor)
        ensure_position(self.document, selection.cursor)
        self.selection = selection

    def type(self, data: TypeData) -> BufferDelta:
        """Replace the selection plus ``replace_char_cnt`` prior characters."""

        with telemetry.span(
            "buffer::type",
            component="buffer",
            metadata={"buffer": self.name, "replace": data.replace_char_cnt},
        ):
            start = self.document.get_offset_at(
                self.selection.start, EndOfLinePreference.LF
            )
            start = max(0, start - data.replace_char_cnt)
            replaced = Range.from_positions(
                self.document.get_position_at(start, EndOfLinePreference.LF),
                self.selection.end,
            )
            self.document = self.document.replace(replaced, data.text)
            caret = self.document.get_position_at(
                start + len(data.text), EndOfLinePreference.LF
            )
            self.selection = Selection.collapsed(caret)

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            selection=self.selection,
            label="type",
        )

    # Read-only line model, so the screen reader pager can consume a buffer.

    def get_line_count(self) -> int:
        return self.document.get_line_count()

    def get_line_max_column(self, line_number: int) -> int:
        return self.document.get_line_max_column(line_number)

    def get_value_in_range(
        self, range: Range, eol: EndOfLinePreference = EndOfLinePreference.TEXT_DEFINED
    ) -> str:
        return self.document.get_value_in_range(range, eol)


__all__ = ["BufferDelta", "EditBuffer"]
