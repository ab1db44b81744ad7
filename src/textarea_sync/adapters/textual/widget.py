"""Expose a Textual ``TextArea`` through the text area capability."""

from __future__ import annotations

from textual.widgets import TextArea
from textual.widgets.text_area import Selection as TextualSelection

from textarea_sync.runtime import telemetry
from textarea_sync.state.widget import clamp_offset


class TextualTextAreaWrapper:
    """Offset-based view of a ``TextArea``, whose API speaks (row, column).

    Textual keeps the selection as anchor/cursor, so a backwards selection is
    reported with ``start <= end`` like a native widget would.
    """

    def __init__(self, text_area: TextArea) -> None:
        self.text_area = text_area
        self.logger = telemetry.get_logger("textarea_sync.adapters.textual")

    def _offsets(self) -> tuple[int, int]:
        document = self.text_area.document
        selection = self.text_area.selection
        anchor = document.get_index_from_location(selection.start)
        cursor = document.get_index_from_location(selection.end)
        return min(anchor, cursor), max(anchor, cursor)

    def get_value(self) -> str:
        return self.text_area.text

    def set_value(self, reason: str, value: str) -> None:
        self.logger.debug(f"set_value reason={reason} length={len(value)}")
        self.text_area.load_text(value)

    def get_selection_start(self) -> int:
        return self._offsets()[0]

    def get_selection_end(self) -> int:
        return self._offsets()[1]

    def set_selection_range(self, reason: str, start: int, end: int) -> None:
        value = self.text_area.text
        start = clamp_offset(value, start)
        end = clamp_offset(value, end)
        self.logger.debug(f"set_selection_range reason={reason} start={start} end={end}")
        document = self.text_area.document
        self.text_area.selection = TextualSelection(
            document.get_location_from_index(start),
            document.get_location_from_index(end),
        )


__all__ = ["TextualTextAreaWrapper"]
