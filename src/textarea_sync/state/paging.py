"""Bounded text area content for screen readers."""

from __future__ import annotations

from typing import Protocol

from textarea_sync.model.range import EndOfLinePreference, Range, Selection

from .snapshot import TextAreaState


class SimpleModel(Protocol):
    """Read-only line model the pager needs; lines and columns are 1-based."""

    def get_line_count(self) -> int:
        ...

    def get_line_max_column(self, line_number: int) -> int:
        ...

    def get_value_in_range(self, range: Range, eol: EndOfLinePreference) -> str:
        ...


class PagedScreenReaderStrategy:
    """Expose one fixed-size page of lines around the selection.

    Assistive technology reads the whole text area, so only the page holding
    the selection's start line is written, keeping the payload independent of
    document size.
    """

    LINES_PER_PAGE = 10

    @classmethod
    def get_page_of_line(cls, line_number: int) -> int:
        return (line_number - 1) // cls.LINES_PER_PAGE

    @classmethod
    def get_range_for_page(cls, model: SimpleModel, page: int) -> Range:
        start_line = page * cls.LINES_PER_PAGE + 1
        end_line = min(start_line + cls.LINES_PER_PAGE - 1, model.get_line_count())
        return Range(start_line, 1, end_line, model.get_line_max_column(end_line))

    @classmethod
    def from_editor_selection(
        cls,
        previous_state: TextAreaState,
        model: SimpleModel,
        selection: Selection,
    ) -> TextAreaState:
        del previous_state  # pages depend on the model and selection only
        page_range = cls.get_range_for_page(
            model, cls.get_page_of_line(selection.start.line)
        )
        text = model.get_value_in_range(page_range, EndOfLinePreference.LF)
        if page_range.end_line < model.get_line_count():
            text += "\n"

        end = min(selection.end, page_range.end)
        pretext = model.get_value_in_range(
            Range.from_positions(page_range.start, selection.start),
            EndOfLinePreference.LF,
        )
        selected = model.get_value_in_range(
            Range.from_positions(selection.start, end), EndOfLinePreference.LF
        )
        return TextAreaState(text, len(pretext), len(pretext) + len(selected))


__all__ = ["PagedScreenReaderStrategy", "SimpleModel"]
