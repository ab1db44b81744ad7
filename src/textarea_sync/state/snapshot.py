"""Immutable snapshots of a native text area's value and selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from .widget import TextAreaWrapper


class TextAreaStateError(RuntimeError):
    """Raised when a snapshot is built from offsets outside its value."""

    def __init__(self, message: str, *, state: tuple[str, int, int]) -> None:
        super().__init__(message)
        self.state = state


@dataclass(frozen=True, slots=True)
class TextAreaState:
    """What the text area showed at one instant: text plus selection.

    Offsets are ``str`` indices into ``value``. A state never changes; every
    transformation returns a new instance.
    """

    value: str
    selection_start: int
    selection_end: int

    EMPTY: ClassVar["TextAreaState"]

    def __post_init__(self) -> None:
        if not 0 <= self.selection_start <= self.selection_end <= len(self.value):
            raise TextAreaStateError(
                f"Selection [{self.selection_start}, {self.selection_end}] "
                f"does not fit a value of length {len(self.value)}",
                state=(self.value, self.selection_start, self.selection_end),
            )

    @classmethod
    def from_textarea(cls, textarea: TextAreaWrapper) -> "TextAreaState":
        return cls(
            textarea.get_value(),
            textarea.get_selection_start(),
            textarea.get_selection_end(),
        )

    def read_from_textarea(self, textarea: TextAreaWrapper) -> "TextAreaState":
        """Capture the text area's current state; ``self`` is left untouched."""

        return type(self).from_textarea(textarea)

    def write_to_textarea(
        self, reason: str, textarea: TextAreaWrapper, select: bool
    ) -> None:
        """Push this state into ``textarea``, touching only what differs.

        Rewriting an unchanged value would disturb an in-progress native
        composition, so the value is written only when it changed. With
        ``select`` false the selection collapses onto ``selection_end``.
        """

        if textarea.get_value() != self.value:
            textarea.set_value(reason, self.value)

        start = self.selection_start if select else self.selection_end
        end = self.selection_end
        if (
            textarea.get_selection_start() != start
            or textarea.get_selection_end() != end
        ):
            textarea.set_selection_range(reason, start, end)

    @property
    def is_collapsed(self) -> bool:
        return self.selection_start == self.selection_end

    def collapse_selection(self) -> "TextAreaState":
        return TextAreaState(self.value, self.selection_end, self.selection_end)

    def equals(self, other: Optional["TextAreaState"]) -> bool:
        return other is not None and self == other

    def __str__(self) -> str:
        return (
            f"[ <{self.value}>, selectionStart: {self.selection_start}, "
            f"selectionEnd: {self.selection_end}]"
        )


TextAreaState.EMPTY = TextAreaState("", 0, 0)


__all__ = ["TextAreaState", "TextAreaStateError"]
