"""Input-tracking loop between a host text area and the structured buffer."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from textarea_sync.runtime import telemetry
from textarea_sync.model import Selection
from textarea_sync.state import (
    PagedScreenReaderStrategy,
    SimpleModel,
    TextAreaState,
    TextAreaWrapper,
    TypeData,
    deduce_input,
)

_LOGGER_NAME = "textarea_sync.adapters.textual"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def default_emoji_input() -> bool:
    """Only macOS injects picker input away from the caret, unless overridden."""

    return telemetry.env_flag("EMOJI_INPUT", sys.platform == "darwin")


@dataclass(slots=True)
class InputHooks:
    """Callbacks invoked by the controller."""

    type_text: Callable[[TypeData], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextAreaInputController:
    """Keeps the last known text area state and turns changes into edits."""

    def __init__(
        self,
        widget: TextAreaWrapper,
        hooks: Optional[InputHooks] = None,
        *,
        could_be_emoji_input: Optional[bool] = None,
    ) -> None:
        self.widget = widget
        self.hooks = hooks or InputHooks()
        if could_be_emoji_input is None:
            could_be_emoji_input = default_emoji_input()
        self.could_be_emoji_input = could_be_emoji_input
        self.state = TextAreaState.EMPTY

    def handle_input(self) -> TypeData:
        """Read the widget after an input event and emit what was typed."""

        return self._deduce("input", self.could_be_emoji_input)

    def handle_composition_end(self) -> TypeData:
        return self._deduce("composition_end", False)

    def write_screen_reader_content(
        self, model: SimpleModel, selection: Selection, reason: str = "selection"
    ) -> TextAreaState:
        """Show the page around ``selection`` and make it the known state."""

        state = PagedScreenReaderStrategy.from_editor_selection(
            self.state, model, selection
        )
        state.write_to_textarea(reason, self.widget, True)
        self.state = state
        self._log_state("page ->", reason=reason)
        return state

    def reset(self) -> None:
        self.state = TextAreaState.EMPTY

    def _deduce(self, source: str, could_be_emoji_input: bool) -> TypeData:
        previous = self.state
        current = previous.read_from_textarea(self.widget)
        data = deduce_input(previous, current, could_be_emoji_input)
        self.state = current
        telemetry.record_event(
            "input::deduced",
            level="debug",
            data={
                "source": source,
                "text": data.text,
                "replace_char_cnt": data.replace_char_cnt,
            },
            logger_name=_LOGGER_NAME,
        )
        self._log_state(
            f"{source} ->",
            text=data.text,
            replace_char_cnt=data.replace_char_cnt,
        )
        if not data.is_empty:
            self.hooks.type_text(data)
        return data

    def _log_state(self, prefix: str, **fields: object) -> None:
        try:
            snapshot = self._state_metadata()
            snapshot.update({k: v for k, v in fields.items() if v is not None})
            parts = [prefix]
            for key, value in snapshot.items():
                parts.append(f"{key}={value!r}")
            self.hooks.log(" ".join(parts))
        except Exception as exc:
            # diagnostics must never break input handling
            telemetry.get_logger(_LOGGER_NAME).warning(f"log hook failed: {exc}")

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "value_length": len(self.state.value),
            "selection": (self.state.selection_start, self.state.selection_end),
            "emoji_input": self.could_be_emoji_input,
        }


__all__ = ["InputHooks", "TextAreaInputController", "default_emoji_input"]
