"""Deduce what was typed from two consecutive text area snapshots.

The native widget never reports keystrokes, only "the value is now X with
selection [s, e]". ``deduce_input`` compares the last known state with the
freshly read one and answers with a :class:`TypeData`: the text to insert and
how many characters before the caret it replaces.

The computation is split into small pure steps:

``capped_diff``
    common prefix/suffix diff whose matches never reach into the previous
    selection, since that range was provisional (composition or selection).
``natural_diff``
    the same diff without any capping.
``is_composition_accept``
    recognises an IME composition committed without changing the text.
``stray_insertion``
    recognises a short run the OS inserted away from the caret (the macOS
    emoji picker does this).
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Optional

import grapheme

from textarea_sync.runtime import telemetry

from .snapshot import TextAreaState

_LOGGER_NAME = "textarea_sync.state.diff"

VARIATION_SELECTOR_16 = "\ufe0f"

# Blocks holding emoji presentation characters.
_EMOJI_BLOCKS = re.compile(
    "["
    "\u231a\u231b\u23f0\u23f3\u2600-\u27bf\u2b50\u2b55"
    "\U0001f1e6-\U0001f1ff"
    "\U0001f300-\U0001f64f"
    "\U0001f680-\U0001f6ff"
    "\U0001f900-\U0001f9ff"
    "\U0001fa70-\U0001faff"
    "]"
)

# Code points that may glue an emoji sequence together.
_EMOJI_COMBINERS = re.compile(
    "["
    "\u200d"
    "\ufe00-\ufe0f"
    "\u20e3"
    "\U0001f3fb-\U0001f3ff"
    "\U000e0020-\U000e007f"
    "]"
)


@dataclass(frozen=True, slots=True)
class TypeData:
    """Edit inferred from a widget change.

    The consumer deletes ``replace_char_cnt`` characters ending at its caret
    (on top of whatever its own selection removes), then inserts ``text``.
    """

    text: str
    replace_char_cnt: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.text and self.replace_char_cnt == 0


@dataclass(frozen=True, slots=True)
class TextDiff:
    prefix_len: int
    suffix_len: int
    deleted: str
    inserted: str


def common_prefix_length(a: str, b: str) -> int:
    limit = min(len(a), len(b))
    for i in range(limit):
        if a[i] != b[i]:
            return i
    return limit


def common_suffix_length(a: str, b: str) -> int:
    limit = min(len(a), len(b))
    for i in range(limit):
        if a[len(a) - i - 1] != b[len(b) - i - 1]:
            return i
    return limit


def _diff(old: str, new: str, max_prefix: int, max_suffix: int) -> TextDiff:
    prefix_len = min(common_prefix_length(old, new), max_prefix)
    suffix_len = min(
        common_suffix_length(old[prefix_len:], new[prefix_len:]), max_suffix
    )
    return TextDiff(
        prefix_len=prefix_len,
        suffix_len=suffix_len,
        deleted=old[prefix_len : len(old) - suffix_len],
        inserted=new[prefix_len : len(new) - suffix_len],
    )


def natural_diff(old: str, new: str) -> TextDiff:
    """Plain common prefix/suffix diff of two strings."""

    return _diff(old, new, len(old), len(old))


def capped_diff(previous: TextAreaState, current: TextAreaState) -> TextDiff:
    """Diff whose unchanged prefix and suffix stop at the previous selection."""

    return _diff(
        previous.value,
        current.value,
        previous.selection_start,
        len(previous.value) - previous.selection_end,
    )


def contains_full_width_character(text: str) -> bool:
    """True for wide CJK/fullwidth text; emoji are wide too but never count."""

    return any(
        unicodedata.east_asian_width(char) in ("F", "W") and not looks_like_emoji(char)
        for char in text
    )


def is_composition_accept(
    previous: TextAreaState, current: TextAreaState, diff: TextDiff
) -> bool:
    """True when an IME composition was committed without changing its text.

    The previous selection spans exactly the composed window, the caret now
    sits at its end, and the window holds full-width characters. Retyping a
    selected latin character looks the same but must still be reported.
    """

    if not current.is_collapsed or diff.deleted != diff.inserted:
        return False
    window_end = len(previous.value) - diff.suffix_len
    return (
        previous.selection_start == diff.prefix_len
        and previous.selection_end == window_end
        and current.selection_end == len(current.value) - diff.suffix_len
        and "\n" not in diff.inserted
        and contains_full_width_character(diff.inserted)
    )


def looks_like_emoji(text: str) -> bool:
    """True when every code point of ``text`` can belong to an emoji sequence."""

    if not text:
        return False
    for char in text:
        if _EMOJI_COMBINERS.match(char) or _EMOJI_BLOCKS.match(char):
            continue
        if unicodedata.category(char) != "So":
            return False
    return VARIATION_SELECTOR_16 in text or _EMOJI_BLOCKS.search(text) is not None


def stray_insertion(
    previous: TextAreaState, current: TextAreaState, diff: TextDiff
) -> Optional[str]:
    """Return the emoji-like run the OS inserted away from the caret, if any.

    Only worth asking when the capped diff claims previous text was
    superseded. The uncapped diff must then be a pure insertion of a single
    grapheme cluster and the caret must sit right after it.
    """

    if not current.is_collapsed or not diff.deleted:
        return None
    uncapped = natural_diff(previous.value, current.value)
    if uncapped.deleted or not looks_like_emoji(uncapped.inserted):
        return None
    if grapheme.length(uncapped.inserted) != 1:
        return None
    if current.selection_end != uncapped.prefix_len + len(uncapped.inserted):
        return None
    return uncapped.inserted


def deduce_input(
    previous: Optional[TextAreaState],
    current: TextAreaState,
    could_be_emoji_input: bool = True,
) -> TypeData:
    """Infer the edit that turned ``previous`` into ``current``."""

    previous = previous or TextAreaState.EMPTY
    diff = capped_diff(previous, current)

    if is_composition_accept(previous, current, diff):
        return TypeData("", 0)

    if could_be_emoji_input:
        inserted = stray_insertion(previous, current, diff)
        if inserted is not None:
            telemetry.record_event(
                "input::stray_insertion",
                level="debug",
                data={"text": inserted, "capped_window": len(diff.deleted)},
                logger_name=_LOGGER_NAME,
            )
            return TypeData(inserted, 0)

    if current.is_collapsed:
        replace_char_cnt = previous.selection_start - diff.prefix_len
    else:
        # a live composition is still displayed; its whole range is superseded
        replace_char_cnt = previous.selection_end - previous.selection_start
    return TypeData(diff.inserted, replace_char_cnt)


__all__ = [
    "TextDiff",
    "TypeData",
    "capped_diff",
    "common_prefix_length",
    "common_suffix_length",
    "contains_full_width_character",
    "deduce_input",
    "is_composition_accept",
    "looks_like_emoji",
    "natural_diff",
    "stray_insertion",
]
