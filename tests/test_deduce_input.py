from __future__ import annotations

from typing import Optional

import pytest

from mock_widget import MockTextAreaWrapper
from textarea_sync.state import TextAreaState, TypeData, deduce_input
from textarea_sync.state.diff import (
    capped_diff,
    contains_full_width_character,
    is_composition_accept,
    looks_like_emoji,
    natural_diff,
    stray_insertion,
)


def assert_deduced(
    previous: Optional[TextAreaState],
    value: str,
    selection_start: int,
    selection_end: int,
    expected: str,
    expected_replace_char_cnt: int,
) -> None:
    textarea = MockTextAreaWrapper(value, selection_start, selection_end)
    current = (previous or TextAreaState.EMPTY).read_from_textarea(textarea)

    actual = deduce_input(previous, current, True)

    assert actual == TypeData(expected, expected_replace_char_cnt)


def test_japanese_composition_accepted_with_enter() -> None:
    # keyboard layout Japanese/Hiragana, typing "sennsei" then Enter
    steps = [
        (TextAreaState.EMPTY, "ｓ", 0, 1, "ｓ", 0),
        (TextAreaState("ｓ", 0, 1), "せ", 0, 1, "せ", 1),
        (TextAreaState("せ", 0, 1), "せｎ", 0, 2, "せｎ", 1),
        (TextAreaState("せｎ", 0, 2), "せん", 0, 2, "せん", 2),
        (TextAreaState("せん", 0, 2), "せんｓ", 0, 3, "せんｓ", 2),
        (TextAreaState("せんｓ", 0, 3), "せんせ", 0, 3, "せんせ", 3),
        (TextAreaState("せんせ", 0, 3), "せんせ", 0, 3, "せんせ", 3),
        (TextAreaState("せんせ", 0, 3), "せんせい", 0, 4, "せんせい", 3),
        (TextAreaState("せんせい", 0, 4), "せんせい", 4, 4, "", 0),
    ]
    for step in steps:
        assert_deduced(*step)


def test_japanese_composition_with_different_suggestion() -> None:
    assert_deduced(TextAreaState("せんせい", 0, 4), "せんせい", 0, 4, "せんせい", 4)
    assert_deduced(TextAreaState("せんせい", 0, 4), "先生", 0, 2, "先生", 4)
    assert_deduced(TextAreaState("先生", 0, 2), "先生", 2, 2, "", 0)


@pytest.mark.parametrize(
    "previous, value, start, end, expected, replace",
    [
        # no previous state, with and without a selection
        (None, "a", 0, 1, "a", 0),
        (None, "a", 1, 1, "a", 0),
        # typing does not cause a selection
        (TextAreaState.EMPTY, "a", 0, 1, "a", 0),
        (TextAreaState.EMPTY, "a", 1, 1, "a", 0),
        # had the entire line selected
        (TextAreaState("Hello world!", 0, 12), "H", 1, 1, "H", 0),
        # appending, prepending and replacing a selected word
        (TextAreaState("Hello world!", 12, 12), "Hello world!a", 13, 13, "a", 0),
        (TextAreaState("Hello world!", 0, 0), "aHello world!", 1, 1, "a", 0),
        (TextAreaState("Hello world!", 6, 11), "Hello other!", 11, 11, "other", 0),
        # committed IME text
        (TextAreaState.EMPTY, "これは", 3, 3, "これは", 0),
        # overwrite mode consumes the character after the caret
        (TextAreaState("Hello world!", 0, 0), "Aello world!", 1, 1, "A", 0),
        # replacing a selected end-of-line with a newline
        (TextAreaState("]\n", 1, 2), "]\n", 2, 2, "\n", 0),
        # first key press over a selected character
        (TextAreaState("a", 0, 1), "a", 1, 1, "a", 0),
        # Cmd-D on a character followed by typing the same character
        (TextAreaState("x x", 0, 1), "x x", 1, 1, "x", 0),
    ],
)
def test_deduce_plain_typing(
    previous: Optional[TextAreaState],
    value: str,
    start: int,
    end: int,
    expected: str,
    replace: int,
) -> None:
    assert_deduced(previous, value, start, end, expected, replace)


@pytest.mark.parametrize(
    "value, start, end, expected, replace",
    [
        ("Hellö world!", 5, 5, "ö", 1),
        # the accent popup still highlights the substituted character
        ("Hellö world!", 4, 5, "ö", 0),
        ("Hellöö world!", 5, 5, "öö", 1),
        ("Helöö world!", 5, 5, "öö", 2),
    ],
)
def test_mac_accent_substitution(
    value: str, start: int, end: int, expected: str, replace: int
) -> None:
    assert_deduced(TextAreaState("Hello world!", 5, 5), value, start, end, expected, replace)


def test_osx_emoji_inserted_lines_away_from_caret() -> None:
    lines = [f"some{i}  text" for i in range(1, 8)]
    previous = TextAreaState("\n".join(lines), 42, 42)
    lines[0] = "so\U0001f4c5me1  text"

    assert_deduced(previous, "\n".join(lines), 3, 3, "\U0001f4c5", 0)


@pytest.mark.parametrize(
    "previous, value, caret, emoji",
    [
        (TextAreaState("some1  text", 6, 6), "some\U0001f48a1  text", 5, "\U0001f48a"),
        (
            TextAreaState("qwertyu\nasdfghj\nzxcvbnm", 12, 12),
            "qwertyu\nasdfghj\nzxcvbnm\U0001f388",
            24,
            "\U0001f388",
        ),
        # KEYBOARD is only an emoji through VARIATION SELECTOR-16
        (TextAreaState("some1  text", 6, 6), "some\u2328\ufe0f1  text", 6, "\u2328\ufe0f"),
    ],
)
def test_osx_emoji_inserted_near_caret(
    previous: TextAreaState, value: str, caret: int, emoji: str
) -> None:
    assert_deduced(previous, value, caret, caret, emoji, 0)


def test_several_emoji_away_from_caret_keep_capped_result() -> None:
    previous = TextAreaState("some1  text", 6, 6)
    run = "\U0001f600\U0001f600\U0001f600"
    current = TextAreaState(f"some{run}1  text", 7, 7)

    assert stray_insertion(previous, current, capped_diff(previous, current)) is None
    assert deduce_input(previous, current, True) == TypeData(f"{run}1 ", 2)


def test_joined_emoji_sequence_counts_as_one_insertion() -> None:
    previous = TextAreaState("some1  text", 6, 6)
    family = "\U0001f468\u200d\U0001f469\u200d\U0001f467"
    current = TextAreaState(f"some{family}1  text", 4 + len(family), 4 + len(family))

    assert deduce_input(previous, current, True) == TypeData(family, 0)


@pytest.mark.parametrize("emoji", ["\U0001f600", "\u2615"])
def test_retyping_selected_emoji_is_reported(emoji: str) -> None:
    assert_deduced(TextAreaState(emoji, 0, 1), emoji, 1, 1, emoji, 0)
    assert deduce_input(TextAreaState(emoji, 0, 1), TextAreaState(emoji, 1, 1), False) == (
        TypeData(emoji, 0)
    )


def test_emoji_heuristic_can_be_disabled() -> None:
    previous = TextAreaState("some1  text", 6, 6)
    current = TextAreaState("some\U0001f48a1  text", 5, 5)

    assert deduce_input(previous, current, False) == TypeData("\U0001f48a1 ", 2)


def test_unchanged_value_with_caret_is_a_noop() -> None:
    state = TextAreaState("Hello world!", 3, 3)

    assert deduce_input(state, state.collapse_selection()).is_empty
    assert deduce_input(state, TextAreaState("Hello world!", 7, 7)).is_empty


def test_full_selection_is_replaced_by_current_value() -> None:
    previous = TextAreaState("Hello world!", 0, 12)

    assert deduce_input(previous, TextAreaState("Bye", 3, 3)) == TypeData("Bye", 0)


def test_capped_diff_stops_at_previous_selection() -> None:
    diff = capped_diff(TextAreaState("]\n", 1, 2), TextAreaState("]\n", 2, 2))

    assert (diff.prefix_len, diff.suffix_len) == (1, 0)
    assert (diff.deleted, diff.inserted) == ("\n", "\n")


def test_natural_diff_isolates_insertion() -> None:
    diff = natural_diff("some1  text", "some\U0001f48a1  text")

    assert diff.prefix_len == 4
    assert diff.deleted == ""
    assert diff.inserted == "\U0001f48a"


def test_composition_accept_requires_full_width_text() -> None:
    wide = TextAreaState("先生", 0, 2)
    narrow = TextAreaState("ab", 0, 2)

    assert is_composition_accept(
        wide, wide.collapse_selection(), capped_diff(wide, wide.collapse_selection())
    )
    assert not is_composition_accept(
        narrow,
        narrow.collapse_selection(),
        capped_diff(narrow, narrow.collapse_selection()),
    )


def test_full_width_check_ignores_emoji() -> None:
    assert contains_full_width_character("先生")
    assert contains_full_width_character("ｓ")
    assert not contains_full_width_character("\U0001f600")
    assert not contains_full_width_character("\u2615")


def test_stray_insertion_requires_caret_after_run() -> None:
    previous = TextAreaState("some1  text", 6, 6)
    current = TextAreaState("some\U0001f48a1  text", 9, 9)

    assert stray_insertion(previous, current, capped_diff(previous, current)) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("\U0001f4c5", True),
        ("\u2328\ufe0f", True),
        ("\U0001f44d\U0001f3fd", True),
        ("\U0001f468\u200d\U0001f469\u200d\U0001f467", True),
        ("\u2328", False),
        ("ö", False),
        ("\U0001f48a1", False),
        ("", False),
    ],
)
def test_looks_like_emoji(text: str, expected: bool) -> None:
    assert looks_like_emoji(text) is expected
