"""Textual host adapter."""

from .controller import InputHooks, TextAreaInputController, default_emoji_input
from .widget import TextualTextAreaWrapper

__all__ = [
    "InputHooks",
    "TextAreaInputController",
    "TextualTextAreaWrapper",
    "default_emoji_input",
]
