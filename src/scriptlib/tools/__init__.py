"""Text editing and lookup primitives."""

from .insert_line import insert_at_line
from .lookup import first_line_containing, last_line_containing, line_at
from .move import move
from .remove_line import remove_regex_line
from .replace import replace_regex

__all__ = [
    "first_line_containing",
    "insert_at_line",
    "last_line_containing",
    "line_at",
    "move",
    "remove_regex_line",
    "replace_regex",
]
