"""Match highlighting for search suggestions."""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class HighlightedChar:
    char: str
    emphasized: bool


def highlight(name: str, matched_positions: Sequence[int]) -> list[HighlightedChar]:
    """Mark the characters of ``name`` found at ``matched_positions``.

    ``matched_positions`` must be strictly ascending. The positions are merged
    with a single forward cursor, so each index is visited once.
    """
    rendered: list[HighlightedChar] = []
    cursor = 0
    for index, char in enumerate(name):
        while cursor < len(matched_positions) and matched_positions[cursor] < index:
            cursor += 1
        emphasized = cursor < len(matched_positions) and matched_positions[cursor] == index
        if emphasized:
            cursor += 1
        rendered.append(HighlightedChar(char=char, emphasized=emphasized))
    return rendered


def segments(chars: Sequence[HighlightedChar]) -> list[tuple[str, bool]]:
    """Group consecutive characters with the same emphasis."""
    grouped: list[tuple[str, bool]] = []
    for item in chars:
        if grouped and grouped[-1][1] == item.emphasized:
            grouped[-1] = (grouped[-1][0] + item.char, item.emphasized)
        else:
            grouped.append((item.char, item.emphasized))
    return grouped
