"""Tests for suggestion highlighting."""

from calorie_tracker.domain.highlight import highlight, segments


def _marked(name: str, positions: list[int]) -> str:
    return "".join(
        f"({c.char})" if c.emphasized else c.char for c in highlight(name, positions)
    )


def test_highlight_marks_matched_positions() -> None:
    assert _marked("apple", [0, 2]) == "(a)p(p)le"


def test_highlight_without_positions_is_plain() -> None:
    chars = highlight("rice", [])

    assert [c.char for c in chars] == list("rice")
    assert not any(c.emphasized for c in chars)


def test_highlight_contiguous_match_at_end() -> None:
    assert _marked("banana", [3, 4, 5]) == "ban(a)(n)(a)"


def test_highlight_ignores_positions_past_the_name() -> None:
    assert _marked("egg", [1, 7]) == "e(g)g"


def test_segments_groups_runs() -> None:
    chars = highlight("oatmeal", [0, 1, 4])

    assert segments(chars) == [("oa", True), ("tm", False), ("e", True), ("al", False)]
