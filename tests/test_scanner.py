from __future__ import annotations

import pytest

from snippetsmith.core.lines import LineIndex
from snippetsmith.core.scanner import FenceState, fence_content, opens_fence, scan_fence


def _scan(source: str, *, block_indent: int = 0, end_line: int | None = None):
    lines = LineIndex.from_source(source, block_indent=block_indent)
    limit = len(lines) if end_line is None else end_line
    return lines, scan_fence(source, lines, 0, limit)


def test_closed_fence_extracts_interior_code() -> None:
    source = "$$\npackage main\n$$\n"
    lines, scan = _scan(source)

    assert scan is not None
    assert scan.closed is True
    assert scan.state is FenceState.CLOSED
    assert scan.close_line == 2
    assert scan.next_line == 3
    assert list(scan.content_lines) == [1]
    assert fence_content(source, lines, scan) == "package main"


def test_opening_indent_is_stripped_from_every_line() -> None:
    source = "  $$\n  code.Line()\n  $$"
    lines, scan = _scan(source)

    assert scan is not None
    assert scan.indent == 2
    assert fence_content(source, lines, scan) == "code.Line()"


def test_dedent_is_uniform_and_block_is_trimmed() -> None:
    source = "  $$\n  if ok {\n      run()\n  }\n  $$"
    lines, scan = _scan(source)

    assert scan is not None
    assert fence_content(source, lines, scan) == "if ok {\n    run()\n}"


def test_unterminated_fence_auto_closes_at_range_end() -> None:
    source = "$$\nx := 1"
    lines, scan = _scan(source)

    assert scan is not None
    assert scan.closed is False
    assert scan.state is FenceState.AUTO_CLOSED
    assert scan.close_line == 2
    assert scan.next_line == 2
    assert fence_content(source, lines, scan) == "x := 1"


def test_scan_stops_at_supplied_range() -> None:
    source = "$$\na\n$$\n"
    _, scan = _scan(source, end_line=2)

    assert scan is not None
    assert scan.closed is False
    assert scan.next_line == 2


@pytest.mark.parametrize("source", ["$$\n$$", "$$"])
def test_empty_interior_yields_empty_code(source: str) -> None:
    lines, scan = _scan(source)

    assert scan is not None
    assert fence_content(source, lines, scan) == ""


@pytest.mark.parametrize(
    "source",
    ["$\ncode\n$$", "$$$\ncode\n$$$", "$$$$\ncode\n$$$$", "text\n$$", "", "   \n$$"],
)
def test_non_double_markers_never_open(source: str) -> None:
    _, scan = _scan(source)

    assert scan is None


@pytest.mark.parametrize("indent", ["", " ", "  ", "   "])
def test_fence_lines_with_up_to_three_spaces_match(indent: str) -> None:
    source = f"{indent}$$\nvalue\n{indent}$$  \n"
    lines, scan = _scan(source)

    assert scan is not None
    assert scan.closed is True
    assert fence_content(source, lines, scan) == "value"


def test_closer_may_be_longer_than_opener() -> None:
    _, scan = _scan("$$\nvalue\n$$$$\n")

    assert scan is not None
    assert scan.closed is True
    assert scan.close_line == 2


def test_single_marker_does_not_close() -> None:
    lines, scan = _scan("$$\na\n$\nb\n$$")

    assert scan is not None
    assert scan.close_line == 4
    assert fence_content("$$\na\n$\nb\n$$", lines, scan) == "a\n$\nb"


def test_trailing_text_disqualifies_closer() -> None:
    source = "$$\na\n$$ not a closer\nb"
    lines, scan = _scan(source)

    assert scan is not None
    assert scan.closed is False
    assert fence_content(source, lines, scan) == "a\n$$ not a closer\nb"


def test_deeply_indented_closer_is_content() -> None:
    source = "$$\na\n    $$\nb\n$$"
    lines, scan = _scan(source)

    assert scan is not None
    assert scan.close_line == 4
    assert fence_content(source, lines, scan) == "a\n    $$\nb"


def test_less_indented_line_closes_block_implicitly() -> None:
    source = "  $$\n  a\nb\n  $$"
    lines, scan = _scan(source, block_indent=2)

    assert scan is not None
    assert scan.closed is False
    assert scan.close_line == 2
    assert scan.next_line == 2
    assert fence_content(source, lines, scan) == "a"


def test_blank_lines_do_not_end_block() -> None:
    source = "  $$\n  a\n\n  b\n  $$"
    lines, scan = _scan(source, block_indent=2)

    assert scan is not None
    assert scan.closed is True
    assert fence_content(source, lines, scan) == "a\n\nb"


def test_opening_line_info_is_recorded() -> None:
    _, scan = _scan("$$ go\nx\n$$")

    assert scan is not None
    assert scan.info == "go"


def test_opens_fence_checks_single_line() -> None:
    source = "intro\n$$\n$$$"
    lines = LineIndex.from_source(source)

    assert opens_fence(source, lines, 0) is False
    assert opens_fence(source, lines, 1) is True
    assert opens_fence(source, lines, 2) is False
    assert opens_fence(source, lines, 3) is False


def test_start_line_outside_range_is_rejected() -> None:
    source = "$$\na\n$$"
    lines = LineIndex.from_source(source)

    assert scan_fence(source, lines, 3, 3) is None
    assert scan_fence(source, lines, 0, 0) is None


def test_crlf_line_endings_do_not_hide_closing_fence() -> None:
    source = "$$\r\nx\r\n$$\r\nrest\r\n"
    lines, scan = _scan(source)

    assert scan is not None
    assert scan.closed is True
    assert scan.close_line == 2
    assert fence_content(source, lines, scan) == "x"
