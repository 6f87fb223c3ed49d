"""Line scanner recognising ``$$`` playground fences.

The scanner walks a :class:`~snippetsmith.core.lines.LineIndex` and never
mutates parser state. A rejected line yields ``None`` so the host parser can
fall through to its next block rule; a missing closing fence is not an error,
the block simply ends with the scanned range.

Scanning moves through ``OUTSIDE -> OPEN_CANDIDATE -> SCANNING`` and stops in
either ``CLOSED`` (explicit closing fence) or ``AUTO_CLOSED`` (dedented line or
end of range).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .lines import LineIndex, is_space


__all__ = [
    "CODE_INDENT",
    "FENCE_LENGTH",
    "FENCE_MARKER",
    "FenceScan",
    "FenceState",
    "fence_content",
    "opens_fence",
    "scan_fence",
]


FENCE_MARKER = "$"
FENCE_LENGTH = 2
# Closing fences indented this far past the block indent are code content.
CODE_INDENT = 4


class FenceState(str, Enum):
    """States traversed while scanning a playground fence."""

    OUTSIDE = "outside"
    OPEN_CANDIDATE = "open_candidate"
    SCANNING = "scanning"
    CLOSED = "closed"
    AUTO_CLOSED = "auto_closed"


@dataclass(frozen=True, slots=True)
class FenceScan:
    """Outcome of a successful fence scan."""

    open_line: int
    close_line: int
    indent: int
    closed: bool
    info: str = ""

    @property
    def next_line(self) -> int:
        """First line left for the host parser after the block."""
        return self.close_line + 1 if self.closed else self.close_line

    @property
    def content_lines(self) -> range:
        return range(self.open_line + 1, self.close_line)

    @property
    def state(self) -> FenceState:
        return FenceState.CLOSED if self.closed else FenceState.AUTO_CLOSED


def _skip_chars(source: str, pos: int, end: int, char: str) -> int:
    while pos < end and source[pos] == char:
        pos += 1
    return pos


def _skip_spaces(source: str, pos: int, end: int) -> int:
    while pos < end and is_space(source[pos]):
        pos += 1
    return pos


def _opening_info(source: str, lines: LineIndex, line: int) -> str | None:
    span = lines[line]
    pos = span.content_start
    if pos >= span.end or source[pos] != FENCE_MARKER:
        return None
    run_end = _skip_chars(source, pos, span.end, FENCE_MARKER)
    if run_end - pos != FENCE_LENGTH:
        return None
    return source[run_end : span.end].strip()


def opens_fence(source: str, lines: LineIndex, line: int) -> bool:
    """Return whether ``line`` starts with an opening ``$$`` run."""
    if line < 0 or line >= len(lines):
        return False
    return _opening_info(source, lines, line) is not None


def _is_closing_fence(source: str, lines: LineIndex, line: int, block_indent: int) -> bool:
    span = lines[line]
    pos = span.content_start
    if pos >= span.end or source[pos] != FENCE_MARKER:
        return False
    if span.indent_shift - block_indent >= CODE_INDENT:
        return False
    run_end = _skip_chars(source, pos, span.end, FENCE_MARKER)
    if run_end - pos < FENCE_LENGTH:
        return False
    return _skip_spaces(source, run_end, span.end) >= span.end


def scan_fence(
    source: str,
    lines: LineIndex,
    start_line: int,
    end_line: int,
    block_indent: int | None = None,
) -> FenceScan | None:
    """Scan a ``$$`` block opening at ``start_line``.

    Lines from ``start_line + 1`` up to ``end_line`` (exclusive) are searched
    for a closing fence. ``block_indent`` defaults to the indent recorded on
    ``lines``.
    """
    if block_indent is None:
        block_indent = lines.block_indent
    limit = min(end_line, len(lines))
    if start_line < 0 or start_line >= limit:
        return None
    info = _opening_info(source, lines, start_line)
    if info is None:
        return None

    opening = lines[start_line]
    close_line = limit
    line = start_line + 1
    state = FenceState.SCANNING
    while line < limit:
        span = lines[line]
        if not span.is_blank and span.indent_shift < block_indent:
            # A dedented line ends the enclosing container and this block with it.
            close_line = line
            break
        if _is_closing_fence(source, lines, line, block_indent):
            close_line = line
            state = FenceState.CLOSED
            break
        line += 1

    return FenceScan(
        open_line=start_line,
        close_line=close_line,
        indent=opening.indent_shift,
        closed=state is FenceState.CLOSED,
        info=info,
    )


def fence_content(source: str, lines: LineIndex, scan: FenceScan) -> str:
    """Return the dedented, trimmed code enclosed by ``scan``."""
    return lines.get_lines(source, scan.open_line + 1, scan.close_line, scan.indent).strip()
