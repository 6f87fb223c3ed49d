"""Line-boundary tables consumed by the block scanners."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any


__all__ = ["LineIndex", "LineSpan", "is_space"]


def is_space(char: str) -> bool:
    """Return whether ``char`` counts as indentation (space or tab)."""
    return char in {" ", "\t"}


@dataclass(frozen=True, slots=True)
class LineSpan:
    """Offsets of a single source line.

    ``end`` points at the line terminator (or the end of the text) and
    ``indent_shift`` counts the leading indentation characters.
    """

    start: int
    end: int
    indent_shift: int

    @property
    def content_start(self) -> int:
        return self.start + self.indent_shift

    @property
    def is_blank(self) -> bool:
        return self.content_start >= self.end


class LineIndex:
    """Read-only view over per-line offsets and indentation shifts.

    The view never copies the underlying sequences so it can wrap the arrays
    a host parser already maintains.
    """

    __slots__ = ("_count", "_ends", "_shifts", "_starts", "block_indent")

    def __init__(
        self,
        starts: Sequence[int],
        ends: Sequence[int],
        shifts: Sequence[int],
        *,
        count: int | None = None,
        block_indent: int = 0,
    ) -> None:
        if count is None:
            count = len(starts)
        if count > min(len(starts), len(ends), len(shifts)):
            raise ValueError("Line index sequences are shorter than the declared line count.")
        self._starts = starts
        self._ends = ends
        self._shifts = shifts
        self._count = count
        self.block_indent = block_indent

    @classmethod
    def from_source(cls, source: str, *, block_indent: int = 0) -> LineIndex:
        """Build a line table for raw text split on ``\\n``.

        A trailing newline terminates the last line rather than opening an
        empty one.
        """
        segments = source.split("\n") if source else []
        if source.endswith("\n"):
            segments.pop()
        return cls.from_lines(segments, block_indent=block_indent)

    @classmethod
    def from_lines(cls, lines: Sequence[str], *, block_indent: int = 0) -> LineIndex:
        """Build a line table for ``"\\n".join(lines)``.

        A ``\\r`` left by CRLF line endings is excluded from the line span.
        """
        starts: list[int] = []
        ends: list[int] = []
        shifts: list[int] = []
        offset = 0
        for line in lines:
            starts.append(offset)
            ends.append(offset + len(line.removesuffix("\r")))
            shifts.append(len(line) - len(line.lstrip(" \t")))
            offset += len(line) + 1
        return cls(starts, ends, shifts, block_indent=block_indent)

    @classmethod
    def from_state(cls, state: Any) -> LineIndex:
        """Wrap the line marks of a markdown-it ``StateBlock``."""
        return cls(
            state.bMarks,
            state.eMarks,
            state.tShift,
            count=state.lineMax,
            block_indent=state.blkIndent,
        )

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, line: int) -> LineSpan:
        if line < 0 or line >= self._count:
            raise IndexError(f"Line {line} is outside the index (0..{self._count - 1}).")
        return LineSpan(self._starts[line], self._ends[line], self._shifts[line])

    def __iter__(self) -> Iterator[LineSpan]:
        for line in range(self._count):
            yield self[line]

    def text(self, source: str, line: int) -> str:
        """Return the raw text of ``line`` without its terminator."""
        span = self[line]
        return source[span.start : span.end]

    def get_lines(self, source: str, begin: int, end: int, indent: int) -> str:
        """Join lines ``[begin, end)``, removing up to ``indent`` columns from each."""
        if begin >= end:
            return ""

        chunks: list[str] = []
        for line in range(begin, end):
            span = self[line]
            first = span.start
            columns = 0
            while first < span.end and columns < indent:
                char = source[first]
                if char == "\t":
                    columns += 4 - columns % 4
                elif char == " " or first - span.start < span.indent_shift:
                    columns += 1
                else:
                    break
                first += 1
            padding = " " * (columns - indent) if columns > indent else ""
            chunks.append(padding + source[first : span.end])
        return "\n".join(chunks)
