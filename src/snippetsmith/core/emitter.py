"""Block tokens and placeholder markup for recognised playground fences."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re

from .config import PlaygroundConfig
from .lines import LineIndex
from .markup import Markup, encode_content
from .scanner import FenceScan, fence_content, scan_fence


__all__ = [
    "TOKEN_TYPE",
    "ParseContext",
    "PlaygroundMatch",
    "PlaygroundToken",
    "build_snippet_markup",
    "match_playground_block",
]


logger = logging.getLogger(__name__)

TOKEN_TYPE = "playground-block"

_NEWLINES_RE = re.compile(r"\r\n?")

_SNIPPET_TEMPLATE = Markup(
    '<textarea data-expanded="{expanded}" data-title="{title}" '
    'class="{class_name}">{code}</textarea>'
)


def build_snippet_markup(code: str, config: PlaygroundConfig | None = None) -> Markup:
    """Wrap ``code`` in the playground placeholder element."""
    config = config or PlaygroundConfig()
    # Plain str arguments are escaped by Markup.format; the encoded code is not.
    return _SNIPPET_TEMPLATE.format(
        expanded="1" if config.expanded else "0",
        title=config.toggle_label,
        class_name=config.class_name,
        code=encode_content(code),
    )


@dataclass(frozen=True, slots=True)
class PlaygroundToken:
    """Immutable block token produced for a playground fence."""

    content: Markup
    code: str
    line_range: tuple[int, int]
    level: int = 0
    info: str = ""
    closed: bool = True
    type: str = TOKEN_TYPE


@dataclass(frozen=True, slots=True)
class PlaygroundMatch:
    """A recognised block waiting to be applied to a parse context."""

    token: PlaygroundToken
    scan: FenceScan

    @property
    def next_line(self) -> int:
        return self.scan.next_line


@dataclass(slots=True)
class ParseContext:
    """Explicit parse state: source, line table, cursor, and token stream."""

    source: str
    lines: LineIndex
    line: int = 0
    level: int = 0
    tokens: list[PlaygroundToken] = field(default_factory=list)
    config: PlaygroundConfig = field(default_factory=PlaygroundConfig)

    @classmethod
    def from_source(cls, source: str, config: PlaygroundConfig | None = None) -> ParseContext:
        """Build a context over ``source`` with CRLF and CR line endings normalised."""
        source = _NEWLINES_RE.sub("\n", source)
        return cls(
            source=source,
            lines=LineIndex.from_source(source),
            config=config or PlaygroundConfig(),
        )

    def apply(self, match: PlaygroundMatch) -> PlaygroundToken:
        """Append the matched token and move the cursor past the block."""
        self.tokens.append(match.token)
        self.line = match.next_line
        return match.token


def match_playground_block(
    ctx: ParseContext,
    start_line: int,
    end_line: int,
) -> PlaygroundMatch | None:
    """Try the playground rule at ``start_line`` without touching ``ctx``."""
    scan = scan_fence(ctx.source, ctx.lines, start_line, end_line, ctx.lines.block_indent)
    if scan is None:
        return None

    code = fence_content(ctx.source, ctx.lines, scan)
    token = PlaygroundToken(
        content=build_snippet_markup(code, ctx.config),
        code=code,
        line_range=(start_line, scan.next_line),
        level=ctx.level,
        info=scan.info,
        closed=scan.closed,
    )
    logger.debug(
        "playground block at lines %d-%d (%s)",
        start_line,
        scan.next_line,
        scan.state.value,
    )
    return PlaygroundMatch(token=token, scan=scan)
