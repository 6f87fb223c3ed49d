"""markdown-it-py plugin claiming ``$$`` fences as playground snippets."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.token import Token

from snippetsmith.core.config import PlaygroundConfig
from snippetsmith.core.emitter import TOKEN_TYPE, ParseContext, match_playground_block
from snippetsmith.core.lines import LineIndex
from snippetsmith.core.scanner import CODE_INDENT, opens_fence


__all__ = ["RULE_NAME", "playground_plugin", "render_playground_block"]


RULE_NAME = "playground"
_PARAGRAPH_ALT = ["paragraph", "reference", "blockquote", "list"]


def render_playground_block(
    self: Any,
    tokens: Sequence[Token],
    idx: int,
    options: Any,
    env: Any,
) -> str:
    """Emit the precomputed placeholder markup without escaping it again."""
    del self, options, env
    return tokens[idx].content


def playground_plugin(md: MarkdownIt, config: PlaygroundConfig | None = None) -> None:
    """Register the playground block rule and its renderer on ``md``."""
    config = config or PlaygroundConfig()

    def _playground_block(
        state: StateBlock,
        start_line: int,
        end_line: int,
        silent: bool,
    ) -> bool:
        if state.sCount[start_line] - state.blkIndent >= CODE_INDENT:
            return False
        lines = LineIndex.from_state(state)
        if silent:
            return opens_fence(state.src, lines, start_line)

        ctx = ParseContext(
            source=state.src,
            lines=lines,
            line=state.line,
            level=state.level,
            config=config,
        )
        match = match_playground_block(ctx, start_line, end_line)
        if match is None:
            return False

        playground = ctx.apply(match)
        token = state.push(TOKEN_TYPE, "textarea", 0)
        token.block = True
        token.content = str(playground.content)
        token.info = playground.info
        token.map = list(playground.line_range)
        token.meta = {"code": playground.code, "closed": playground.closed}
        state.line = ctx.line
        return True

    options = {"alt": list(_PARAGRAPH_ALT)} if config.interrupt_paragraphs else None
    md.block.ruler.before("fence", RULE_NAME, _playground_block, options)
    md.add_render_rule(TOKEN_TYPE, render_playground_block)
