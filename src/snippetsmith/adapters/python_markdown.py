"""Python-Markdown extension turning ``$$`` fences into playground placeholders."""

from __future__ import annotations

import re
from typing import Any

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from snippetsmith.core.config import PlaygroundConfig
from snippetsmith.core.emitter import ParseContext, PlaygroundToken, match_playground_block
from snippetsmith.core.lines import LineIndex
from snippetsmith.core.scanner import CODE_INDENT


__all__ = ["PlaygroundExtension", "makeExtension"]


class _PlaygroundPreprocessor(Preprocessor):
    """Replace playground fences with stashed placeholder markup."""

    _FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})(.*)$")
    _HEADING_RE = re.compile(r"^\s{0,3}#{1,6}(\s|$)")

    def __init__(self, md: Markdown, config: PlaygroundConfig) -> None:
        super().__init__(md)
        self.config = config
        self.tokens: list[PlaygroundToken] = []

    def run(self, lines: list[str]) -> list[str]:  # type: ignore[override]
        index = LineIndex.from_lines(lines)
        ctx = ParseContext(source="\n".join(lines), lines=index, config=self.config)
        result: list[str] = []
        total = len(lines)
        position = 0
        in_fence = False
        fence_char: str | None = None
        fence_len = 0
        at_block_start = True

        while position < total:
            line = lines[position]

            fence_match = self._FENCE_RE.match(line)
            if fence_match:
                fence_token = fence_match.group(1)
                if not in_fence:
                    in_fence = True
                    fence_char = fence_token[0]
                    fence_len = len(fence_token)
                elif (
                    fence_token[0] == fence_char
                    and len(fence_token) >= fence_len
                    and not fence_match.group(2).strip()
                ):
                    in_fence = False
                    fence_char = None
                    fence_len = 0
                result.append(line)
                position += 1
                at_block_start = not in_fence
                continue

            if in_fence:
                result.append(line)
                position += 1
                continue

            if self._may_open(index[position].indent_shift, at_block_start):
                match = match_playground_block(ctx, position, total)
                if match is not None:
                    token = ctx.apply(match)
                    placeholder = self.md.htmlStash.store(str(token.content))
                    result.extend(["", placeholder, ""])
                    position = ctx.line
                    at_block_start = True
                    continue

            result.append(line)
            position += 1
            at_block_start = not line.strip() or bool(self._HEADING_RE.match(line))

        self.tokens.extend(ctx.tokens)
        return result

    def _may_open(self, indent: int, at_block_start: bool) -> bool:
        if indent >= CODE_INDENT:
            return False
        return at_block_start or self.config.interrupt_paragraphs


class PlaygroundExtension(Extension):
    """Register the playground preprocessor ahead of fenced code blocks."""

    def __init__(self, **kwargs: Any) -> None:
        defaults = PlaygroundConfig()
        self.config = {
            "class_name": [defaults.class_name, "CSS class of snippet placeholders"],
            "expanded": [defaults.expanded, "Display snippets expanded initially"],
            "toggle_label": [defaults.toggle_label, "Label of the toggle control"],
            "interrupt_paragraphs": [
                defaults.interrupt_paragraphs,
                "Allow '$$' to end a running paragraph",
            ],
        }
        super().__init__(**kwargs)
        self.processor: _PlaygroundPreprocessor | None = None

    @property
    def playground_config(self) -> PlaygroundConfig:
        return PlaygroundConfig(**self.getConfigs())

    @property
    def tokens(self) -> list[PlaygroundToken]:
        """Tokens produced by the latest conversion."""
        return list(self.processor.tokens) if self.processor is not None else []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        self.processor = _PlaygroundPreprocessor(md, self.playground_config)
        md.preprocessors.register(self.processor, "snippetsmith_playground", priority=27)
        md.registerExtension(self)

    def reset(self) -> None:
        if self.processor is not None:
            self.processor.tokens.clear()


def makeExtension(**kwargs: Any) -> PlaygroundExtension:  # pragma: no cover - API hook  # noqa: N802
    return PlaygroundExtension(**kwargs)
