from __future__ import annotations

import dataclasses
import html

import pytest

from snippetsmith.core.config import PlaygroundConfig
from snippetsmith.core.emitter import (
    TOKEN_TYPE,
    ParseContext,
    build_snippet_markup,
    match_playground_block,
)
from snippetsmith.core.markup import Markup, encode_content


def test_reserved_characters_become_references() -> None:
    encoded = encode_content("a < b && c > 'd' \"e\"")

    assert encoded == "a &lt; b &amp;&amp; c &gt; &#39;d&#39; &#34;e&#34;"
    assert isinstance(encoded, Markup)


@pytest.mark.parametrize(
    "text",
    ["<<>>", "&&", "'\"'", "fmt.Println(\"<&>\")", "plain text", "\x00\x07\ttab"],
)
def test_unescaping_recovers_input(text: str) -> None:
    assert html.unescape(str(encode_content(text))) == text


def test_control_characters_pass_through() -> None:
    assert str(encode_content("\x00\x1b[0m")) == "\x00\x1b[0m"


def test_encoding_plain_text_twice_double_escapes() -> None:
    once = str(encode_content("&"))

    assert once == "&amp;"
    assert str(encode_content(once)) == "&amp;amp;"


def test_markup_input_is_escaped_as_text() -> None:
    encoded = encode_content(Markup("<b>bold</b>"))

    assert encoded == "&lt;b&gt;bold&lt;/b&gt;"
    assert isinstance(encoded, Markup)


def test_snippet_markup_never_embeds_raw_markup() -> None:
    markup = str(build_snippet_markup(Markup("<script>alert('x')</script>")))

    assert "<script>" not in markup
    assert "&lt;script&gt;alert(&#39;x&#39;)&lt;/script&gt;</textarea>" in markup


def test_snippet_markup_uses_default_widget_template() -> None:
    markup = build_snippet_markup("if a < b && c {}")

    assert str(markup) == (
        '<textarea data-expanded="1" data-title="Toggle snippet" '
        'class="go-playground-snippet">if a &lt; b &amp;&amp; c {}</textarea>'
    )


def test_snippet_markup_honours_configuration() -> None:
    config = PlaygroundConfig(class_name="snippet", expanded=False, toggle_label='Run "it"')
    markup = str(build_snippet_markup("x", config))

    assert 'data-expanded="0"' in markup
    assert 'data-title="Run &#34;it&#34;"' in markup
    assert 'class="snippet"' in markup


def test_match_does_not_mutate_context_until_applied() -> None:
    ctx = ParseContext.from_source("$$\nfmt.Println(1)\n$$\nrest\n")

    match = match_playground_block(ctx, 0, len(ctx.lines))

    assert match is not None
    assert ctx.tokens == []
    assert ctx.line == 0

    token = ctx.apply(match)

    assert ctx.tokens == [token]
    assert ctx.line == 3
    assert token.type == TOKEN_TYPE
    assert token.code == "fmt.Println(1)"
    assert token.line_range == (0, 3)
    assert token.closed is True
    assert "fmt.Println(1)</textarea>" in token.content


def test_unterminated_match_leaves_cursor_at_range_end() -> None:
    ctx = ParseContext.from_source("$$\nx := 1")

    match = match_playground_block(ctx, 0, len(ctx.lines))
    assert match is not None
    token = ctx.apply(match)

    assert token.closed is False
    assert token.code == "x := 1"
    assert ctx.line == 2


def test_no_match_for_ordinary_lines() -> None:
    ctx = ParseContext.from_source("just text\n")

    assert match_playground_block(ctx, 0, len(ctx.lines)) is None


def test_tokens_are_immutable() -> None:
    ctx = ParseContext.from_source("$$\nx\n$$")
    match = match_playground_block(ctx, 0, len(ctx.lines))
    assert match is not None

    with pytest.raises(dataclasses.FrozenInstanceError):
        match.token.code = "y"  # type: ignore[misc]


@pytest.mark.parametrize("source", ["$$\r\nx\r\n$$\r\n", "$$\rx\r$$\r"])
def test_context_normalises_line_endings(source: str) -> None:
    ctx = ParseContext.from_source(source)

    match = match_playground_block(ctx, 0, len(ctx.lines))

    assert match is not None
    assert match.token.closed is True
    assert match.token.code == "x"
    assert match.next_line == 3
