from __future__ import annotations

from markdown_it import MarkdownIt

from snippetsmith.adapters.markdown_it import RULE_NAME, playground_plugin
from snippetsmith.core.config import PlaygroundConfig


WIDGET = '<textarea data-expanded="1" data-title="Toggle snippet" class="go-playground-snippet">'


def _md(config: PlaygroundConfig | None = None) -> MarkdownIt:
    return MarkdownIt("commonmark").use(playground_plugin, config=config)


def test_rule_is_registered_before_fenced_code() -> None:
    md = _md()
    rules = md.block.ruler.get_active_rules()

    assert rules.index(RULE_NAME) == rules.index("fence") - 1


def test_fence_renders_placeholder_verbatim() -> None:
    html = _md().render("$$\npackage main\n$$\n")

    assert html == f"{WIDGET}package main</textarea>"


def test_code_is_escaped_once() -> None:
    html = _md().render("$$\nif a < b && c {\n}\n$$\n")

    assert "if a &lt; b &amp;&amp; c {\n}</textarea>" in html
    assert "&amp;lt;" not in html


def test_token_stream_records_block() -> None:
    tokens = _md().parse("Intro\n\n$$ go\nx := 1\n$$\n\nOutro\n")
    blocks = [token for token in tokens if token.type == "playground-block"]

    assert len(blocks) == 1
    block = blocks[0]
    assert block.map == [2, 5]
    assert block.block is True
    assert block.info == "go"
    assert block.meta == {"code": "x := 1", "closed": True}


def test_unterminated_block_spans_to_document_end() -> None:
    md = _md()
    tokens = md.parse("$$\nx := 1")
    block = next(token for token in tokens if token.type == "playground-block")

    assert block.map == [0, 2]
    assert block.meta["closed"] is False
    assert md.render("$$\nx := 1") == f"{WIDGET}x := 1</textarea>"


def test_surrounding_blocks_are_rendered_normally() -> None:
    html = _md().render("# Title\n\nIntro\n\n$$\nx\n$$\n\nOutro\n")

    assert "<h1>Title</h1>" in html
    assert "<p>Intro</p>" in html
    assert f"{WIDGET}x</textarea>" in html
    assert "<p>Outro</p>" in html


def test_other_marker_lengths_are_left_to_other_rules() -> None:
    html = _md().render("$$$\nx\n$$$\n\n$\ny\n$\n")

    assert "textarea" not in html
    assert "$$$" in html


def test_backtick_fences_keep_dollar_lines() -> None:
    html = _md().render("```\n$$\ncode\n$$\n```\n")

    assert "textarea" not in html
    assert "<pre><code>$$\ncode\n$$\n</code></pre>" in html


def test_paragraph_is_not_interrupted_by_default() -> None:
    html = _md().render("Intro\n$$\nx\n$$\n")

    assert "textarea" not in html


def test_paragraph_interruption_can_be_enabled() -> None:
    html = _md(PlaygroundConfig(interrupt_paragraphs=True)).render("Intro\n$$\nx\n$$\n")

    assert "<p>Intro</p>" in html
    assert "x</textarea>" in html


def test_block_inside_list_item() -> None:
    html = _md().render("- item\n\n  $$\n  code\n  $$\n")

    assert "<li>" in html
    assert f"{WIDGET}code</textarea>" in html


def test_block_inside_blockquote() -> None:
    html = _md().render("> $$\n> a\n> $$\n")

    assert "<blockquote>" in html
    assert f"{WIDGET}a</textarea>" in html


def test_configuration_changes_placeholder() -> None:
    config = PlaygroundConfig(class_name="run-snippet", expanded=False, toggle_label="Show")
    html = _md(config).render("$$\nx\n$$\n")

    assert html == '<textarea data-expanded="0" data-title="Show" class="run-snippet">x</textarea>'


def test_consecutive_blocks_advance_the_cursor() -> None:
    tokens = _md().parse("$$\na\n$$\n$$\nb\n$$\n")
    blocks = [token for token in tokens if token.type == "playground-block"]

    assert [block.map for block in blocks] == [[0, 3], [3, 6]]
    assert [block.meta["code"] for block in blocks] == ["a", "b"]
