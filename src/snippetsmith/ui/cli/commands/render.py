"""Implementation of the `snippetsmith render` command."""

from __future__ import annotations

from pathlib import Path

import typer

from snippetsmith.adapters.markdown import (
    DEFAULT_ENGINE,
    ENGINES,
    render_markdown,
    resolve_markdown_extensions,
)
from snippetsmith.adapters.page import render_page
from snippetsmith.core.config import SiteConfig, load_site_config
from snippetsmith.core.exceptions import ConfigError, MarkdownConversionError

from .._options import (
    ConfigOption,
    DisableMarkdownExtensionsOption,
    EngineOption,
    InputPathArgument,
    MarkdownExtensionsOption,
    OutputPathOption,
    StandaloneOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_snippet_summary
from ..state import emit_error, emit_warning, get_cli_state


def read_source(path: Path) -> str:
    """Read a Markdown input, raising ``typer.BadParameter`` on failure."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"Unable to read '{path}': {exc}") from exc


def load_config(path: Path | None) -> SiteConfig:
    """Load the optional site configuration, exiting with code 1 when invalid."""
    if path is None:
        return SiteConfig()
    try:
        return load_site_config(path)
    except ConfigError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


def render(
    input_path: InputPathArgument,
    output: OutputPathOption = None,
    config_path: ConfigOption = None,
    engine: EngineOption = DEFAULT_ENGINE,
    standalone: StandaloneOption = False,
    markdown_extensions: MarkdownExtensionsOption = None,
    disable_markdown_extensions: DisableMarkdownExtensionsOption = None,
) -> None:
    """Render a Markdown document, turning '$$' fences into playground snippets."""
    state = get_cli_state()
    if engine not in ENGINES:
        raise typer.BadParameter(
            f"Unknown engine '{engine}', expected one of: {', '.join(ENGINES)}.",
            param_hint="--engine",
        )
    site = load_config(config_path)
    source = read_source(input_path)
    extensions = resolve_markdown_extensions(markdown_extensions, disable_markdown_extensions)
    if engine == "markdown-it" and (markdown_extensions or disable_markdown_extensions):
        emit_warning("Markdown extensions are ignored by the markdown-it engine.")

    try:
        document = render_markdown(
            source,
            engine=engine,
            config=site.playground,
            extensions=extensions,
            emitter=CliEmitter(state),
        )
    except MarkdownConversionError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    html = render_page(document, site) if standalone else document.html

    if output is None:
        typer.echo(html, nl=False)
    else:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(html, encoding="utf-8")
        except OSError as exc:
            emit_error(f"Unable to write '{output}': {exc}", exception=exc)
            raise typer.Exit(code=1) from exc

    events = state.consume_events("playground_snippet")
    if state.verbosity >= 1:
        present_snippet_summary(state, events)


__all__ = ["load_config", "read_source", "render"]
