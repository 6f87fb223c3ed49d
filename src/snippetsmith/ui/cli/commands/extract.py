"""Implementation of the `snippetsmith extract` command."""

from __future__ import annotations

import typer

from snippetsmith.api.snippets import DEFAULT_SNIPPET_FILENAME, export_snippets, extract_snippets
from snippetsmith.core.exceptions import MarkdownConversionError, SnippetExportError

from .._options import (
    ConfigOption,
    FilenameOption,
    InputPathArgument,
    OutputDirOption,
    PrefixOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_export_summary
from ..state import emit_error, emit_warning, get_cli_state
from .render import load_config, read_source


def extract(
    input_path: InputPathArgument,
    output_dir: OutputDirOption,
    config_path: ConfigOption = None,
    filename: FilenameOption = DEFAULT_SNIPPET_FILENAME,
    prefix: PrefixOption = None,
) -> None:
    """Write every playground snippet of a document to its own program file."""
    state = get_cli_state()
    site = load_config(config_path)
    source = read_source(input_path)

    try:
        snippets = extract_snippets(source, site.playground)
    except MarkdownConversionError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if not snippets:
        emit_warning(f"No playground snippets found in '{input_path.name}'.")
        return

    for snippet in snippets:
        if not snippet.closed:
            start, end = snippet.line_range
            emit_warning(
                f"Snippet {snippet.index} (lines {start + 1}-{end}) has no closing fence."
            )

    try:
        written = export_snippets(
            snippets,
            output_dir,
            prefix=prefix or input_path.stem,
            filename=filename,
            emitter=CliEmitter(state),
        )
    except SnippetExportError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    present_export_summary(state, written)


__all__ = ["extract"]
