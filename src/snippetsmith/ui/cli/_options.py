"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from snippetsmith.adapters.markdown import DEFAULT_ENGINE, ENGINES


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"

InputPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="INPUT",
        help="Markdown (.md) document containing '$$' playground fences.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML site configuration (title, scripts, stylesheets, playground widget).",
        exists=True,
        dir_okay=False,
        readable=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

EngineOption = Annotated[
    str,
    typer.Option(
        "--engine",
        "-e",
        help=f"Markdown engine to use ({', '.join(ENGINES)}).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

StandaloneOption = Annotated[
    bool,
    typer.Option(
        "--standalone/--fragment",
        help="Wrap the HTML in a page loading the configured scripts and stylesheets.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

MarkdownExtensionsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--enable-extension",
        "-x",
        help=(
            "Additional Python-Markdown extensions to enable "
            "(comma or space separated values are accepted)."
        ),
        rich_help_panel=RENDERING_PANEL,
    ),
]

DisableMarkdownExtensionsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--disable-extension",
        "-d",
        help="Python-Markdown extensions to disable (comma or space separated).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output file. Defaults to standard output.",
        dir_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

OutputDirOption = Annotated[
    Path,
    typer.Option(
        "--output-dir",
        "-o",
        help="Directory receiving one sub-directory per snippet.",
        file_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

FilenameOption = Annotated[
    str,
    typer.Option(
        "--filename",
        help="File name used for every extracted snippet.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

PrefixOption = Annotated[
    str | None,
    typer.Option(
        "--prefix",
        help="Snippet directory prefix. Defaults to the input file stem.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]


__all__ = [
    "DEFAULT_ENGINE",
    "ConfigOption",
    "DisableMarkdownExtensionsOption",
    "EngineOption",
    "FilenameOption",
    "InputPathArgument",
    "MarkdownExtensionsOption",
    "OutputDirOption",
    "OutputPathOption",
    "PrefixOption",
    "StandaloneOption",
]
