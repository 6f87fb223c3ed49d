"""Extraction of playground snippets into standalone program files."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
from pathlib import Path

from slugify import slugify

from snippetsmith.adapters.markdown import parse_snippets, split_front_matter
from snippetsmith.core.config import PlaygroundConfig
from snippetsmith.core.diagnostics import DiagnosticEmitter, NullEmitter
from snippetsmith.core.exceptions import SnippetExportError


__all__ = ["DEFAULT_SNIPPET_FILENAME", "Snippet", "export_snippets", "extract_snippets"]


logger = logging.getLogger(__name__)

DEFAULT_SNIPPET_FILENAME = "main.go"


@dataclass(frozen=True, slots=True)
class Snippet:
    """Code carried by one playground block."""

    index: int
    code: str
    line_range: tuple[int, int]
    info: str = ""
    closed: bool = True


def extract_snippets(source: str, config: PlaygroundConfig | None = None) -> list[Snippet]:
    """Return the playground snippets of a Markdown document in source order."""
    _, body = split_front_matter(source)
    return [
        Snippet(
            index=index,
            code=token.code,
            line_range=token.line_range,
            info=token.info,
            closed=token.closed,
        )
        for index, token in enumerate(parse_snippets(body, config), start=1)
    ]


def export_snippets(
    snippets: Iterable[Snippet],
    directory: Path | str,
    *,
    prefix: str = "snippet",
    filename: str = DEFAULT_SNIPPET_FILENAME,
    emitter: DiagnosticEmitter | None = None,
) -> list[Path]:
    """Write each snippet to ``<directory>/<prefix>-NN/<filename>``."""
    emitter = emitter or NullEmitter()
    root = Path(directory)
    slug = slugify(prefix, separator="-") or "snippet"
    if not filename or filename in {".", ".."} or Path(filename).name != filename:
        raise SnippetExportError(f"Snippet filename must be a bare file name, got '{filename}'.")

    written: list[Path] = []
    for snippet in snippets:
        target = root / f"{slug}-{snippet.index:02d}" / filename
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(snippet.code + "\n", encoding="utf-8")
        except OSError as exc:
            raise SnippetExportError(f"Unable to write snippet to '{target}': {exc}") from exc
        logger.debug("wrote snippet %d to %s", snippet.index, target)
        emitter.event("snippet_export", {"path": str(target), "index": snippet.index})
        written.append(target)
    return written
