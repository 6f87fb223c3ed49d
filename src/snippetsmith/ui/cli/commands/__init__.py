"""CLI command implementations exposed via `snippetsmith.ui.cli`."""

from __future__ import annotations

from .extract import extract
from .render import render


__all__ = ["extract", "render"]
