"""Standalone HTML page shell loading the client-side playground assets."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from snippetsmith.core.config import SiteConfig
from snippetsmith.core.markup import Markup

from .markdown import MarkdownDocument


__all__ = ["TEMPLATE_DIR", "PageFormatter", "render_page"]


TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


class PageFormatter:
    """Render rendered Markdown documents into complete HTML pages."""

    def __init__(self, template_dir: Path = TEMPLATE_DIR, template_name: str = "page.html") -> None:
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template_name = template_name

    def render(self, document: MarkdownDocument, site: SiteConfig) -> str:
        """Return the page for ``document``; front matter may override the title."""
        front_matter: dict[str, Any] = document.front_matter or {}
        title = front_matter.get("title") or site.title
        template = self.env.get_template(self.template_name)
        return template.render(
            title=str(title),
            language=front_matter.get("language"),
            # The document body is already rendered HTML.
            body=Markup(document.html),
            scripts=list(site.scripts),
            stylesheets=list(site.stylesheets),
        )


def render_page(document: MarkdownDocument, site: SiteConfig | None = None) -> str:
    """Render ``document`` with the default page template."""
    return PageFormatter().render(document, site or SiteConfig())
