"""Configuration models for the playground snippet widget and site shell.

PlaygroundConfig

`class_name` (`str`)
: CSS class carried by every snippet placeholder. Client-side playground
  scripts locate placeholders by this class only, so keep it stable.

`expanded` (`bool`)
: Whether snippets are initially displayed expanded. Rendered as
  `data-expanded="1"` or `data-expanded="0"`.

`toggle_label` (`str`)
: Label of the expand/collapse control, rendered as `data-title`.

`interrupt_paragraphs` (`bool`)
: Allow a `$$` opening fence to end a running paragraph. When `False`
  (default) the fence must start a new block.

SiteConfig

`title` (`str`)
: Title of standalone pages.

`scripts` (`list[str]`)
: Script URLs appended to standalone pages, typically the playground runtime
  that upgrades the placeholders.

`stylesheets` (`list[str]`)
: Stylesheet URLs linked from standalone pages.

`playground` (`PlaygroundConfig`)
: Nested snippet widget configuration.
"""

from __future__ import annotations

from pathlib import Path
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import ConfigError


__all__ = ["PlaygroundConfig", "SiteConfig", "load_site_config"]


_CSS_IDENTIFIER = re.compile(r"^-?[A-Za-z_][A-Za-z0-9_-]*$")


class PlaygroundConfig(BaseModel):
    """Options of the snippet placeholder markup."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    class_name: str = Field(default="go-playground-snippet", description="Placeholder class")
    expanded: bool = Field(default=True, description="Initial expand state")
    toggle_label: str = Field(default="Toggle snippet", description="Toggle control label")
    interrupt_paragraphs: bool = False

    @field_validator("class_name")
    @classmethod
    def check_class_name(cls, value: str) -> str:
        """Reject values that are not a single CSS class identifier."""
        if not _CSS_IDENTIFIER.match(value):
            raise ValueError(f"'{value}' is not a valid CSS class name")
        return value

    @field_validator("toggle_label")
    @classmethod
    def check_toggle_label(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("toggle label must not be empty")
        return stripped


class SiteConfig(BaseModel):
    """Settings of the standalone page shell."""

    model_config = ConfigDict(extra="forbid")

    title: str = "Documentation"
    scripts: list[str] = Field(default_factory=list)
    stylesheets: list[str] = Field(default_factory=list)
    playground: PlaygroundConfig = Field(default_factory=PlaygroundConfig)


def load_site_config(path: Path | str) -> SiteConfig:
    """Read and validate a YAML site configuration file."""
    config_path = Path(path)
    try:
        payload = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration '{config_path}': {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Configuration '{config_path}' must contain a mapping.")

    try:
        return SiteConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration '{config_path}': {exc}") from exc
