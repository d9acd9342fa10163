"""Load catalogue configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_markdown_config,
    _build_search_config,
    _coerce_bool,
    _section,
)
from .models import CatalogueConfig


def load_catalogue_config(path: Path) -> CatalogueConfig:
    """Load the YAML configuration describing renderer and index options.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``catalogue.yaml``).

    Returns
    -------
    CatalogueConfig
        Parsed configuration with defaults applied for every missing key.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    CatalogueConfigError
        If a section or value is of the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from md_catalogue.config import load_catalogue_config
    >>> config = load_catalogue_config(Path("catalogue.yaml"))  # doctest: +SKIP
    >>> config.markdown.links  # doctest: +SKIP
    True
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    return build_catalogue_config(raw)


def build_catalogue_config(raw: typ.Mapping[str, typ.Any]) -> CatalogueConfig:
    """Build a CatalogueConfig from an already parsed mapping."""
    templates = _section(raw, "templates")
    return CatalogueConfig(
        markdown=_build_markdown_config(_section(raw, "markdown")),
        search=_build_search_config(_section(raw, "search")),
        template_autoescape=_coerce_bool(
            templates.get("autoescape"), field="templates.autoescape", default=True
        ),
    )


__all__ = ["build_catalogue_config", "load_catalogue_config"]
