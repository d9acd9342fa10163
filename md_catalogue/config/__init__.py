"""Load and validate catalogue configuration YAML.

This subpackage parses the optional ``catalogue.yaml`` file, applies defaults
for every missing option, and produces typed dataclasses
(:class:`CatalogueConfig`, :class:`MarkdownConfig`, :class:`SearchConfig`)
that the renderer, template engine, and search index builder consume.

Examples
--------
>>> from md_catalogue.config import CatalogueConfig
>>> CatalogueConfig().markdown.links
True
"""

from .loader import build_catalogue_config, load_catalogue_config
from .models import CatalogueConfig, CatalogueConfigError, MarkdownConfig, SearchConfig

__all__ = [
    "CatalogueConfig",
    "CatalogueConfigError",
    "MarkdownConfig",
    "SearchConfig",
    "build_catalogue_config",
    "load_catalogue_config",
]
