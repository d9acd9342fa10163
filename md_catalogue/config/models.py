"""Typed dataclasses describing md_catalogue configuration structures."""

from __future__ import annotations

import dataclasses as dc


class CatalogueConfigError(ValueError):
    """Raised when the catalogue configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class MarkdownConfig:
    """Options applied to the Markdown renderer."""

    links: bool = True
    linkify: bool = True
    typographer: bool = True
    html: bool = True
    pygments_style: str = "default"


@dc.dataclass(slots=True)
class SearchConfig:
    """Field layout of the generated search index."""

    ref: str = "id"
    title_boost: int = 10


@dc.dataclass(slots=True)
class CatalogueConfig:
    """Collection of renderer, template, and search settings."""

    markdown: MarkdownConfig = dc.field(default_factory=MarkdownConfig)
    search: SearchConfig = dc.field(default_factory=SearchConfig)
    template_autoescape: bool = True


__all__ = [
    "CatalogueConfig",
    "CatalogueConfigError",
    "MarkdownConfig",
    "SearchConfig",
]
