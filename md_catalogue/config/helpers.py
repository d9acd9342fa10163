"""Utility helpers shared by the md_catalogue configuration loader."""

from __future__ import annotations

import typing as typ

from pygments.styles import get_all_styles

from .models import CatalogueConfigError, MarkdownConfig, SearchConfig


def _coerce_bool(value: object, *, field: str, default: bool) -> bool:
    """Return ``value`` as a boolean, rejecting anything that is not one."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    msg = f"'{field}' must be a boolean, got {value!r}."
    raise CatalogueConfigError(msg)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _section(
    raw: typ.Mapping[str, typ.Any], key: str
) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key`` or an empty mapping."""
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        msg = f"'{key}' section must be a mapping."
        raise CatalogueConfigError(msg)
    return value


def _build_markdown_config(payload: typ.Mapping[str, typ.Any]) -> MarkdownConfig:
    """Build a MarkdownConfig instance from the provided mapping payload."""
    base = MarkdownConfig()
    style = _optional_str(payload.get("pygments_style")) or base.pygments_style
    if style not in set(get_all_styles()):
        msg = f"Unknown pygments style '{style}'."
        raise CatalogueConfigError(msg)
    return MarkdownConfig(
        links=_coerce_bool(
            payload.get("links"), field="markdown.links", default=base.links
        ),
        linkify=_coerce_bool(
            payload.get("linkify"), field="markdown.linkify", default=base.linkify
        ),
        typographer=_coerce_bool(
            payload.get("typographer"),
            field="markdown.typographer",
            default=base.typographer,
        ),
        html=_coerce_bool(payload.get("html"), field="markdown.html", default=base.html),
        pygments_style=style,
    )


def _build_search_config(payload: typ.Mapping[str, typ.Any]) -> SearchConfig:
    """Build a SearchConfig instance from the provided mapping payload."""
    base = SearchConfig()
    ref = _optional_str(payload.get("ref")) or base.ref
    boost = payload.get("title_boost", base.title_boost)
    if isinstance(boost, bool) or not isinstance(boost, int) or boost < 1:
        msg = f"'search.title_boost' must be a positive integer, got {boost!r}."
        raise CatalogueConfigError(msg)
    return SearchConfig(ref=ref, title_boost=boost)


__all__ = [
    "_build_markdown_config",
    "_build_search_config",
    "_coerce_bool",
    "_optional_str",
    "_section",
]
