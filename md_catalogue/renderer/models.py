"""Shared dataclasses used by the Markdown rendering pipeline."""

from __future__ import annotations

import dataclasses as dc

from md_catalogue._constants import HEADING_KEYS


@dc.dataclass(frozen=True, slots=True)
class HeadingRecord:
    """Anchor metadata collected for one rendered heading.

    Attributes
    ----------
    title : str
        Plain-text content of the heading.
    anchor : str
        Page-namespaced slug assigned as the heading ``id``.
    level : str
        Heading tag, ``"h1"`` through ``"h6"``.
    """

    title: str
    anchor: str
    level: str

    def as_dict(self) -> dict[str, str]:
        """Return the record keyed the way the host application expects."""
        title_key, anchor_key, level_key = HEADING_KEYS
        return {title_key: self.title, anchor_key: self.anchor, level_key: self.level}


@dc.dataclass(slots=True)
class RenderContext:
    """Mutable state threaded through a single render pass.

    Attributes
    ----------
    page_name : str
        Namespace of the document being rendered.
    depth : int
        Number of registered containers enclosing the current position.
    """

    page_name: str = ""
    depth: int = 0

    def open_container(self) -> None:
        """Record entry into a registered container."""
        self.depth += 1

    def close_container(self) -> None:
        """Record exit from a registered container."""
        if self.depth == 0:
            msg = "Container closed without a matching open."
            raise RuntimeError(msg)
        self.depth -= 1

    @property
    def inside_container(self) -> bool:
        """Return whether at least one registered container is open."""
        return self.depth > 0


@dc.dataclass(frozen=True, slots=True)
class RenderResult:
    """HTML and heading records produced by one render pass."""

    html: str
    headings: tuple[HeadingRecord, ...]


__all__ = ["HeadingRecord", "RenderContext", "RenderResult"]
