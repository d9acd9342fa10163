r"""Assign page-namespaced anchors to headings and collect them per render.

:class:`HeadingCollector` keeps the page namespace and the ordered list of
:class:`~md_catalogue.renderer.models.HeadingRecord` entries for one render
pass. :class:`HeadingAnchorExtension` plugs it into Python-Markdown: every
heading receives an ``id`` computed by :meth:`HeadingCollector.slugify`
unless it already carries one (for example through ``attr_list``).

Slugs are not de-duplicated; two headings with the same text on one page
share an anchor.

Example
-------
>>> from md_catalogue.renderer.headings import HeadingCollector
>>> collector = HeadingCollector()
>>> collector.begin_render("docs")
>>> collector.slugify("Hello, World!")
'docs/hello-world'
"""

from __future__ import annotations

import html
import json
import re
import typing as typ

from markdown.extensions import Extension
from markdown.extensions.toc import render_inner_html, strip_tags
from markdown.treeprocessors import Treeprocessor

from md_catalogue._constants import PAGE_SEPARATOR

from .models import HeadingRecord

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

# ASCII word characters so accented letters are dropped rather than kept.
DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
SEPARATOR_RUN = re.compile(r"[\s_-]+")
HEADING_TAG = re.compile(r"^h[1-6]$")


class HeadingCollector:
    """Slug generator and heading accumulator for a single render pass."""

    def __init__(self) -> None:
        self.page_name = ""
        self._records: list[HeadingRecord] = []

    def begin_render(self, page_name: str) -> None:
        """Drop previously collected headings and switch to ``page_name``."""
        self._records = []
        self.page_name = page_name

    def slugify(self, heading_text: str) -> str:
        """Return the page-namespaced, URL-safe anchor for ``heading_text``.

        Parameters
        ----------
        heading_text : str
            Plain text of the heading.

        Returns
        -------
        str
            ``"<page>/<normalized>"`` where the normalized part is lowercase,
            limited to ASCII letters, digits and hyphens, with runs of
            whitespace, underscores and hyphens collapsed to one hyphen and no
            leading or trailing hyphen.
        """
        normalized = DISALLOWED_CHARS.sub("", heading_text.lower())
        normalized = SEPARATOR_RUN.sub("-", normalized).strip("-")
        return f"{self.page_name}{PAGE_SEPARATOR}{normalized}"

    def on_heading_anchor_assigned(self, title: str, slug: str, level: str) -> None:
        """Record a heading whose anchor was just assigned."""
        self._records.append(HeadingRecord(title=title, anchor=slug, level=level))

    def get_headings(self) -> tuple[HeadingRecord, ...]:
        """Return the collected headings in document order."""
        return tuple(self._records)

    def to_json(self) -> str:
        """Return the collected headings as the host-facing JSON array."""
        return json.dumps([record.as_dict() for record in self._records])


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Set heading ids and report them to the collector."""

    def __init__(self, md: Markdown, collector: HeadingCollector) -> None:
        super().__init__(md)
        self.collector = collector

    def run(self, root: Element) -> None:
        """Visit headings in document order."""
        for element in root.iter():
            if not isinstance(element.tag, str) or not HEADING_TAG.match(element.tag):
                continue
            title = self._heading_text(element)
            slug = element.get("id") or self.collector.slugify(title)
            element.set("id", slug)
            self.collector.on_heading_anchor_assigned(title, slug, element.tag)

    def _heading_text(self, element: Element) -> str:
        return html.unescape(strip_tags(render_inner_html(element, self.md)))


class HeadingAnchorExtension(Extension):
    """Attach a :class:`HeadingCollector` to a Markdown instance."""

    def __init__(
        self, collector: HeadingCollector | None = None, **kwargs: typ.Any
    ) -> None:
        super().__init__(**kwargs)
        self.collector = collector or HeadingCollector()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading anchor treeprocessor after inline processing."""
        md.treeprocessors.register(
            HeadingAnchorTreeprocessor(md, self.collector), "catalogue_headings", 7
        )


__all__ = [
    "HeadingAnchorExtension",
    "HeadingAnchorTreeprocessor",
    "HeadingCollector",
]
