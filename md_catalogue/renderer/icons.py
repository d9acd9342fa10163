"""Font Awesome shorthand: ``:fa-name:`` renders ``<i class="fa fa-name"></i>``."""

from __future__ import annotations

import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor

if typ.TYPE_CHECKING:
    import re

    from markdown import Markdown

ICON_PATTERN = r":fa-([\w-]+?):"


class IconInlineProcessor(InlineProcessor):
    """Replace ``:fa-name:`` with an empty icon element."""

    def handleMatch(  # type: ignore[override]  # noqa: N802
        self, m: re.Match[str], data: str  # noqa: ARG002
    ) -> tuple[etree.Element, int, int]:
        element = etree.Element("i")
        element.set("class", f"fa fa-{m.group(1)}")
        return element, m.start(0), m.end(0)


class IconExtension(Extension):
    """Register the Font Awesome inline pattern."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        md.inlinePatterns.register(
            IconInlineProcessor(ICON_PATTERN, md), "catalogue_icons", 175
        )


__all__ = ["ICON_PATTERN", "IconExtension", "IconInlineProcessor"]
