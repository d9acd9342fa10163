"""Render Markdown documents to HTML and collect their heading anchors."""

from __future__ import annotations

import logging
import typing as typ

from markdown import Markdown

from md_catalogue.config import MarkdownConfig

from .containers import CalloutExtension
from .headings import HeadingAnchorExtension, HeadingCollector
from .highlight import CodeHighlighter
from .icons import IconExtension
from .models import RenderResult

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

logger = logging.getLogger(__name__)


class MarkdownRenderer:
    """Render Markdown with callouts, anchors, and highlighted code.

    A renderer owns one ``markdown.Markdown`` instance and one
    :class:`HeadingCollector`; render passes on the same renderer must not
    interleave.
    """

    def __init__(self, config: MarkdownConfig | None = None) -> None:
        """Initialize a renderer from Markdown options.

        Parameters
        ----------
        config : MarkdownConfig, optional
            Feature switches and Pygments style; defaults to
            :class:`MarkdownConfig` when ``None``.
        """
        self.config = config or MarkdownConfig()
        self.highlighter = CodeHighlighter(self.config.pygments_style)
        self.headings = HeadingCollector()
        self._md = self._build_markdown()

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self.highlighter.stylesheet

    def render(self, page_name: str, text: str) -> RenderResult:
        """Render one document and return its HTML and headings.

        Parameters
        ----------
        page_name : str
            Namespace prefixed to every heading anchor.
        text : str
            Markdown source.

        Returns
        -------
        RenderResult
            Rendered HTML together with the headings collected in document
            order. Headings from earlier renders are discarded.
        """
        self.headings.begin_render(page_name)
        self._md.reset()
        self._md.page_name = page_name  # type: ignore[attr-defined]
        html = self._md.convert(text)
        headings = self.headings.get_headings()
        logger.debug(
            "Rendered page '%s': %d chars, %d headings",
            page_name,
            len(html),
            len(headings),
        )
        return RenderResult(html=html, headings=headings)

    def _build_markdown(self) -> Markdown:
        extensions: list[Extension | str] = [
            "abbr",
            "attr_list",
            "def_list",
            "footnotes",
            "tables",
            "pymdownx.superfences",
            CalloutExtension(links=self.config.links),
            HeadingAnchorExtension(self.headings),
            IconExtension(),
        ]
        if self.config.typographer:
            extensions.append("smarty")
        if self.config.linkify:
            extensions.append("pymdownx.magiclink")
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "pymdownx.superfences": self.highlighter.fence_config(),
            },
            output_format="html",
        )
        if not self.config.html:
            md.preprocessors.deregister("html_block")
            md.inlinePatterns.deregister("html")
        return md


__all__ = ["MarkdownRenderer"]
