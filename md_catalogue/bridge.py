"""String-typed entry points consumed by the host application.

The host shell registers these callables as globals on its ``window`` object
and only exchanges strings (and one boolean) with them. Every call absorbs
failures and returns a descriptive string instead of raising.

Example
-------
>>> from md_catalogue.bridge import CatalogueBridge
>>> bridge = CatalogueBridge()
>>> bridge.render("docs", "# Hello")
'<h1 id="docs/hello">Hello</h1>'
>>> bridge.get_headings()
'[{"Title": "Hello", "Anchor": "docs/hello", "HeadingLevel": "h1"}]'
"""

from __future__ import annotations

import logging
import typing as typ

from .config import CatalogueConfig
from .renderer import MarkdownRenderer
from .search import SearchIndexBuilder
from .templates import TemplateCache, TemplateEngine

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


class CatalogueBridge:
    """Host-facing facade over the renderer, templates, and search index."""

    def __init__(
        self,
        config: CatalogueConfig | None = None,
        *,
        cache: TemplateCache | None = None,
    ) -> None:
        """Initialize the bridge.

        Parameters
        ----------
        config : CatalogueConfig, optional
            Renderer, template and search options; defaults when ``None``.
        cache : TemplateCache, optional
            Compiled-template store; pass one in to share or inspect it.
        """
        self.config = config or CatalogueConfig()
        self.renderer = MarkdownRenderer(self.config.markdown)
        self.templates = TemplateEngine(
            cache if cache is not None else TemplateCache(),
            markdown=MarkdownRenderer(self.config.markdown),
            autoescape=self.config.template_autoescape,
        )
        self.search = SearchIndexBuilder(self.config.search)

    def render(self, page_name: str, text: str) -> str:
        """Render ``text`` and remember its headings for :meth:`get_headings`."""
        return self.renderer.render(page_name, text).html

    def get_headings(self) -> str:
        """Return the headings of the last render as a JSON array."""
        return self.renderer.headings.to_json()

    def compile(self, template_name: str, template_source: str) -> bool:
        """Compile and cache a template."""
        return self.templates.compile(template_name, template_source)

    def transform(self, template_name: str, json_data: str) -> str:
        """Apply a cached template to JSON data."""
        return str(self.templates.transform(template_name, json_data))

    def compile_and_transform(self, template_source: str, json_data: str) -> str:
        """Compile a template and apply it in one step."""
        return str(self.templates.compile_and_transform(template_source, json_data))

    def create_index(self, json_docs: str) -> str:
        """Build the search index JSON for a JSON array of documents."""
        try:
            return self.search.create_index_from_json(json_docs).to_json()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Search index creation failed: %s", exc)
            return f"Cannot create the index. Error:{exc}"

    def exports(self) -> dict[str, cabc.Callable[..., typ.Any]]:
        """Return the callables under the names the host scripts call."""
        return {
            "render": self.render,
            "getHeadings": self.get_headings,
            "compile": self.compile,
            "transform": self.transform,
            "compileAndTransform": self.compile_and_transform,
            "createIndex": self.create_index,
        }


__all__ = ["CatalogueBridge"]
