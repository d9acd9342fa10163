"""Cyclopts CLI entrypoint for rendering Markdown, templates, and search indexes.

The ``catalogue`` console script exposes the same operations the host
application calls through :class:`~md_catalogue.bridge.CatalogueBridge`, which
makes it handy for previewing pages and regenerating indexes in CI.

Examples
--------
Render a page and write its headings next to it:

>>> from md_catalogue.cli import app
>>> app.run(
...     ["render", "guide", "docs/guide.md", "--headings-out", "guide.json"]
... )  # doctest: +SKIP

Build the search index for a document dump:

>>> app.run(["index", "docs.json", "--output", "search.json"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .bridge import CatalogueBridge
from .config import CatalogueConfig, load_catalogue_config

DEFAULT_CONFIG = Path("catalogue.yaml")

app = App(name="catalogue", config=cyclopts.config.Env("CATALOGUE_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to catalogue config", env_var="CATALOGUE_CONFIG")
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log debug output")]


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(path: Path) -> CatalogueConfig:
    """Load ``path``, falling back to defaults when the default file is absent."""
    if path == DEFAULT_CONFIG and not path.exists():
        return CatalogueConfig()
    return load_catalogue_config(path)


@app.command(help="Render a Markdown file to HTML.")
def render(
    page: str,
    source: Path,
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Write HTML here instead of stdout")
    ] = None,
    headings_out: typ.Annotated[
        Path | None, Parameter(help="Write the collected headings as JSON")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Render ``source`` under the page namespace ``page``.

    Parameters
    ----------
    page : str
        Namespace prefixed to every heading anchor.
    source : Path
        Markdown file to render.
    output : Path or None, optional
        Destination for the HTML; printed to stdout when ``None``.
    headings_out : Path or None, optional
        Destination for the heading JSON array; skipped when ``None``.
    config : Path, optional
        Catalogue configuration file (``CATALOGUE_CONFIG``).
    verbose : bool, optional
        Enable debug logging.
    """
    _configure_logging(verbose=verbose)
    bridge = CatalogueBridge(_load_config(config))
    html = bridge.render(page, source.read_text(encoding="utf-8"))
    if output:
        output.write_text(html, encoding="utf-8")
        print(f"wrote {output}")
    else:
        print(html)
    if headings_out:
        headings_out.write_text(bridge.get_headings(), encoding="utf-8")
        print(f"wrote {headings_out}")


@app.command(help="Apply a Jinja template to a JSON document.")
def transform(
    template: Path,
    data: Path,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Render ``template`` against the JSON in ``data`` and print the result."""
    _configure_logging(verbose=verbose)
    bridge = CatalogueBridge(_load_config(config))
    name = template.stem
    bridge.compile(name, template.read_text(encoding="utf-8"))
    print(bridge.transform(name, data.read_text(encoding="utf-8")))


@app.command(help="Build a lunr search index from a JSON array of documents.")
def index(
    docs: Path,
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the index here instead of stdout")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Index the documents in ``docs`` and emit the index JSON."""
    _configure_logging(verbose=verbose)
    bridge = CatalogueBridge(_load_config(config))
    payload = bridge.create_index(docs.read_text(encoding="utf-8"))
    if output:
        output.write_text(payload, encoding="utf-8")
        print(f"wrote {output}")
    else:
        print(payload)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``catalogue`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
