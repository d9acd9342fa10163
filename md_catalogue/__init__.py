"""Markdown, template, and search-index glue for the catalogue host shell.

This package wires Python-Markdown, Jinja2, and lunr behind the handful of
entry points the host application calls: render Markdown and collect heading
anchors, compile and apply templates, and build a search index.

Exports
-------
- ``CatalogueBridge``: string-typed facade registered on the host ``window``.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from md_catalogue import CatalogueBridge
>>> CatalogueBridge().compile("t", "{{ x }}")
True
"""

from __future__ import annotations

from .bridge import CatalogueBridge
from .cli import app, main

__all__ = ["CatalogueBridge", "app", "main"]
