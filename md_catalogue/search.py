"""Build lunr.js-compatible search indexes from document collections.

Each document is a mapping with an ``id``, a ``title``, a ``body`` and an
``href``. The serialized index loads directly into ``lunr.Index.load`` in the
browser; the ``store`` maps each id back to the title and link shown in
search results.

Example
-------
>>> from md_catalogue.search import SearchIndexBuilder
>>> docs = [{"id": "1", "title": "Intro", "body": "Hello", "href": "intro.html"}]
>>> index = SearchIndexBuilder().create_index(docs)
>>> index.store
{'1': {'title': 'Intro', 'href': 'intro.html'}}
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ

from lunr import get_default_builder, lunr
from lunr.index import Index
from lunr.token_set import TokenSet

from md_catalogue.config import SearchConfig

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


class SearchIndexError(ValueError):
    """Raised when documents cannot be indexed."""


@dc.dataclass(slots=True)
class SearchIndex:
    """Serialized lunr index plus the id-to-link store."""

    index: dict[str, typ.Any]
    store: dict[str, dict[str, typ.Any]]

    def to_json(self) -> str:
        """Return the ``{"index": ..., "store": ...}`` payload."""
        return json.dumps({"index": self.index, "store": self.store})


class SearchIndexBuilder:
    """Index ``title`` (boosted) and ``body`` fields keyed by document id."""

    def __init__(self, config: SearchConfig | None = None) -> None:
        self.config = config or SearchConfig()

    def create_index(
        self, documents: cabc.Sequence[cabc.Mapping[str, typ.Any]]
    ) -> SearchIndex:
        """Index ``documents`` into a fresh lunr index.

        Parameters
        ----------
        documents : Sequence[Mapping[str, Any]]
            Documents carrying the configured ref field (``id`` by default),
            ``title``, ``body`` and ``href``. Missing ``title`` or ``body``
            values index as empty text.

        Returns
        -------
        SearchIndex
            The serialized index and a store keyed by document id, holding the
            title and href exactly as given.

        Raises
        ------
        SearchIndexError
            If a document is not a mapping or lacks the ref field.
        """
        ref = self.config.ref
        prepared: list[dict[str, typ.Any]] = []
        store: dict[str, dict[str, typ.Any]] = {}
        for position, doc in enumerate(documents):
            if not isinstance(doc, dict):
                msg = f"Document {position} is not an object."
                raise SearchIndexError(msg)
            if doc.get(ref) is None:
                msg = f"Document {position} has no '{ref}' field."
                raise SearchIndexError(msg)
            key = str(doc[ref])
            prepared.append(
                {
                    ref: key,
                    "title": _text(doc.get("title")),
                    "body": _text(doc.get("body")),
                }
            )
            store[key] = {"title": doc.get("title"), "href": doc.get("href")}

        fields = [{"field_name": "title", "boost": self.config.title_boost}, "body"]
        if not prepared:
            logger.debug("No documents to index")
            return SearchIndex(index=_empty_index().serialize(), store=store)
        idx = lunr(ref=ref, fields=fields, documents=prepared)
        logger.debug("Indexed %d documents", len(prepared))
        return SearchIndex(index=idx.serialize(), store=store)

    def create_index_from_json(self, data: str) -> SearchIndex:
        """Parse a JSON array of documents and index it."""
        documents = json.loads(data)
        if not isinstance(documents, list):
            msg = "Search documents must be a JSON array."
            raise SearchIndexError(msg)
        return self.create_index(documents)


def _text(value: object) -> str:
    return "" if value is None else str(value)


def _empty_index() -> Index:
    """Return an index with no documents.

    The lunr builder cannot average field lengths over zero documents, so the
    empty index is assembled from the default search pipeline directly.
    """
    return Index(
        inverted_index={},
        field_vectors={},
        token_set=TokenSet.from_list([]),
        fields=["title", "body"],
        pipeline=get_default_builder().search_pipeline,
    )


__all__ = ["SearchIndex", "SearchIndexBuilder", "SearchIndexError"]
