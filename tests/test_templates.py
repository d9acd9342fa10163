"""Unit tests for template compilation, application, and helpers.

Every engine operation must return a ``Result`` instead of raising; the error
messages keep the wording host scripts already look for.

Usage
-----
Run ``pytest tests/test_templates.py -v``.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from md_catalogue.templates import (
    Result,
    TemplateCache,
    TemplateEngine,
    TemplateErrorKind,
    TemplateHelperError,
    compare,
    each_upto,
)


@pytest.fixture
def cache() -> TemplateCache:
    """Return an empty template cache."""
    return TemplateCache()


@pytest.fixture
def engine(cache: TemplateCache) -> TemplateEngine:
    """Return an engine backed by the ``cache`` fixture."""
    return TemplateEngine(cache)


def test_compile_then_transform(engine: TemplateEngine, cache: TemplateCache) -> None:
    """A compiled template is cached and applied to JSON data."""
    assert engine.compile("card", "<b>{{ title }}</b>") is True
    assert "card" in cache and len(cache) == 1
    result = engine.transform("card", '{"title": "Hi & bye"}')
    assert result.ok
    assert result.value == "<b>Hi &amp; bye</b>"


def test_unknown_template_reports_not_found(engine: TemplateEngine) -> None:
    """Looking up an unregistered name yields a not-found error, not an exception."""
    result = engine.transform("nope", "{}")
    assert not result.ok
    assert result.error is not None
    assert result.error.kind is TemplateErrorKind.NOT_FOUND
    assert "nope" in str(result) and "not found" in str(result)


def test_invalid_json_reports_unusable(engine: TemplateEngine) -> None:
    """Malformed data is reported against the template name."""
    engine.compile("card", "{{ title }}")
    result = engine.transform("card", "{not json")
    assert result.error is not None
    assert result.error.kind is TemplateErrorKind.UNUSABLE
    assert str(result).startswith("Template:card cannot be used.")


def test_syntax_error_is_deferred_to_use(engine: TemplateEngine) -> None:
    """Compiling broken source still returns True; using it reports the error."""
    assert engine.compile("broken", "{% if %}") is True
    result = engine.transform("broken", "{}")
    assert result.error is not None
    assert result.error.kind is TemplateErrorKind.UNUSABLE
    assert "Error:" in str(result)


def test_recompile_replaces_template(engine: TemplateEngine) -> None:
    """Compiling under an existing name replaces the cached template."""
    engine.compile("t", "one")
    engine.compile("t", "two")
    assert str(engine.transform("t", "{}")) == "two"


def test_cache_evict_and_clear(engine: TemplateEngine, cache: TemplateCache) -> None:
    """Evicted templates are no longer found."""
    engine.compile("a", "A")
    engine.compile("b", "B")
    assert cache.names() == ["a", "b"]
    assert cache.evict("a") is True
    assert cache.evict("a") is False
    assert engine.transform("a", "{}").error is not None
    cache.clear()
    assert len(cache) == 0


def test_compile_and_transform(engine: TemplateEngine, cache: TemplateCache) -> None:
    """One-shot rendering works and leaves the cache untouched."""
    result = engine.compile_and_transform("{{ a }}-{{ b }}", '{"a": 1, "b": 2}')
    assert str(result) == "1-2"
    assert len(cache) == 0


def test_compile_and_transform_failure(engine: TemplateEngine) -> None:
    """Broken source is reported with the compile error prefix."""
    result = engine.compile_and_transform("{{ a ", "{}")
    assert result.error is not None
    assert result.error.kind is TemplateErrorKind.COMPILE_FAILED
    assert str(result).startswith("Cannot compile the template. Error:")


def test_non_object_data_is_available_as_this(engine: TemplateEngine) -> None:
    """Arrays and scalars are exposed as ``this``."""
    result = engine.compile_and_transform(
        "{% for item in this %}{{ item }};{% endfor %}", "[1, 2, 3]"
    )
    assert str(result) == "1;2;3;"


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ((1, "==", 1.0), True),
        ((1, "===", 1.0), False),
        ((1, "!==", "1"), True),
        ((2, "<", 3), True),
        ((3, ">=", 3), True),
        (("x", "typeof", "string"), True),
        ((True, "typeof", "boolean"), True),
        (("a", "a"), True),
        (("a", "b"), False),
    ],
)
def test_compare_operators(args: tuple[object, ...], expected: bool) -> None:
    """``compare`` follows JavaScript-style operator semantics."""
    assert compare(*args) is expected


def test_compare_rejects_unknown_operator() -> None:
    """An unknown operator raises inside the helper."""
    with pytest.raises(TemplateHelperError, match="doesn't know the operator"):
        compare(1, "<>", 2)


def test_compare_failure_becomes_error_result(engine: TemplateEngine) -> None:
    """Helper errors surface as an error result, never an exception."""
    engine.compile("cmp", "{% if compare(a, '<>', b) %}x{% endif %}")
    result = engine.transform("cmp", '{"a": 1, "b": 2}')
    assert result.error is not None
    assert "doesn't know the operator" in str(result)


def test_compare_in_template(engine: TemplateEngine) -> None:
    """The helper drives if/else branches."""
    engine.compile(
        "cmp", "{% if compare(count, '>', 1) %}many{% else %}one{% endif %}"
    )
    assert str(engine.transform("cmp", '{"count": 3}')) == "many"
    assert str(engine.transform("cmp", '{"count": 1}')) == "one"


def test_json_filter(engine: TemplateEngine) -> None:
    """The ``json`` filter serializes values (escaped like any output)."""
    result = engine.compile_and_transform("{{ tags|json }}", '{"tags": ["a"]}')
    assert str(result) == "[&#34;a&#34;]"


def test_each_upto_filter(engine: TemplateEngine) -> None:
    """``each_upto`` limits iteration and falls through to ``else`` when empty."""
    source = "{% for x in items|each_upto(2) %}{{ x }}{% else %}none{% endfor %}"
    assert str(engine.compile_and_transform(source, '{"items": [1, 2, 3]}')) == "12"
    assert str(engine.compile_and_transform(source, '{"items": []}')) == "none"
    assert each_upto(None, 3) == []


def test_md_filter_renders_markdown(engine: TemplateEngine) -> None:
    """The ``md`` filter renders Markdown without escaping the HTML."""
    source = "{% filter md %}::: info\n**{{ name }}**\n:::{% endfilter %}"
    result = engine.compile_and_transform(source, '{"name": "Ada"}')
    soup = BeautifulSoup(str(result), "html.parser")
    div = soup.find("div", class_="callout-info")
    assert div is not None and div.strong is not None
    assert div.strong.get_text() == "Ada"


def test_result_str() -> None:
    """``str`` of a result is its value or its error message."""
    assert str(Result.success("ok")) == "ok"
    assert str(Result.failure(TemplateErrorKind.NOT_FOUND, "missing")) == "missing"


@pytest.mark.parametrize(
    ("source", "data"),
    [
        ("{{ a / b }}", '{"a": 1, "b": 0}'),
        ("{{ a ** 5000 }}", '{"a": 2.5}'),
    ],
)
def test_runtime_errors_become_error_results(
    engine: TemplateEngine, source: str, data: str
) -> None:
    """Arithmetic failures while rendering are reported, not raised."""
    engine.compile("calc", source)
    cached = engine.transform("calc", data)
    assert cached.error is not None
    assert cached.error.kind is TemplateErrorKind.UNUSABLE
    assert str(cached).startswith("Template:calc cannot be used.")

    inline = engine.compile_and_transform(source, data)
    assert inline.error is not None
    assert inline.error.kind is TemplateErrorKind.COMPILE_FAILED
    assert str(inline).startswith("Cannot compile the template. Error:")
