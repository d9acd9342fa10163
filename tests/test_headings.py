"""Unit tests for heading slugs and heading collection.

The slug tests exercise ``HeadingCollector.slugify`` directly; the collection
tests render Markdown through ``MarkdownRenderer`` and inspect both the
``RenderResult`` headings and the ``id`` attributes written into the HTML.

Usage
-----
Run ``pytest tests/test_headings.py -v``.
"""

from __future__ import annotations

import re
import warnings

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup

from md_catalogue.renderer import HeadingCollector, HeadingRecord, MarkdownRenderer


@pytest.fixture
def collector() -> HeadingCollector:
    """Return a collector bound to the ``docs`` page."""
    collector = HeadingCollector()
    collector.begin_render("docs")
    return collector


@pytest.mark.parametrize(
    ("page", "text", "expected"),
    [
        ("docs", "Hello, World!", "docs/hello-world"),
        (
            "p",
            "  multiple   spaces--and__underscores  ",
            "p/multiple-spaces-and-underscores",
        ),
        ("p", "Version 2.0 (beta)", "p/version-20-beta"),
        ("p", "---", "p/"),
        ("p", "", "p/"),
        ("p", "Café au lait", "p/caf-au-lait"),
    ],
)
def test_slugify(page: str, text: str, expected: str) -> None:
    """Slugs are lowercase, hyphenated, and prefixed with the page name."""
    collector = HeadingCollector()
    collector.begin_render(page)
    actual = collector.slugify(text)
    assert actual == expected, f"slugify({text!r}) gave {actual!r}"


def test_slug_alphabet(collector: HeadingCollector) -> None:
    """Only ``[a-z0-9-]`` follows the page separator."""
    text = "What's new? Tabs\tand (parens), #hashes & 100% more!"
    slug = collector.slugify(text)
    page, _, rest = slug.partition("/")
    assert page == "docs"
    assert re.fullmatch(r"[a-z0-9-]*", rest), slug
    assert not rest.startswith("-") and not rest.endswith("-")


def test_slug_without_begin_render_has_empty_namespace() -> None:
    """A collector that never began a render uses an empty page name."""
    assert HeadingCollector().slugify("Intro") == "/intro"


def test_collector_records_in_order(collector: HeadingCollector) -> None:
    """Records come back in the order they were assigned."""
    collector.on_heading_anchor_assigned("A", "docs/a", "h1")
    collector.on_heading_anchor_assigned("B", "docs/b", "h2")
    assert collector.get_headings() == (
        HeadingRecord("A", "docs/a", "h1"),
        HeadingRecord("B", "docs/b", "h2"),
    )
    decoded = msgspec_json.decode(collector.to_json())
    assert decoded == [
        {"Title": "A", "Anchor": "docs/a", "HeadingLevel": "h1"},
        {"Title": "B", "Anchor": "docs/b", "HeadingLevel": "h2"},
    ]


def test_render_assigns_ids_and_collects() -> None:
    """Rendering writes namespaced ids and returns headings in order."""
    renderer = MarkdownRenderer()
    result = renderer.render(
        "guide",
        "# Getting Started\n\nText\n\n## Install *now*\n\n### Step_one\n",
    )
    soup = BeautifulSoup(result.html, "html.parser")
    assert [h.get("id") for h in soup.find_all(["h1", "h2", "h3"])] == [
        "guide/getting-started",
        "guide/install-now",
        "guide/step-one",
    ]
    assert result.headings == (
        HeadingRecord("Getting Started", "guide/getting-started", "h1"),
        HeadingRecord("Install now", "guide/install-now", "h2"),
        HeadingRecord("Step_one", "guide/step-one", "h3"),
    )


def test_duplicate_headings_share_anchor() -> None:
    """Headings with the same text are not disambiguated."""
    result = MarkdownRenderer().render("p", "## Usage\n\n## Usage\n")
    assert [h.anchor for h in result.headings] == ["p/usage", "p/usage"]


def test_explicit_id_is_kept() -> None:
    """An ``attr_list`` id wins over the computed slug."""
    result = MarkdownRenderer().render("p", "## Setup {: #custom-setup }\n")
    assert result.headings == (HeadingRecord("Setup", "custom-setup", "h2"),)
    assert 'id="custom-setup"' in result.html


def test_headings_inside_containers_are_collected() -> None:
    """Headings nested in callouts are part of the document order."""
    result = MarkdownRenderer().render(
        "p", "# Top\n\n::: info\n## Inner\n:::\n\n## Bottom\n"
    )
    assert [h.title for h in result.headings] == ["Top", "Inner", "Bottom"]


def test_new_render_discards_previous_headings() -> None:
    """Headings from page1 do not survive a render of page2."""
    renderer = MarkdownRenderer()
    renderer.render("page1", "# One\n\n## Two\n")
    result = renderer.render("page2", "# Three\n")
    assert result.headings == (HeadingRecord("Three", "page2/three", "h1"),)
    assert renderer.headings.get_headings() == result.headings


def test_code_in_heading_contributes_text() -> None:
    """Inline code text is part of the heading title and slug."""
    result = MarkdownRenderer().render("api", "## The `render` call\n")
    assert result.headings[0].title == "The render call"
    assert result.headings[0].anchor == "api/the-render-call"


def test_heading_text_without_deprecated_helpers() -> None:
    """Inline HTML and entities in headings reduce to plain title text."""
    renderer = MarkdownRenderer()
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "error", category=DeprecationWarning, module="md_catalogue"
        )
        result = renderer.render("menu", "## Fish &amp; <em>Chips</em>\n")
    assert result.headings == (
        HeadingRecord("Fish & Chips", "menu/fish-chips", "h2"),
    )
