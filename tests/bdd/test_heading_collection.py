"""Behaviour tests for per-render heading collection through the host bridge."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from md_catalogue import CatalogueBridge

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "heading_collection.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a catalogue bridge")
def given_bridge(scenario_state: dict[str, object]) -> None:
    """Store a bridge with default configuration."""
    scenario_state["bridge"] = CatalogueBridge()


@when(parsers.parse('I render page "{page}" with headings "{first}" and "{second}"'))
def when_render_page(
    scenario_state: dict[str, object], page: str, first: str, second: str
) -> None:
    """Render a document with two second-level headings."""
    bridge = typ.cast("CatalogueBridge", scenario_state["bridge"])
    bridge.render(page, f"## {first}\n\nText\n\n## {second}\n")


@then(parsers.parse('the collected anchors are "{first}" and "{second}"'))
def then_anchors(scenario_state: dict[str, object], first: str, second: str) -> None:
    """Verify only the latest page's headings are reported."""
    bridge = typ.cast("CatalogueBridge", scenario_state["bridge"])
    headings = msgspec_json.decode(bridge.get_headings())
    assert [h["Anchor"] for h in headings] == [first, second]
    assert {h["HeadingLevel"] for h in headings} == {"h2"}
