"""Chain of link rules applied to hyperlinks during a render pass.

Extensions install rules instead of overwriting one another: each rule
receives the anchor element, the current :class:`RenderContext`, and a
``proceed`` callable that runs the rules installed before it.

Example
-------
>>> from xml.etree.ElementTree import Element
>>> from md_catalogue.renderer.links import LinkRuleChain, alert_link_rule
>>> from md_catalogue.renderer.models import RenderContext
>>> chain = LinkRuleChain()
>>> chain.install(alert_link_rule)
>>> link = Element("a", {"href": "#"})
>>> chain.render(link, RenderContext(depth=1))
>>> link.get("class")
'alert-link'
"""

from __future__ import annotations

import typing as typ

from md_catalogue._constants import ALERT_LINK_CLASS

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from .models import RenderContext

LinkHandler = typ.Callable[["Element", "RenderContext"], None]
LinkRule = typ.Callable[["Element", "RenderContext", LinkHandler], None]


def _default_link(element: Element, context: RenderContext) -> None:
    """Leave the anchor for the serializer untouched."""


class LinkRuleChain:
    """Compose link rules so that later rules wrap earlier ones."""

    def __init__(self) -> None:
        self._handler: LinkHandler = _default_link
        self._rules: list[LinkRule] = []

    def install(self, rule: LinkRule) -> None:
        """Wrap the current handler with ``rule``."""
        previous = self._handler

        def _handler(element: Element, context: RenderContext) -> None:
            rule(element, context, previous)

        self._handler = _handler
        self._rules.append(rule)

    def render(self, element: Element, context: RenderContext) -> None:
        """Run every installed rule against ``element``."""
        self._handler(element, context)

    @property
    def rules(self) -> tuple[LinkRule, ...]:
        """Installed rules in installation order."""
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


def link_rules_for(md: Markdown) -> LinkRuleChain:
    """Return the chain attached to ``md``, creating it on first use."""
    chain = getattr(md, "link_rules", None)
    if chain is None:
        chain = LinkRuleChain()
        md.link_rules = chain  # type: ignore[attr-defined]
    return chain


def append_class(element: Element, css_class: str) -> None:
    """Add ``css_class`` to the element's class list once."""
    classes = (element.get("class") or "").split()
    if css_class not in classes:
        classes.append(css_class)
    element.set("class", " ".join(classes))


def alert_link_rule(
    element: Element, context: RenderContext, proceed: LinkHandler
) -> None:
    """Mark links rendered inside a callout or alert container."""
    if context.inside_container:
        append_class(element, ALERT_LINK_CLASS)
    proceed(element, context)


__all__ = [
    "LinkHandler",
    "LinkRule",
    "LinkRuleChain",
    "alert_link_rule",
    "append_class",
    "link_rules_for",
]
