"""Fenced ``:::`` callout and alert containers for Python-Markdown.

The extension registers a fixed vocabulary of block containers:

* callouts (``success``, ``info``, ``warning``, ``danger``) wrap their body in
  ``<div class="callout callout-{name}">``;
* alerts (``alert-success`` ... ``alert-danger``) wrap it in
  ``<div class="alert {name}" role="alert">``;
* the ``mermaid`` diagram container keeps its body verbatim.

A container opens with three or more colons followed by its name and closes
with a colon run at least as long as the opening one::

    :::: warning
    Outer text with a [link](https://example.com).

    ::: info
    Nested body.
    :::
    ::::

While walking the finished tree, the extension tracks how many callout or
alert containers enclose the current element and runs the link rule chain for
each anchor. With ``links`` enabled (the default) anchors nested inside a
container gain the ``alert-link`` class. Footnote references are generated
markup rather than authored links and are left alone.

Example
-------
>>> from markdown import Markdown
>>> from md_catalogue.renderer.containers import CalloutExtension
>>> md = Markdown(extensions=[CalloutExtension()])
>>> md.convert("::: info\\nHello\\n:::")
'<div class="callout callout-info">\\n<p>Hello</p>\\n</div>'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown.blockprocessors import BlockProcessor
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import AtomicString

from md_catalogue._constants import (
    ALERT_CLASS_TEMPLATE,
    ALERT_NAMES,
    CALLOUT_CLASS_TEMPLATE,
    CALLOUT_NAMES,
    DIAGRAM_CONTAINER,
    FOOTNOTE_REF_CLASS,
)

from .links import LinkRuleChain, alert_link_rule, link_rules_for
from .models import RenderContext

if typ.TYPE_CHECKING:
    from markdown import Markdown
    from markdown.blockparser import BlockParser

OPENING_FENCE = re.compile(r"^[ ]{0,3}(?P<marker>:{3,})(?P<params>.*)$", re.MULTILINE)
CLOSING_FENCE = re.compile(r"^[ ]{0,3}(?P<marker>:{3,})[ \t]*$", re.MULTILINE)
CONTAINER_MARKER_ATTR = "data-catalogue-container"


class ContainerKind(enum.Enum):
    """Rendering mode of a registered container."""

    CALLOUT = "callout"
    ALERT = "alert"
    DIAGRAM = "diagram"


@dc.dataclass(frozen=True, slots=True)
class ContainerStyle:
    """A named container and the wrapper it renders."""

    name: str
    kind: ContainerKind

    @property
    def tracks_depth(self) -> bool:
        """Return whether the container counts towards link styling."""
        return self.kind is not ContainerKind.DIAGRAM

    @property
    def parses_markdown(self) -> bool:
        """Return whether the container body is rendered as Markdown."""
        return self.kind is not ContainerKind.DIAGRAM

    def attributes(self) -> dict[str, str]:
        """Return the wrapper ``div`` attributes in output order."""
        match self.kind:
            case ContainerKind.CALLOUT:
                return {"class": CALLOUT_CLASS_TEMPLATE.format(name=self.name)}
            case ContainerKind.ALERT:
                return {
                    "class": ALERT_CLASS_TEMPLATE.format(name=self.name),
                    "role": "alert",
                }
            case _:
                return {"class": self.name}

    def enter(self, context: RenderContext) -> None:
        """Record that rendering moved inside this container."""
        if self.tracks_depth:
            context.open_container()

    def leave(self, context: RenderContext) -> None:
        """Record that rendering left this container."""
        if self.tracks_depth:
            context.close_container()


class ContainerRegistry:
    """Name-indexed collection of container styles."""

    def __init__(self) -> None:
        self._styles: dict[str, ContainerStyle] = {}

    def register(self, name: str, kind: ContainerKind) -> ContainerStyle:
        """Register ``name``; a repeated name replaces the earlier style."""
        style = ContainerStyle(name=name, kind=kind)
        self._styles[name] = style
        return style

    def register_callout_style(self, name: str) -> ContainerStyle:
        """Register a ``callout callout-{name}`` container."""
        return self.register(name, ContainerKind.CALLOUT)

    def register_alert_style(self, name: str) -> ContainerStyle:
        """Register an ``alert {name}`` container with ``role="alert"``."""
        return self.register(name, ContainerKind.ALERT)

    def get(self, name: str) -> ContainerStyle | None:
        """Return the style registered under ``name``, if any."""
        return self._styles.get(name)

    def claim(self, element: etree.Element) -> ContainerStyle | None:
        """Return the style that produced ``element`` and drop its marker."""
        name = element.attrib.pop(CONTAINER_MARKER_ATTR, None)
        if name is None:
            return None
        return self._styles.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._styles

    def __iter__(self) -> typ.Iterator[ContainerStyle]:
        return iter(self._styles.values())

    def __len__(self) -> int:
        return len(self._styles)


class ContainerBlockProcessor(BlockProcessor):
    """Turn ``:::`` fenced regions into container ``div`` elements."""

    def __init__(self, parser: BlockParser, registry: ContainerRegistry) -> None:
        super().__init__(parser)
        self.registry = registry

    def _find_opening(self, block: str) -> tuple[re.Match[str], ContainerStyle] | None:
        """Return the first opening fence naming a registered container."""
        for match in OPENING_FENCE.finditer(block):
            params = match.group("params").strip()
            if not params:
                continue
            style = self.registry.get(params.split(maxsplit=1)[0])
            if style is not None:
                return match, style
        return None

    def test(self, parent: etree.Element, block: str) -> bool:  # noqa: ARG002
        """Return whether ``block`` opens a registered container."""
        return self._find_opening(block) is not None

    def run(self, parent: etree.Element, blocks: list[str]) -> None:
        """Consume blocks up to the matching closing fence."""
        block = blocks.pop(0)
        found = self._find_opening(block)
        if found is None:  # pragma: no cover - guarded by test()
            blocks.insert(0, block)
            return
        match, style = found
        before = block[: match.start()].rstrip("\n")
        if before.strip():
            self.parser.parseBlocks(parent, [before])

        width = len(match.group("marker"))
        body: list[str] = []
        pending = block[match.end() :].lstrip("\n")
        while True:
            closing = self._find_closing(pending, width)
            if closing is not None:
                body.append(pending[: closing.start()])
                tail = pending[closing.end() :].strip("\n")
                if tail:
                    blocks.insert(0, tail)
                break
            body.append(pending)
            if not blocks:
                break
            pending = blocks.pop(0)

        content = "\n\n".join(chunk.strip("\n") for chunk in body if chunk.strip())
        div = etree.SubElement(parent, "div")
        for key, value in style.attributes().items():
            div.set(key, value)
        div.set(CONTAINER_MARKER_ATTR, style.name)
        if style.parses_markdown:
            self.parser.parseChunk(div, content)
        else:
            div.text = AtomicString(content)

    @staticmethod
    def _find_closing(text: str, width: int) -> re.Match[str] | None:
        """Return the first closing fence at least ``width`` colons long."""
        for closing in CLOSING_FENCE.finditer(text):
            if len(closing.group("marker")) >= width:
                return closing
        return None


class ContainerTreeprocessor(Treeprocessor):
    """Track container nesting and apply link rules to every anchor."""

    def __init__(self, md: Markdown, registry: ContainerRegistry) -> None:
        super().__init__(md)
        self.registry = registry

    def run(self, root: etree.Element) -> None:
        """Walk the tree with a fresh :class:`RenderContext`."""
        context = RenderContext(page_name=getattr(self.md, "page_name", ""))
        self._walk(root, context, link_rules_for(self.md))

    def _walk(
        self, element: etree.Element, context: RenderContext, chain: LinkRuleChain
    ) -> None:
        for child in element:
            style = self.registry.claim(child)
            if style is not None:
                style.enter(context)
            if child.tag == "a" and not _is_footnote_ref(child):
                chain.render(child, context)
            self._walk(child, context, chain)
            if style is not None:
                style.leave(context)


def _is_footnote_ref(element: etree.Element) -> bool:
    return FOOTNOTE_REF_CLASS in (element.get("class") or "").split()


def install_link_styling(md: Markdown, *, enabled: bool) -> bool:
    """Install the ``alert-link`` rule on ``md`` when ``enabled``.

    Rules installed earlier by other extensions stay in the chain and run
    after the class has been added.
    """
    if not enabled:
        return False
    link_rules_for(md).install(alert_link_rule)
    return True


def default_registry() -> ContainerRegistry:
    """Return a registry holding the callout, alert, and diagram containers."""
    registry = ContainerRegistry()
    for name in CALLOUT_NAMES:
        registry.register_callout_style(name)
    for name in ALERT_NAMES:
        registry.register_alert_style(name)
    registry.register(DIAGRAM_CONTAINER, ContainerKind.DIAGRAM)
    return registry


class CalloutExtension(Extension):
    """Register callout and alert containers on a Markdown instance."""

    def __init__(self, **kwargs: typ.Any) -> None:
        self.config = {
            "links": [True, "Add 'alert-link' to links inside containers."],
        }
        super().__init__(**kwargs)
        self.registry = default_registry()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the block processor, the tree walker, and link styling."""
        md.registerExtension(self)
        md.parser.blockprocessors.register(
            ContainerBlockProcessor(md.parser, self.registry),
            "catalogue_container",
            105,
        )
        md.treeprocessors.register(
            ContainerTreeprocessor(md, self.registry), "catalogue_container_links", 8
        )
        install_link_styling(md, enabled=bool(self.getConfig("links")))


__all__ = [
    "CalloutExtension",
    "ContainerBlockProcessor",
    "ContainerKind",
    "ContainerRegistry",
    "ContainerStyle",
    "ContainerTreeprocessor",
    "default_registry",
    "install_link_styling",
]
