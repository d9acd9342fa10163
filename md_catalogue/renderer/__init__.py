"""Markdown rendering: callout containers, heading anchors, code highlighting."""

from .containers import CalloutExtension, ContainerKind, ContainerRegistry, ContainerStyle
from .headings import HeadingAnchorExtension, HeadingCollector
from .highlight import CodeHighlighter, FlexSearchLexer
from .icons import IconExtension
from .links import LinkRuleChain, alert_link_rule
from .models import HeadingRecord, RenderContext, RenderResult
from .renderer import MarkdownRenderer

__all__ = [
    "CalloutExtension",
    "CodeHighlighter",
    "ContainerKind",
    "ContainerRegistry",
    "ContainerStyle",
    "FlexSearchLexer",
    "HeadingAnchorExtension",
    "HeadingCollector",
    "HeadingRecord",
    "IconExtension",
    "LinkRuleChain",
    "MarkdownRenderer",
    "RenderContext",
    "RenderResult",
    "alert_link_rule",
]
