"""Pygments-backed highlighting for fenced code blocks.

:class:`CodeHighlighter` returns highlighted markup for a snippet, or an empty
string when the language is missing, unknown, or the lexer fails. The fence
formatter falls back to escaped plain text in that case so a bad language
label never breaks a render.

The module also ships :class:`FlexSearchLexer` for the catalogue's search
query syntax (``flexsearch`` or ``flex`` fences).
"""

from __future__ import annotations

import logging
import re
import typing as typ
from html import escape

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexer import RegexLexer, words
from pygments.lexers import get_lexer_by_name
from pygments.token import Keyword, Name, String, Text, Whitespace
from pygments.util import ClassNotFound

if typ.TYPE_CHECKING:
    from markdown import Markdown
    from pygments.lexer import Lexer

logger = logging.getLogger(__name__)


class FlexSearchLexer(RegexLexer):
    """Lexer for catalogue search queries such as ``(title 'foo' -boost``."""

    name = "FlexSearch"
    aliases = ["flexsearch", "flex"]
    filenames: list[str] = []
    flags = re.IGNORECASE

    tokens = {
        "root": [
            (r"\s+", Whitespace),
            (r"\([a-zA-Z]+", Name.Variable),
            (r"@[a-zA-Z]+", Name.Constant),
            (r"'[^']*'?", String.Single),
            (r"-[a-zA-Z]+", Name.Builtin),
            (words(("and", "or"), prefix=r"\b", suffix=r"\b"), Keyword),
            (r"\w+", Text),
            (r".", Text),
        ]
    }


class CodeHighlighter:
    """Highlight code with Pygments using a fixed style."""

    def __init__(self, pygments_style: str = "default") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, nowrap=True)

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for highlighted spans."""
        return HtmlFormatter(style=self.pygments_style).get_style_defs("pre code")

    def lexer_for(self, language: str) -> Lexer | None:
        """Return a lexer for ``language`` or ``None`` when none is known."""
        if language.lower() in FlexSearchLexer.aliases:
            return FlexSearchLexer()
        try:
            return get_lexer_by_name(language)
        except ClassNotFound:
            return None

    def highlight(self, code: str, language: str | None) -> str:
        """Return highlighted HTML for ``code`` or ``""`` when unavailable."""
        if not language:
            logger.debug("No language given for fenced block; leaving it plain.")
            return ""
        lexer = self.lexer_for(language)
        if lexer is None:
            logger.warning("No lexer registered for language '%s'.", language)
            return ""
        try:
            return highlight(code, lexer, self._formatter)
        except Exception:  # noqa: BLE001 - any lexer failure degrades to plain text
            logger.warning("Highlighting '%s' code failed.", language, exc_info=True)
            return ""

    def format_fence(
        self,
        source: str,
        language: str,
        class_name: str,  # noqa: ARG002
        options: dict[str, typ.Any],  # noqa: ARG002
        md: Markdown,  # noqa: ARG002
        **kwargs: typ.Any,  # noqa: ARG002
    ) -> str:
        """Render a fenced block; signature follows ``pymdownx.superfences``."""
        highlighted = self.highlight(source, language)
        body = highlighted or escape(source, quote=False)
        if highlighted.startswith("<pre"):
            return highlighted
        if language:
            safe_lang = escape(language, quote=True)
            return (
                f'<pre><code class="{safe_lang}" data-language="{safe_lang}">'
                f"{body}</code></pre>"
            )
        return f"<pre><code>{body}</code></pre>"

    def fence_config(self) -> dict[str, typ.Any]:
        """Return ``pymdownx.superfences`` settings routing every fence here."""
        return {
            "custom_fences": [
                {"name": "*", "class": "", "format": self.format_fence},
            ]
        }


__all__ = ["CodeHighlighter", "FlexSearchLexer"]
