"""Compile and apply Jinja templates without ever raising to the caller.

Compiled templates live in a :class:`TemplateCache` owned by whoever builds
the :class:`TemplateEngine`. Every operation returns a :class:`Result`; the
error message texts match what host applications already parse.

Helpers available in templates:

* ``compare(lvalue, operator, rvalue)``: comparison with JavaScript-style
  operators (``==``, ``===``, ``!=``, ``!==``, ``<``, ``>``, ``<=``, ``>=``,
  ``typeof``). With two arguments the operator defaults to ``===``.
* ``value|json``: JSON text of ``value``.
* ``{% filter md %}...{% endfilter %}``: Markdown rendered to HTML.
* ``items|each_upto(n)``: at most ``n`` leading items.

Example
-------
>>> from md_catalogue.templates import TemplateCache, TemplateEngine
>>> engine = TemplateEngine(TemplateCache())
>>> engine.compile("greeting", "Hello {{ name }}!")
True
>>> str(engine.transform("greeting", '{"name": "Ada"}'))
'Hello Ada!'
>>> str(engine.transform("missing", "{}"))
'Template:missing not found.'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import json
import logging
import operator as op
import typing as typ

from jinja2 import Environment, TemplateError as JinjaTemplateError, Undefined
from markupsafe import Markup

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Template

    from md_catalogue.renderer import MarkdownRenderer

logger = logging.getLogger(__name__)

_MISSING = object()


class TemplateErrorKind(enum.Enum):
    """Classification of template failures."""

    NOT_FOUND = "not_found"
    UNUSABLE = "unusable"
    COMPILE_FAILED = "compile_failed"


class TemplateHelperError(ValueError):
    """Raised by template helpers called with invalid arguments."""


@dc.dataclass(frozen=True, slots=True)
class TemplateError:
    """Structured description of a failed template operation."""

    kind: TemplateErrorKind
    message: str


@dc.dataclass(frozen=True, slots=True)
class Result:
    """Output of a template operation: a value or an error, never both."""

    value: str | None = None
    error: TemplateError | None = None

    @classmethod
    def success(cls, value: str) -> Result:
        """Return a successful result wrapping ``value``."""
        return cls(value=value)

    @classmethod
    def failure(cls, kind: TemplateErrorKind, message: str) -> Result:
        """Return a failed result and log the failure."""
        logger.warning(message)
        return cls(error=TemplateError(kind=kind, message=message))

    @property
    def ok(self) -> bool:
        """Return whether the operation succeeded."""
        return self.error is None

    def __str__(self) -> str:
        if self.error is not None:
            return self.error.message
        return self.value or ""


@dc.dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """A cached template, or the syntax error raised while compiling it."""

    template: Template | None = None
    error: Exception | None = None


class TemplateCache:
    """Named store of compiled templates with an explicit lifecycle."""

    def __init__(self) -> None:
        self._entries: dict[str, CompiledTemplate] = {}

    def put(self, name: str, entry: CompiledTemplate) -> None:
        """Store ``entry`` under ``name``, replacing any earlier template."""
        self._entries[name] = entry

    def get(self, name: str) -> CompiledTemplate | None:
        """Return the entry stored under ``name``, if any."""
        return self._entries.get(name)

    def evict(self, name: str) -> bool:
        """Drop ``name``; return whether it was present."""
        return self._entries.pop(name, None) is not None

    def clear(self) -> None:
        """Drop every cached template."""
        self._entries.clear()

    def names(self) -> list[str]:
        """Return cached template names in insertion order."""
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _js_typeof(value: object) -> str:
    """Return the JavaScript ``typeof`` name for a template value."""
    match value:
        case Undefined():
            return "undefined"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case _ if callable(value):
            return "function"
        case _:
            return "object"


def _strict_eq(left: object, right: object) -> bool:
    return type(left) is type(right) and left == right


COMPARE_OPERATORS: dict[str, cabc.Callable[[typ.Any, typ.Any], bool]] = {
    "==": op.eq,
    "===": _strict_eq,
    "!=": op.ne,
    "!==": lambda left, right: not _strict_eq(left, right),
    "<": op.lt,
    ">": op.gt,
    "<=": op.le,
    ">=": op.ge,
    "typeof": lambda left, right: _js_typeof(left) == right,
}


def compare(lvalue: object, operator: object, rvalue: object = _MISSING) -> bool:
    """Compare two values with a JavaScript-style operator."""
    if rvalue is _MISSING:
        rvalue, operator = operator, "==="
    func = COMPARE_OPERATORS.get(str(operator))
    if func is None:
        msg = f"Template helper 'compare' doesn't know the operator {operator}"
        raise TemplateHelperError(msg)
    return func(lvalue, rvalue)


def to_json(value: object) -> str:
    """Serialize ``value`` to JSON; undefined values render as nothing."""
    if isinstance(value, Undefined):
        return ""
    return json.dumps(value)


def each_upto(items: cabc.Iterable[typ.Any] | None, limit: int) -> list[typ.Any]:
    """Return at most ``limit`` leading items."""
    if not items or isinstance(items, Undefined):
        return []
    return list(items)[: max(limit, 0)]


class TemplateEngine:
    """Compile templates into a cache and render them against JSON data."""

    def __init__(
        self,
        cache: TemplateCache,
        *,
        markdown: MarkdownRenderer | None = None,
        autoescape: bool = True,
    ) -> None:
        """Initialize the engine.

        Parameters
        ----------
        cache : TemplateCache
            Store for compiled templates; the caller controls its lifetime.
        markdown : MarkdownRenderer, optional
            Renderer behind the ``md`` filter. A private renderer is created
            on first use when ``None`` so template rendering never disturbs
            the headings collected by the host's renderer.
        autoescape : bool, optional
            Escape interpolated values, as ``{{ }}`` does in the host's
            existing templates. Defaults to ``True``.
        """
        self.cache = cache
        self._markdown = markdown
        self.env = Environment(
            autoescape=autoescape,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals["compare"] = compare
        self.env.filters["json"] = to_json
        self.env.filters["md"] = self._render_markdown
        self.env.filters["each_upto"] = each_upto

    def _render_markdown(self, text: str) -> Markup:
        if self._markdown is None:
            from md_catalogue.renderer import MarkdownRenderer

            self._markdown = MarkdownRenderer()
        return Markup(self._markdown.render("", str(text)).html)

    def compile(self, name: str, source: str) -> bool:
        """Compile ``source`` into the cache under ``name``.

        Always returns ``True``; a syntax error is stored with the entry and
        reported when the template is used.
        """
        try:
            entry = CompiledTemplate(template=self.env.from_string(source))
        except JinjaTemplateError as exc:
            logger.warning("Template '%s' failed to compile: %s", name, exc)
            entry = CompiledTemplate(error=exc)
        self.cache.put(name, entry)
        return True

    def transform(self, name: str, data: str) -> Result:
        """Apply the cached template ``name`` to the JSON document ``data``."""
        entry = self.cache.get(name)
        if entry is None:
            return Result.failure(
                TemplateErrorKind.NOT_FOUND, f"Template:{name} not found."
            )
        try:
            if entry.template is None:
                raise entry.error or JinjaTemplateError("template missing")
            return Result.success(entry.template.render(_context(data)))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Template '%s' failed to render: %s", name, exc)
            return Result.failure(
                TemplateErrorKind.UNUSABLE,
                f"Template:{name} cannot be used. It could be due to errors in "
                f"template or it is not registered correctly. Error:{exc}",
            )

    def compile_and_transform(self, source: str, data: str) -> Result:
        """Compile ``source`` and apply it to ``data`` without caching."""
        try:
            template = self.env.from_string(source)
            return Result.success(template.render(_context(data)))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Inline template failed: %s", exc)
            return Result.failure(
                TemplateErrorKind.COMPILE_FAILED,
                f"Cannot compile the template. Error:{exc}",
            )


def _context(data: str) -> dict[str, typ.Any]:
    """Parse ``data`` and expose it both by key and as ``this``."""
    payload = json.loads(data)
    context = dict(payload) if isinstance(payload, dict) else {}
    context.setdefault("this", payload)
    return context


__all__ = [
    "COMPARE_OPERATORS",
    "CompiledTemplate",
    "Result",
    "TemplateCache",
    "TemplateEngine",
    "TemplateError",
    "TemplateErrorKind",
    "TemplateHelperError",
    "compare",
    "each_upto",
    "to_json",
]
