"""Common literal values used across md_catalogue.

These constants keep container names, CSS classes, and JSON keys centralized
so renderers, the host bridge, and tests can import the same values without
drifting. Intended for internal use within the md_catalogue package.

Examples
--------
>>> from md_catalogue import _constants
>>> _constants.CALLOUT_CLASS_TEMPLATE.format(name="info")
'callout callout-info'
>>> len(_constants.CALLOUT_NAMES + _constants.ALERT_NAMES)
8
"""

CALLOUT_NAMES = ("success", "info", "warning", "danger")
ALERT_NAMES = ("alert-success", "alert-info", "alert-warning", "alert-danger")
CALLOUT_CLASS_TEMPLATE = "callout callout-{name}"
ALERT_CLASS_TEMPLATE = "alert {name}"
ALERT_LINK_CLASS = "alert-link"
FOOTNOTE_REF_CLASS = "footnote-ref"
DIAGRAM_CONTAINER = "mermaid"
PAGE_SEPARATOR = "/"
HEADING_KEYS = ("Title", "Anchor", "HeadingLevel")
