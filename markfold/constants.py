"""Shared constants for Markfold.

Centralizes markup element tables, embedded-language identifiers,
region marker patterns and timezone-aware datetime helpers.
"""

import re
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime.

    Usable directly as a ``default_factory`` in dataclass fields.
    """
    return datetime.now(timezone.utc)


# Elements that never take a closing tag. Their opening tag is
# complete on its own, like an explicit ``<name/>``.
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "menuitem",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose content is raw text: no tags or comments are scanned
# inside them until the matching closing tag.
RAW_TEXT_ELEMENTS: frozenset[str] = frozenset({"script", "style"})

# Embedded language identifiers used as provider table keys.
JAVASCRIPT = "javascript"
CSS = "css"

DEFAULT_EMBEDDED_LANGUAGES: dict[str, bool] = {
    CSS: True,
    JAVASCRIPT: True,
}

# <script type="..."> values whose content is JavaScript.
JAVASCRIPT_MIME_TYPES: frozenset[str] = frozenset(
    {
        "",
        "module",
        "text/javascript",
        "text/ecmascript",
        "application/javascript",
        "application/ecmascript",
        "application/x-javascript",
        "text/babel",
        "text/jsx",
    }
)

# Region markers, matched against comment text with delimiters stripped.
REGION_START_PATTERN = re.compile(r"^\s*#region\b")
REGION_END_PATTERN = re.compile(r"^\s*#endregion\b")
