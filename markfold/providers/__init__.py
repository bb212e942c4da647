"""Embedded-language folding providers.

Available providers:
- TreeSitterFoldingProvider("javascript"): <script> content
- TreeSitterFoldingProvider("css"): <style> content

Use ``default_providers()`` to obtain the default capability table. The
provider instances behind it are shared, so grammars load only once per
process.
"""

import threading

from markfold.constants import CSS, JAVASCRIPT
from markfold.folding.protocols import FoldingProvider
from markfold.providers.tree_sitter_provider import (
    BLOCK_NODE_TYPES,
    TreeSitterFoldingProvider,
    strip_comment_delimiters,
)

__all__ = [
    "BLOCK_NODE_TYPES",
    "TreeSitterFoldingProvider",
    "default_providers",
    "strip_comment_delimiters",
]

_shared_lock = threading.Lock()
_shared_providers: dict[str, TreeSitterFoldingProvider] | None = None


def default_providers() -> dict[str, FoldingProvider]:
    """Return a fresh table mapping language ids to the shared providers.

    Thread-safe. Providers are created on first call and reused; the
    returned dict is a copy callers may extend.
    """
    global _shared_providers
    if _shared_providers is None:
        with _shared_lock:
            # Re-check after acquiring lock (double-checked locking)
            if _shared_providers is None:  # pragma: no branch
                _shared_providers = {
                    JAVASCRIPT: TreeSitterFoldingProvider(JAVASCRIPT),
                    CSS: TreeSitterFoldingProvider(CSS),
                }
    return dict(_shared_providers)
