"""HTML escaping and sanitising helpers."""

import html
import re

from bleach.sanitizer import ALLOWED_PROTOCOLS, Cleaner

# Structural wrappers that survive when links are disabled.
STRUCTURAL_TAGS = frozenset({"li", "div", "span"})

_SCRIPT_BODIES = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)


def escape(value: str) -> str:
    """Escape ``&``, ``<``, ``>`` and both quote characters."""
    return html.escape(value, quote=True)


def _keep_attribute(tag: str, name: str, value: str) -> bool:
    return not name.lower().startswith("on")


def strip_tags(markup: str, allowed_tags: frozenset[str] = STRUCTURAL_TAGS) -> str:
    """Remove every tag not in ``allowed_tags``, keeping the text content.

    Attributes on kept tags are preserved except inline event handlers.
    Script and style bodies are dropped along with their tags.
    """
    cleaner = Cleaner(
        tags=allowed_tags,
        attributes=_keep_attribute,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
    return cleaner.clean(_SCRIPT_BODIES.sub("", markup))
