"""
Common utility functions and helpers.
"""
from datetime import datetime, timezone
from typing import List
import re

# Separators for free-text tokens; ".", "#" and "+" stay inside a token so
# "node.js", "c#" and "c++" survive intact.
_TOKEN_SEPARATORS = re.compile(r"[^a-z0-9.#+]+")


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def tokenize(text: str) -> List[str]:
    """
    Lower-case text and split it into tokens.

    Args:
        text: Raw input text

    Returns:
        Non-empty tokens in input order
    """
    return [token for token in _TOKEN_SEPARATORS.split((text or "").lower()) if token]


def slugify_name(name: str) -> str:
    """
    Turn a display name into a filename slug.

    Args:
        name: Display name, e.g. "Raghav Bharadwaj"

    Returns:
        Whitespace runs replaced by "-" and lower-cased, e.g. "raghav-bharadwaj"
    """
    return re.sub(r"\s+", "-", name).lower()


def unique_in_order(items: List[str]) -> List[str]:
    """
    Drop duplicates while keeping first-seen order.

    Args:
        items: Items possibly containing duplicates

    Returns:
        De-duplicated list
    """
    return list(dict.fromkeys(items))
