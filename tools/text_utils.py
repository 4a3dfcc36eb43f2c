"""Text utilities: prefix bounds, range splicing, free-text cleanup."""

import re

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n(.*?)\n?```$", re.DOTALL)
_QUOTE_PAIRS = (('"', '"'), ("“", "”"), ("'", "'"))


def truncate_prefix(text: str, limit: int) -> str:
    """Return at most the first ``limit`` characters of ``text``.

    Used wherever a delegated call only receives a bounded prefix of a
    chapter (integrity checks, narration previews).
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    if not text:
        return ""
    return text[:limit]


def is_valid_range(content: str, start: int, end: int) -> bool:
    """Check that ``[start, end)`` lies inside ``content``."""
    return 0 <= start <= end <= len(content)


def splice(content: str, start: int, end: int, replacement: str) -> str:
    """Replace ``content[start:end]`` with ``replacement``."""
    if not is_valid_range(content, start, end):
        raise ValueError(f"Range [{start}, {end}) outside content of length {len(content)}")
    return content[:start] + replacement + content[end:]


def clean_free_text(text: str) -> str:
    """Strip code fences and one layer of wrapping quotes from a model reply."""
    text = (text or "").strip()
    match = _FENCE_RE.match(text)
    if match:
        text = match.group(1).strip()
    for left, right in _QUOTE_PAIRS:
        if len(text) >= 2 and text.startswith(left) and text.endswith(right):
            inner = text[1:-1]
            # Only unwrap when the quotes are not part of the content itself
            if left not in inner and right not in inner:
                text = inner.strip()
            break
    return text


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())
