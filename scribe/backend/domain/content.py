"""
Note Content Rules.

Plain-text extraction from rich-text markup, title derivation, and the
non-empty content check applied before every save.
"""

import re

TITLE_MAX_LENGTH = 60
UNTITLED = "Untitled"
WORDS_PER_MINUTE = 200

_TAG_RE = re.compile(r"<[^>]*>")
_NBSP = "&nbsp;"
_WHITESPACE_RE = re.compile(r"\s+")


def strip_to_plain_text(markup: str | None) -> str:
    """
    Reduce markup to its visible text.

    Tags become spaces, `&nbsp;` becomes a space, whitespace runs collapse
    to one space and the result is trimmed. Never raises.
    """
    text = _TAG_RE.sub(" ", str(markup or ""))
    text = text.replace(_NBSP, " ")
    return _WHITESPACE_RE.sub(" ", text).strip()


def derive_title(content: str | None) -> str:
    """First 60 characters of the plain text, or "Untitled"."""
    return strip_to_plain_text(content)[:TITLE_MAX_LENGTH] or UNTITLED


def validate_content(content: str | None) -> bool:
    """True when the content has visible text once markup is stripped."""
    return len(strip_to_plain_text(content)) > 0


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def reading_time(markup: str | None) -> int:
    """Estimated reading time in whole minutes, never less than one."""
    text = strip_to_plain_text(markup)
    words = len(text.split(" ")) if text else 0
    return max(1, round(words / WORDS_PER_MINUTE))
