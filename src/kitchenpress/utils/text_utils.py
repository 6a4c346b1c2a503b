"""Text processing utilities."""

import re
from typing import List


def clean_whitespace(text: str) -> str:
    """Collapse runs of whitespace and strip the ends.

    Args:
        text: Text to clean

    Returns:
        Cleaned text
    """
    return re.sub(r"\s+", " ", text).strip()


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to a maximum length, breaking on a word boundary.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix appended when truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    cut = text[: max_length - len(suffix)]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(" ,;:") + suffix


def count_words(text: str) -> int:
    """Count words in text.

    Args:
        text: Text to count

    Returns:
        Number of words
    """
    return len(text.split())


def normalize_hashtag(tag: str) -> str:
    """Turn a keyword into a hashtag ("ghost kitchens" -> "#GhostKitchens").

    Args:
        tag: Keyword or hashtag

    Returns:
        Hashtag with leading '#', or an empty string if nothing usable remains
    """
    words = re.findall(r"[A-Za-z0-9]+", tag)
    if not words:
        return ""
    return "#" + "".join(w[:1].upper() + w[1:] for w in words)


def find_phrases(text: str, phrases: List[str]) -> List[str]:
    """Find which phrases occur in text (case-insensitive).

    Trailing ellipses in phrases are ignored so that guideline examples like
    "This amazing breakthrough..." still match inline usage.

    Args:
        text: Text to search
        phrases: Phrases to look for

    Returns:
        Phrases found, in the order given
    """
    lowered = text.lower()
    found = []
    for phrase in phrases:
        needle = phrase.strip().rstrip(".").strip().lower()
        if needle and needle in lowered:
            found.append(phrase)
    return found
