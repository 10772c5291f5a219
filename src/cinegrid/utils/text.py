"""Text cleanup utilities for schedule title cells."""

import re

# Trailing separators left behind once a field has been cut off a title:
# "Dune (Denis Villeneuve, 2024) - " -> "Dune (Denis Villeneuve, 2024)"
_TRAILING_SEPARATORS_RE = re.compile(r"[\s\-–—|,;:/]+$")

# Age ratings written as a short parenthetical/bracketed token at the end:
# "(12)", "(16+)", "(-12)", "[PG-13]", "(TP)", "(EA)". Four-digit years never match.
AGE_RATING_RE = re.compile(
    r"\s*[(\[]\s*(?P<rating>-?\d{1,2}\+?|PG-?13|PG|NC-17|R|U|TP|T\.P\.|ALL|KT|EA|ENA)\s*[)\]]\s*$",
    re.IGNORECASE,
)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces and trim."""
    return re.sub(r"\s+", " ", text).strip()


def strip_trailing_separators(text: str) -> str:
    """Remove dashes, pipes and similar punctuation dangling at the end of a title."""
    return _TRAILING_SEPARATORS_RE.sub("", text).strip()

def find_keywords(text: str, keywords: list[str] | tuple[str, ...]) -> list[str]:
    """
    Keywords that occur in ``text`` as whole words, ordered by first position.

    Matching is case-insensitive; the keyword spelling from ``keywords`` is
    returned, each at most once.
    """
    found: list[tuple[int, str]] = []
    for keyword in keywords:
        if not keyword:
            continue
        match = re.search(rf"(?<!\w){re.escape(keyword)}(?!\w)", text, re.IGNORECASE)
        if match and keyword not in (k for _, k in found):
            found.append((match.start(), keyword))
    found.sort()
    return [keyword for _, keyword in found]


def remove_keywords(text: str, keywords: list[str] | tuple[str, ...]) -> str:
    """
    Remove whole-word keyword occurrences from ``text`` and tidy the result.

    Example:
        remove_keywords("Avatar 3D", ["3D"]) -> "Avatar"
    """
    cleaned = text
    # Longest first so "Dolby Atmos" goes before "Dolby"
    for keyword in sorted(set(k for k in keywords if k), key=len, reverse=True):
        cleaned = re.sub(rf"(?<!\w){re.escape(keyword)}(?!\w)", " ", cleaned, flags=re.IGNORECASE)
    return strip_trailing_separators(collapse_whitespace(cleaned))

def slugify(text: str) -> str:
    """
    Convert text to a URL-safe slug.

    Args:
        text: Text to slugify

    Returns:
        Lowercase slug with hyphens
    """
    # Convert to lowercase
    text = text.lower()

    # Replace spaces and underscores with hyphens
    text = re.sub(r"[\s_]+", "-", text)

    # Remove non-alphanumeric characters (except hyphens)
    text = re.sub(r"[^a-z0-9-]", "", text)

    # Remove multiple consecutive hyphens
    text = re.sub(r"-+", "-", text)

    # Strip leading/trailing hyphens
    text = text.strip("-")

    return text
