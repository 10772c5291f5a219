"""
Free-text title decomposition.

Some sheets pack every per-film field into the title cell, e.g.
``"Dune (Denis Villeneuve, 2024) - 155' - VO st FR&NL (16)"``. Fields are cut
off the cell in a fixed order because they collide syntactically: the age
rating goes first so "(16)" is never read as a year, the version string next,
then the duration, then the director/year parenthetical. Whatever is left,
minus dangling separators, is the movie name.

Dialects change the patterns (a ``TitleGrammar``), never the order.
"""

import re
from dataclasses import dataclass

from cinegrid.utils.text import AGE_RATING_RE, collapse_whitespace, strip_trailing_separators
from cinegrid.utils.timefmt import parse_duration_to_minutes

# A field must be separated from the rest of the title by a dash or whitespace.
_SEP = r"(?:^|(?<=[\s\-–—]))"

# "FSK 12", "(FSK 12)", "[FSK 16]"
FSK_RATING_RE = re.compile(r"[(\[]?\s*\bFSK\s*(?P<rating>\d{1,2})\b\s*[)\]]?\s*", re.IGNORECASE)

FRENCH_VERSION_RE = re.compile(
    _SEP
    + r"(?P<version>(?:VOSTFR|VOST|VO|VF|VD)"
    r"(?:\s*(?:st|sst|s-t)[.\s-]*[A-Za-z]{2}(?:\s*[&/,+]\s*[A-Za-z]{2})*)?"
    r"|OV|OmU|OmeU|OME)\s*$",
    re.IGNORECASE,
)

GERMAN_VERSION_RE = re.compile(
    _SEP
    + r"(?P<version>OV|OmU|OmdU|OmeU|OmfU|DF|dt\.\s*Fassung|deutsche Fassung"
    r"|(?:VO|OV)\s*(?:st|ut)\.?\s*[A-Za-z]{2}(?:\s*[&/,+]\s*[A-Za-z]{2})*)\s*$",
    re.IGNORECASE,
)

# "155'", "155′", "155 min", "155min.", "2:35" as a standalone token
DURATION_RE = re.compile(
    _SEP
    + r"(?P<duration>\d{1,3}\s*['′]|\d{1,3}\s*[Mm]in\.?|\d{1,2}:\d{2})(?=\s*(?:[\-–—]|$))"
)

DIRECTOR_YEAR_RE = re.compile(r"\s*\((?P<director>[^()]+?),\s*(?P<year>\d{4})\)\s*$")
YEAR_ONLY_RE = re.compile(r"\s*\((?P<year>\d{4})\)\s*$")


@dataclass(frozen=True)
class TitleGrammar:
    """Patterns used by ``decompose_title``; each may be None to skip that step."""

    age_ratings: tuple[re.Pattern[str], ...] = (AGE_RATING_RE,)
    version: re.Pattern[str] | None = FRENCH_VERSION_RE
    duration: re.Pattern[str] | None = DURATION_RE
    director_year: tuple[re.Pattern[str], ...] = (DIRECTOR_YEAR_RE, YEAR_ONLY_RE)


FRENCH_TITLE_GRAMMAR = TitleGrammar()
GERMAN_TITLE_GRAMMAR = TitleGrammar(
    age_ratings=(FSK_RATING_RE, AGE_RATING_RE),
    version=GERMAN_VERSION_RE,
)
# Column-dense layouts keep duration and version in their own columns; the
# title cell only carries a rating and sometimes a year.
RATING_ONLY_GRAMMAR = TitleGrammar(version=None, duration=None, director_year=(YEAR_ONLY_RE,))


@dataclass
class TitleParts:
    title: str
    age_rating: str | None = None
    version_string: str | None = None
    duration: str | None = None
    duration_minutes: int | None = None
    director: str | None = None
    year: int | None = None


def _cut(text: str, match: re.Match[str]) -> str:
    return strip_trailing_separators(collapse_whitespace(text[: match.start()] + " " + text[match.end():]))


def decompose_title(cell: str, grammar: TitleGrammar = FRENCH_TITLE_GRAMMAR) -> TitleParts:
    """
    Split a title cell into movie name and metadata.

    Examples:
        "Dune (Denis Villeneuve, 2024) - 155' - VO st FR"
            -> title="Dune", director="Denis Villeneuve", year=2024,
               duration="155'", duration_minutes=155, version_string="VO st FR"
        "Avatar 3D (12)" -> title="Avatar 3D", age_rating="12"

    Fields whose pattern does not match stay None.
    """
    remaining = collapse_whitespace(cell)
    parts = TitleParts(title=remaining)

    # 1. Age rating
    for pattern in grammar.age_ratings:
        match = pattern.search(remaining)
        if match:
            rating = match.group("rating").strip()
            parts.age_rating = f"FSK {rating}" if pattern is FSK_RATING_RE else rating
            remaining = _cut(remaining, match)
            break

    # 2. Version string at the tail
    if grammar.version is not None:
        match = grammar.version.search(remaining)
        if match:
            parts.version_string = collapse_whitespace(match.group("version"))
            remaining = _cut(remaining, match)

    # 3. Duration, last standalone occurrence
    if grammar.duration is not None:
        matches = list(grammar.duration.finditer(remaining))
        if matches:
            match = matches[-1]
            parts.duration = match.group("duration").strip()
            parts.duration_minutes = parse_duration_to_minutes(parts.duration)
            remaining = _cut(remaining, match)

    # 4. Director and/or year
    for pattern in grammar.director_year:
        match = pattern.search(remaining)
        if match:
            groups = match.groupdict()
            if groups.get("director"):
                parts.director = groups["director"].strip()
            parts.year = int(groups["year"])
            remaining = _cut(remaining, match)
            break

    # 5. Residual cleanup
    parts.title = strip_trailing_separators(remaining)
    return parts
