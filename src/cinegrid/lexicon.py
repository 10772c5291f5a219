"""
Locale dictionaries shared by every schedule dialect.

Tables are keyed by locale tag ("en", "fr", "de"). Dialects pick the locales
they understand; supporting a new idiom means adding rows here rather than a
new code path in a dialect.
"""

import re
import unicodedata
from dataclasses import dataclass
from datetime import date
from enum import Enum


class Weekday(str, Enum):
    """Locale-neutral weekday."""

    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        return WEEKDAY_ORDER[day.weekday()]

    @property
    def sunday_index(self) -> int:
        """Index in the 0=Sunday convention used for week-start configuration."""
        return (WEEKDAY_ORDER.index(self) + 1) % 7


WEEKDAY_ORDER: list[Weekday] = list(Weekday)

LOCALES = ("en", "fr", "de")

WEEKDAY_ALIASES: dict[str, dict[str, Weekday]] = {
    "en": {
        "mon": Weekday.MON, "monday": Weekday.MON,
        "tue": Weekday.TUE, "tues": Weekday.TUE, "tuesday": Weekday.TUE,
        "wed": Weekday.WED, "wednesday": Weekday.WED,
        "thu": Weekday.THU, "thurs": Weekday.THU, "thursday": Weekday.THU,
        "fri": Weekday.FRI, "friday": Weekday.FRI,
        "sat": Weekday.SAT, "saturday": Weekday.SAT,
        "sun": Weekday.SUN, "sunday": Weekday.SUN,
    },
    "fr": {
        "lun": Weekday.MON, "lundi": Weekday.MON,
        "mar": Weekday.TUE, "mardi": Weekday.TUE,
        "mer": Weekday.WED, "mercredi": Weekday.WED,
        "jeu": Weekday.THU, "jeudi": Weekday.THU,
        "ven": Weekday.FRI, "vendredi": Weekday.FRI,
        "sam": Weekday.SAT, "samedi": Weekday.SAT,
        "dim": Weekday.SUN, "dimanche": Weekday.SUN,
    },
    "de": {
        "mo": Weekday.MON, "montag": Weekday.MON,
        "di": Weekday.TUE, "dienstag": Weekday.TUE,
        "mi": Weekday.WED, "mittwoch": Weekday.WED,
        "do": Weekday.THU, "donnerstag": Weekday.THU,
        "fr": Weekday.FRI, "freitag": Weekday.FRI,
        "sa": Weekday.SAT, "samstag": Weekday.SAT,
        "so": Weekday.SUN, "sonntag": Weekday.SUN,
    },
}

MONTH_ALIASES: dict[str, dict[str, int]] = {
    "en": {
        "january": 1, "jan": 1, "february": 2, "feb": 2, "march": 3, "mar": 3,
        "april": 4, "apr": 4, "may": 5, "june": 6, "jun": 6, "july": 7, "jul": 7,
        "august": 8, "aug": 8, "september": 9, "sep": 9, "sept": 9,
        "october": 10, "oct": 10, "november": 11, "nov": 11, "december": 12, "dec": 12,
    },
    "fr": {
        "janvier": 1, "janv": 1, "février": 2, "fevrier": 2, "fév": 2, "fev": 2,
        "mars": 3, "avril": 4, "avr": 4, "mai": 5, "juin": 6, "juillet": 7, "juil": 7,
        "août": 8, "aout": 8, "septembre": 9, "sept": 9, "octobre": 10, "oct": 10,
        "novembre": 11, "nov": 11, "décembre": 12, "decembre": 12, "déc": 12, "dec": 12,
    },
    "de": {
        "januar": 1, "jan": 1, "jänner": 1, "februar": 2, "feb": 2,
        "märz": 3, "marz": 3, "mär": 3, "april": 4, "apr": 4, "mai": 5,
        "juni": 6, "jun": 6, "juli": 7, "jul": 7, "august": 8, "aug": 8,
        "september": 9, "sep": 9, "sept": 9, "oktober": 10, "okt": 10,
        "november": 11, "nov": 11, "dezember": 12, "dez": 12,
    },
}

# Header words that identify a column role, per locale.
HEADER_KEYWORDS: dict[str, dict[str, tuple[str, ...]]] = {
    "en": {
        "title": ("film", "title", "movie"),
        "duration": ("duration", "length", "runtime"),
        "version": ("version", "language", "lang"),
        "director": ("director",),
        "genre": ("genre",),
        "screen": ("screen", "auditorium"),
    },
    "fr": {
        "title": ("film", "titre"),
        "duration": ("durée", "duree", "dur", "temps"),
        "version": ("version", "langue", "vo/vf"),
        "director": ("réalisateur", "realisateur", "réalisation"),
        "genre": ("genre",),
        "screen": ("salle", "écran", "ecran"),
    },
    "de": {
        "title": ("film", "titel"),
        "duration": ("dauer", "laufzeit", "länge"),
        "version": ("fassung", "sprache", "version"),
        "director": ("regie", "regisseur"),
        "genre": ("genre",),
        "screen": ("saal", "kino"),
    },
}

# Words that mark a header repeat or navigation line inside the data region.
NAVIGATION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "en": ("film", "title", "programme", "program", "week"),
    "fr": ("film", "titre", "programme", "semaine"),
    "de": ("film", "titel", "programm", "woche"),
}


def _fold(text: str) -> str:
    return unicodedata.normalize("NFC", text).strip().lower()


def weekday_aliases(locales: tuple[str, ...] = LOCALES) -> dict[str, Weekday]:
    """Merge the weekday tables of the given locales."""
    merged: dict[str, Weekday] = {}
    for locale in locales:
        merged.update(WEEKDAY_ALIASES[locale])
    return merged


def month_aliases(locales: tuple[str, ...] = LOCALES) -> dict[str, int]:
    """Merge the month tables of the given locales."""
    merged: dict[str, int] = {}
    for locale in locales:
        merged.update(MONTH_ALIASES[locale])
    return merged


def normalize_weekday(token: str, locales: tuple[str, ...] = LOCALES) -> Weekday | None:
    """
    Map a localized weekday token to a Weekday.

    The whole token must be a weekday name or abbreviation; a trailing period
    ("Mi.", "Mer.") is tolerated.

    Examples:
        "Mer" -> Weekday.WED, "Donnerstag" -> Weekday.THU, "Film" -> None
    """
    folded = _fold(token).rstrip(".")
    if not folded:
        return None
    return weekday_aliases(locales).get(folded)


def leading_weekday(text: str, locales: tuple[str, ...] = LOCALES) -> Weekday | None:
    """
    Weekday named by the first word of a header cell such as "Mer 04/06" or "Mi. 04.06.24".

    Only the leading alphabetic word is considered and it must be followed by
    the end of the cell, punctuation, whitespace or a digit.
    """
    match = re.match(r"\s*([^\W\d_]+)\.?(?=$|[\s\d.,/-])", text)
    if not match:
        return None
    return normalize_weekday(match.group(1), locales)


def month_number(token: str, locales: tuple[str, ...] = LOCALES) -> int | None:
    """Map a month name, abbreviation or number ("juin", "Sept.", "06") to 1-12."""
    folded = _fold(token).rstrip(".")
    if folded.isdigit():
        value = int(folded)
        return value if 1 <= value <= 12 else None
    return month_aliases(locales).get(folded)


def header_keywords(role: str, locales: tuple[str, ...] = LOCALES) -> tuple[str, ...]:
    """All header words for a column role across the given locales, de-duplicated in order."""
    words: list[str] = []
    for locale in locales:
        for word in HEADER_KEYWORDS[locale].get(role, ()):
            if word not in words:
                words.append(word)
    return tuple(words)


def navigation_keywords(locales: tuple[str, ...] = LOCALES) -> tuple[str, ...]:
    words: list[str] = []
    for locale in locales:
        for word in NAVIGATION_KEYWORDS[locale]:
            if word not in words:
                words.append(word)
    return tuple(words)


@dataclass(frozen=True)
class VersionRule:
    """
    One version-string idiom.

    ``spoken`` is a language code, or None when the film is shown in its
    original language (which the sheet never names).
    """

    pattern: re.Pattern[str]
    spoken: str | None = None
    subtitles: tuple[str, ...] = ()


def _rule(pattern: str, spoken: str | None = None, subtitles: tuple[str, ...] = ()) -> VersionRule:
    return VersionRule(re.compile(pattern, re.IGNORECASE), spoken, subtitles)


VERSION_RULES: dict[str, tuple[VersionRule, ...]] = {
    "en": (
        _rule(r"\bov\b|\boriginal version\b"),
    ),
    "fr": (
        _rule(r"\bvostfr\b", subtitles=("fr",)),
        _rule(r"\bvost\b"),
        _rule(r"\bvo\b"),
        _rule(r"\bvfq?\b", spoken="fr"),
    ),
    "de": (
        _rule(r"\bomd?u\b", subtitles=("de",)),
        _rule(r"\bomeu\b", subtitles=("en",)),
        _rule(r"\bomfu\b", subtitles=("fr",)),
        _rule(r"\bome\b", subtitles=("en",)),
        _rule(r"\bov\b"),
        _rule(r"\b(?:df|vd)\b|\bdeutsche fassung\b|\bdt\.\s*fassung\b", spoken="de"),
    ),
}

# "VO st FR&NL", "OV ut DE/FR", "sst fr, nl", "VOST FR", "VOST-FR"
SUBTITLE_LIST_RE = re.compile(
    r"(?:\b|(?<=vo))(?:st|sst|s-t|ut)[.\s-]*([a-z]{2}(?:\s*[&/,+]\s*[a-z]{2})*)\b", re.IGNORECASE
)


def version_rules(locales: tuple[str, ...] = LOCALES) -> tuple[VersionRule, ...]:
    rules: list[VersionRule] = []
    for locale in locales:
        rules.extend(VERSION_RULES[locale])
    return tuple(rules)
