"""Version string -> spoken/subtitle language resolution."""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from cinegrid.lexicon import LOCALES, SUBTITLE_LIST_RE, version_rules
from cinegrid.parsers.models import (
    CinemaGroup,
    Language,
    LanguageMappingConfig,
    LanguageMappingLine,
)

logger = logging.getLogger(__name__)


@dataclass
class LanguageInfo:
    """
    Languages read off a version string.

    ``subtitle_codes`` keeps codes the reference data does not know about, so
    "VO st FR&NL" still reports ["fr", "nl"] with an empty language table.
    ``spoken_code`` is likewise set from the idiom even when the language
    is missing from the reference data.
    """

    spoken: Language | None = None
    spoken_code: str | None = None
    subtitles: list[Language] = field(default_factory=list)
    subtitle_codes: list[str] = field(default_factory=list)
    from_mapping: bool = False


def find_language(code: str, languages: Sequence[Language]) -> Language | None:
    """Look up a language by code; "fr" also matches a stored "fra"."""
    wanted = code.strip().lower()
    if not wanted:
        return None
    for language in languages:
        if language.code.lower() == wanted:
            return language
    for language in languages:
        if language.code.lower().startswith(wanted):
            return language
    return None


def select_language_mapping(
    configs: Sequence[LanguageMappingConfig], cinema_group: CinemaGroup | None = None
) -> LanguageMappingConfig | None:
    """
    Pick the mapping table for a cinema.

    The cinema group's configured table wins; otherwise the table flagged as
    default; otherwise none.
    """
    if cinema_group and cinema_group.language_mapping_id:
        for config in configs:
            if config.id == cinema_group.language_mapping_id:
                return config
        logger.warning(
            f"Language mapping {cinema_group.language_mapping_id!r} for group "
            f"'{cinema_group.name}' not found, falling back to default"
        )
    return next((config for config in configs if config.is_default), None)


class LanguageResolver:
    """
    Resolve version strings such as "VO st FR&NL", "OmU" or "VF".

    Resolution order:
    1. Exact (case-insensitive) match in the operator mapping table. When a
       line matches it is authoritative and no heuristics run.
    2. Version idioms for the dialect's locales (see ``lexicon.VERSION_RULES``)
       plus explicit subtitle lists ("st FR&NL").
    3. Nothing recognised: spoken and subtitles stay unset. Missing language
       information is common and is not reported.
    """

    def __init__(
        self,
        languages: Sequence[Language],
        mapping: LanguageMappingConfig | None = None,
        locales: tuple[str, ...] = LOCALES,
    ) -> None:
        self.languages = languages
        self.locales = locales
        self._lines: dict[str, LanguageMappingLine] = {}
        if mapping:
            for line in mapping.lines:
                # First line wins for duplicate version strings
                self._lines.setdefault(line.version_string.strip().lower(), line)

    def resolve(self, version_string: str | None) -> LanguageInfo:
        if not version_string or not version_string.strip():
            return LanguageInfo()

        line = self._lines.get(version_string.strip().lower())
        if line is not None:
            return self._from_mapping_line(line)

        return self._from_heuristics(version_string)

    def _from_mapping_line(self, line: LanguageMappingLine) -> LanguageInfo:
        by_id = {language.id: language for language in self.languages}
        info = LanguageInfo(from_mapping=True)
        if line.spoken_language_id:
            info.spoken = by_id.get(line.spoken_language_id)
            info.spoken_code = info.spoken.code if info.spoken else None
        for language_id in line.subtitle_language_ids:
            language = by_id.get(language_id)
            if language is not None:
                info.subtitles.append(language)
                info.subtitle_codes.append(language.code)
        return info

    def _from_heuristics(self, version_string: str) -> LanguageInfo:
        info = LanguageInfo()
        spoken_code: str | None = None
        subtitle_codes: list[str] = []

        for rule in version_rules(self.locales):
            if not rule.pattern.search(version_string):
                continue
            if rule.spoken:
                spoken_code = rule.spoken
            for code in rule.subtitles:
                if code not in subtitle_codes:
                    subtitle_codes.append(code)

        match = SUBTITLE_LIST_RE.search(version_string)
        if match:
            for token in match.group(1).replace("&", ",").replace("/", ",").replace("+", ",").split(","):
                code = token.strip().lower()
                if code and code not in subtitle_codes:
                    subtitle_codes.append(code)

        if spoken_code:
            info.spoken = find_language(spoken_code, self.languages)
            info.spoken_code = info.spoken.code if info.spoken else spoken_code

        for code in subtitle_codes:
            language = find_language(code, self.languages)
            if language is not None:
                info.subtitles.append(language)
                info.subtitle_codes.append(language.code)
            else:
                info.subtitle_codes.append(code)

        return info
