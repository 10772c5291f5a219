"""Unit tests for version string language resolution."""

import pytest

from cinegrid.parsers.language import (
    LanguageResolver,
    find_language,
    select_language_mapping,
)
from cinegrid.parsers.models import (
    CinemaGroup,
    Language,
    LanguageMappingConfig,
    LanguageMappingLine,
)


@pytest.fixture
def french(languages: list[Language]) -> LanguageResolver:
    return LanguageResolver(languages, locales=("fr", "en"))


@pytest.fixture
def german(languages: list[Language]) -> LanguageResolver:
    return LanguageResolver(languages, locales=("de", "en"))


class TestFrenchIdioms:
    def test_original_with_two_subtitle_languages(self, french: LanguageResolver) -> None:
        info = french.resolve("VO st FR&NL")

        assert info.spoken is None
        assert info.subtitle_codes == ["fr", "nl"]
        assert [language.name for language in info.subtitles] == ["Français", "Nederlands"]

    def test_vostfr(self, french: LanguageResolver) -> None:
        assert french.resolve("VOSTFR").subtitle_codes == ["fr"]

    @pytest.mark.parametrize("version", ["VOST FR", "VOST-FR", "vost fr", "VOST.FR"])
    def test_vost_with_separated_language(self, french: LanguageResolver, version: str) -> None:
        info = french.resolve(version)

        assert info.spoken is None
        assert info.subtitle_codes == ["fr"]

    def test_vost_with_two_languages(self, french: LanguageResolver) -> None:
        assert french.resolve("VOST FR/NL").subtitle_codes == ["fr", "nl"]

    def test_bare_vost_names_no_subtitles(self, french: LanguageResolver) -> None:
        assert french.resolve("VOST").subtitle_codes == []

    def test_dubbed_french(self, french: LanguageResolver) -> None:
        info = french.resolve("VF")

        assert info.spoken_code == "fr"
        assert info.spoken is not None and info.spoken.name == "Français"
        assert info.subtitle_codes == []

    def test_case_insensitive(self, french: LanguageResolver) -> None:
        assert french.resolve("vo st fr").subtitle_codes == ["fr"]


class TestGermanIdioms:
    def test_omu_means_german_subtitles(self, german: LanguageResolver) -> None:
        info = german.resolve("OmU")

        assert info.spoken is None
        assert info.subtitle_codes == ["de"]

    def test_omeu_means_english_subtitles(self, german: LanguageResolver) -> None:
        assert german.resolve("OmeU").subtitle_codes == ["en"]

    def test_df_means_dubbed_german(self, german: LanguageResolver) -> None:
        assert german.resolve("DF").spoken_code == "de"

    def test_ov_leaves_everything_unset(self, german: LanguageResolver) -> None:
        info = german.resolve("OV")

        assert info.spoken is None
        assert info.subtitle_codes == []


class TestUnrecognised:
    def test_empty_version(self, french: LanguageResolver) -> None:
        info = french.resolve(None)

        assert info.spoken is None
        assert info.subtitles == []

    def test_unknown_version(self, french: LanguageResolver) -> None:
        info = french.resolve("3D")

        assert info.spoken_code is None
        assert info.subtitle_codes == []

    def test_unknown_subtitle_code_is_kept(self, french: LanguageResolver) -> None:
        info = french.resolve("VO st FR&IT")

        assert info.subtitle_codes == ["fr", "it"]
        assert len(info.subtitles) == 1

    def test_spoken_code_without_reference_language(self) -> None:
        info = LanguageResolver([], locales=("fr",)).resolve("VF")

        assert info.spoken is None
        assert info.spoken_code == "fr"


# ---------------------------------------------------------------------------
# Operator mapping table
# ---------------------------------------------------------------------------


class TestMappingTable:
    def test_exact_line_wins_over_heuristics(self, languages: list[Language]) -> None:
        mapping = LanguageMappingConfig(
            id="map-1",
            name="Default",
            is_default=True,
            lines=(
                LanguageMappingLine(
                    version_string="VO st FR&NL",
                    spoken_language_id="lang-en",
                    subtitle_language_ids=("lang-fr",),
                ),
            ),
        )
        info = LanguageResolver(languages, mapping, ("fr", "en")).resolve("vo st fr&nl")

        assert info.from_mapping is True
        assert info.spoken_code == "en"
        # Heuristics would have added "nl"
        assert info.subtitle_codes == ["fr"]

    def test_non_matching_version_falls_back_to_heuristics(self, languages: list[Language]) -> None:
        mapping = LanguageMappingConfig(
            id="map-1",
            name="Default",
            lines=(LanguageMappingLine(version_string="VO", spoken_language_id="lang-en"),),
        )
        info = LanguageResolver(languages, mapping, ("fr",)).resolve("VF")

        assert info.from_mapping is False
        assert info.spoken_code == "fr"

    def test_line_without_languages_clears_heuristics(self, languages: list[Language]) -> None:
        mapping = LanguageMappingConfig(
            id="map-1",
            name="Default",
            lines=(LanguageMappingLine(version_string="VF", notes="Unknown in this chain"),),
        )
        info = LanguageResolver(languages, mapping, ("fr",)).resolve("VF")

        assert info.from_mapping is True
        assert info.spoken is None


class TestFindLanguage:
    def test_exact_code(self, languages: list[Language]) -> None:
        assert find_language("NL", languages).id == "lang-nl"

    def test_prefix_of_longer_code(self) -> None:
        french = Language(id="x", code="fra", name="French")
        assert find_language("fr", [french]) is french

    def test_unknown(self, languages: list[Language]) -> None:
        assert find_language("it", languages) is None


class TestSelectLanguageMapping:
    configs = [
        LanguageMappingConfig(id="default", name="Default", is_default=True),
        LanguageMappingConfig(id="kinepolis", name="Kinepolis"),
    ]

    def test_group_mapping_wins(self) -> None:
        group = CinemaGroup(id="g", name="Kinepolis", language_mapping_id="kinepolis")
        assert select_language_mapping(self.configs, group).id == "kinepolis"

    def test_default_without_group_mapping(self) -> None:
        group = CinemaGroup(id="g", name="Utopia")
        assert select_language_mapping(self.configs, group).id == "default"

    def test_missing_group_mapping_falls_back_to_default(self) -> None:
        group = CinemaGroup(id="g", name="Utopia", language_mapping_id="gone")
        assert select_language_mapping(self.configs, group).id == "default"

    def test_no_default(self) -> None:
        assert select_language_mapping(self.configs[1:]) is None
