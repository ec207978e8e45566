"""Unit tests for resource URL construction."""

import pytest

from municipal_results.lib.election_results.urls import CandidacyType, build_resource_url, pad_electoral_code


class TestPadElectoralCode:
    """Tests for pad_electoral_code()."""

    def test_five_digit_code_unchanged(self):
        assert pad_electoral_code(27014) == "27014"

    def test_short_code_is_zero_padded(self):
        assert pad_electoral_code(123) == "00123"

    def test_string_code_is_padded(self):
        assert pad_electoral_code("19") == "00019"

    @pytest.mark.parametrize("code", [123456, -1, "12a"])
    def test_invalid_code_raises(self, code):
        with pytest.raises(ValueError, match="1-5 digits"):
            pad_electoral_code(code)


class TestCandidacyType:
    """Tests for CandidacyType codes."""

    def test_type_codes(self):
        assert CandidacyType.MAYOR.type_code == "11"
        assert CandidacyType.COUNCILOR.type_code == "13"

    def test_only_mayor_has_running_mate(self):
        assert CandidacyType.MAYOR.has_running_mate is True
        assert CandidacyType.COUNCILOR.has_running_mate is False

    def test_values_match_cli_choices(self):
        assert CandidacyType("mayor") is CandidacyType.MAYOR
        assert CandidacyType("councilor") is CandidacyType.COUNCILOR


class TestBuildResourceUrl:
    """Tests for build_resource_url()."""

    def test_mayor_url(self):
        url = build_resource_url("al", 27014, CandidacyType.MAYOR)
        assert url == "https://resultados.tse.jus.br/oficial/ele2024/619/dados/al/al27014-c0011-e000619-u.json"

    def test_councilor_url(self):
        url = build_resource_url("al", 27014, CandidacyType.COUNCILOR)
        assert url.endswith("/dados/al/al27014-c0013-e000619-u.json")

    def test_state_is_lowercased(self):
        url = build_resource_url("SP", 71072, CandidacyType.MAYOR)
        assert "/dados/sp/sp71072-" in url

    def test_short_code_padded_in_url(self):
        url = build_resource_url("ac", 123, CandidacyType.MAYOR)
        assert url.endswith("/dados/ac/ac00123-c0011-e000619-u.json")

    def test_custom_host_year_and_election(self):
        url = build_resource_url(
            "al",
            27014,
            CandidacyType.MAYOR,
            host="example.org",
            year=2028,
            election_id=1234,
        )
        assert url == "https://example.org/oficial/ele2028/1234/dados/al/al27014-c0011-e001234-u.json"
