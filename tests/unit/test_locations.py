"""
Unit tests for the static country reference data.
"""

import pytest
from ipintel import locations


class TestLocations:
    """Test cases for country lookups."""

    def test_country_name(self):
        assert locations.get_country_name("US") == "United States"
        assert locations.get_country_name("gb") == "United Kingdom"
        assert locations.get_country_name(" jp ") == "Japan"
        assert locations.get_country_name("XK") == "Kosovo"

    @pytest.mark.parametrize("code", [None, "", "ZZ", "USA", 42])
    def test_unknown_codes(self, code):
        assert locations.get_country_name(code) is None
        assert locations.get_continent(code) is None
        assert locations.get_currency(code) is None
        assert locations.get_flag(code) is None
        assert locations.is_eu(code) is False

    def test_continent(self):
        assert locations.get_continent("BR") == {'code': 'SA', 'name': 'South America'}
        assert locations.get_continent("AU") == {'code': 'OC', 'name': 'Oceania'}

    def test_currency(self):
        assert locations.get_currency("JP") == {'code': 'JPY', 'symbol': '¥'}
        assert locations.get_currency("FR") == {'code': 'EUR', 'symbol': '€'}

    def test_flag(self):
        flag = locations.get_flag("de")
        assert flag['emoji'] == "\U0001F1E9\U0001F1EA"
        assert flag['unicode'] == "U+1F1E9 U+1F1EA"

    def test_eu_membership(self):
        assert locations.is_eu("FR")
        assert locations.is_eu("ie")
        assert not locations.is_eu("GB")
        assert not locations.is_eu("CH")
        assert len(locations.EU_COUNTRIES) == 27

    def test_table_consistency(self):
        """Test that every entry references a known continent and EU members exist."""
        for code, (name, continent, currency, symbol) in locations.COUNTRIES.items():
            assert len(code) == 2 and code.isupper()
            assert name
            assert continent in locations.CONTINENTS
            assert len(currency) == 3
            assert symbol
        assert locations.EU_COUNTRIES <= set(locations.COUNTRIES)
