"""
Unit tests for NYC Borough-Block-Lot identifiers.
"""

import pytest

from ownergraph.nyc.bbl import BBL, BOROUGH_NAMES, InvalidSeedError


class TestCoerce:
    """Tests for lenient canonicalization of record fields."""

    def test_leading_zeros_stripped(self):
        assert BBL.coerce("1", "00123", "0045") == BBL("1", "123", "45")

    def test_float_serialization(self):
        assert BBL.coerce(3, "123.0", 45.0) == BBL("3", "123", "45")

    def test_whitespace(self):
        assert BBL.coerce(" 2 ", " 10 ", "7 ").key == "2-10-7"

    def test_missing_parts(self):
        bbl = BBL.coerce("1", None, "")

        assert not bbl.is_complete
        assert bbl.block == ""

    def test_zero_padded_and_plain_share_key(self):
        assert BBL.coerce("4", "00500", "0001").key == BBL.coerce("4", "500", "1").key


class TestParse:
    """Tests for strict validation of caller input."""

    def test_valid(self):
        bbl = BBL.parse("5", "1234", "56")

        assert bbl.key == "5-1234-56"
        assert bbl.borough == "Staten Island"
        assert str(bbl) == "5-1234-56"

    @pytest.mark.parametrize("boro", ["0", "6", "", "MN", None])
    def test_unknown_borough(self, boro):
        with pytest.raises(InvalidSeedError):
            BBL.parse(boro, "1", "1")

    @pytest.mark.parametrize("block,lot", [("", "1"), ("1", ""), ("abc", "1"), ("1", "-3"), ("0", "1"), ("1", "000")])
    def test_invalid_block_or_lot(self, block, lot):
        with pytest.raises(InvalidSeedError):
            BBL.parse("1", block, lot)

    def test_invalid_seed_is_value_error(self):
        assert issubclass(InvalidSeedError, ValueError)


class TestKeys:
    """Tests for key round trips and borough names."""

    def test_from_key(self):
        assert BBL.from_key("3-123-45") == BBL("3", "123", "45")

    @pytest.mark.parametrize("key", ["", "3-123", "3-1-2-4"])
    def test_from_malformed_key(self, key):
        assert BBL.from_key(key) is None

    def test_all_boroughs_named(self):
        assert BOROUGH_NAMES == {
            "1": "Manhattan",
            "2": "Bronx",
            "3": "Brooklyn",
            "4": "Queens",
            "5": "Staten Island",
        }
