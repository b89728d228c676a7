"""
Unit tests for contact name normalization and entity classification.
"""

import pytest

from ownergraph.nyc.names import (
    ENTITY_KEYWORDS,
    EntityClassifier,
    KeywordEntityClassifier,
    is_business_entity,
    normalize_name,
    surname_token,
)


class TestNormalizeName:
    """Tests for name keys."""

    def test_punctuation_variants_collide(self):
        assert normalize_name("O'Brien, LLC.") == normalize_name("OBRIEN LLC")

    def test_whitespace_collapsed(self):
        assert normalize_name("  abc   realty\tllc ") == "ABC REALTY LLC"

    def test_quotes_stripped(self):
        assert normalize_name('The "Grand" Co.') == "THE GRAND CO"
        assert normalize_name("D’Angelo") == "DANGELO"

    def test_empty(self):
        assert normalize_name("") == ""
        assert normalize_name(None) == ""

    def test_idempotent(self):
        once = normalize_name("Smith & Sons, Inc.")
        assert normalize_name(once) == once


class TestIsBusinessEntity:
    """Tests for the keyword heuristic."""

    @pytest.mark.parametrize("name", [
        "ABC REALTY LLC",
        "123 Main St. Inc.",
        "Park Slope Holdings",
        "Smith Family Trust",
        "Acme Management Co",
        "Brooklyn Properties LP",
        "Riverside Associates",
        "Hudson Partnership",
        "Empire Company",
    ])
    def test_entities(self, name):
        assert is_business_entity(name)

    @pytest.mark.parametrize("name", ["Jane Doe", "John Smith", "Coco Chanel", "Incy Wincy"])
    def test_people(self, name):
        assert not is_business_entity(name)

    def test_whole_word_only(self):
        """CO inside COSTA is not a corporate form."""
        assert not is_business_entity("Maria Costa")

    def test_known_misclassification(self):
        """A person surnamed Group reads as an entity."""
        assert is_business_entity("Anna Group")


class TestClassifierStrategy:
    """Tests for pluggable classification."""

    def test_custom_keywords(self):
        classifier = KeywordEntityClassifier(["LLC"])

        assert classifier.is_entity("ACME LLC")
        assert not classifier.is_entity("ACME REALTY")
        assert classifier.keywords == frozenset({"LLC"})

    def test_default_keywords(self):
        assert KeywordEntityClassifier().keywords == ENTITY_KEYWORDS

    def test_custom_strategy(self):
        class AlwaysPerson(EntityClassifier):
            def is_entity(self, name: str) -> bool:
                return False

        assert not AlwaysPerson().is_entity("ACME LLC")


class TestSurnameToken:
    """Tests for surname extraction."""

    def test_last_token(self):
        assert surname_token("JANE Q DOE") == "DOE"

    def test_single_token(self):
        assert surname_token("MADONNA") == "MADONNA"
