"""
Contact name normalization and person/business classification.

Names from HPD filings are typed by hand, so the same owner shows up as
"O'Brien, LLC." in one filing and "OBRIEN LLC" in the next. The
normalized form is the deduplication key for Person and Entity nodes.

Classification is a keyword heuristic and will misfile edge cases
(a person surnamed "Group"), so it is exposed as a pluggable strategy.
"""

import re
from abc import ABC, abstractmethod
from typing import Iterable, Optional

# Corporate-form keywords, matched as whole words
ENTITY_KEYWORDS = frozenset({
    "LLC",
    "INC",
    "CORP",
    "CORPORATION",
    "CO",
    "COMPANY",
    "LTD",
    "LP",
    "PARTNERSHIP",
    "TRUST",
    "ASSOC",
    "ASSOCIATES",
    "REALTY",
    "PROPERTIES",
    "MANAGEMENT",
    "HOLDINGS",
    "GROUP",
    "ENTERPRISES",
})

# Commas, periods, apostrophes (straight and curly) and quotation marks
_STRIP_CHARS = re.compile(r"[,.'\"‘’“”]")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(raw: Optional[str]) -> str:
    """
    Canonicalize a person or business name into a comparable key.

    Examples:
        >>> normalize_name("O'Brien, LLC.")
        'OBRIEN LLC'
        >>> normalize_name("  abc   realty  llc ")
        'ABC REALTY LLC'
    """
    if not raw:
        return ""
    text = _STRIP_CHARS.sub("", str(raw).upper())
    return _WHITESPACE.sub(" ", text).strip()


def surname_token(normalized_name: str) -> str:
    """Last token of a normalized person name, used for surname searches."""
    tokens = normalized_name.split()
    return tokens[-1] if tokens else normalized_name


class EntityClassifier(ABC):
    """Strategy deciding whether a name denotes a business entity."""

    @abstractmethod
    def is_entity(self, name: str) -> bool:
        """Return True for business entities, False for natural persons."""


class KeywordEntityClassifier(EntityClassifier):
    """Classify by whole-word match against corporate-form keywords."""

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        words = sorted({k.upper() for k in (keywords or ENTITY_KEYWORDS)})
        self.keywords = frozenset(words)
        self._pattern = re.compile(
            r"\b(" + "|".join(re.escape(w) for w in words) + r")\b"
        )

    def is_entity(self, name: str) -> bool:
        return bool(self._pattern.search(normalize_name(name)))


_default_classifier = KeywordEntityClassifier()


def is_business_entity(name: str) -> bool:
    """Classify a name with the default keyword strategy."""
    return _default_classifier.is_entity(name)
