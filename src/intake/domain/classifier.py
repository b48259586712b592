"""
Keyword Classifier
==================

Assigns a category name to a complaint description by scoring it against
the keyword lexicon of the submission's language.

Scoring: every keyword found as a substring of the description adds its
weight to its category, once. The default weight is the keyword's length,
so longer (more specific) keywords outweigh short ones. The category with
the strictly highest nonzero score wins; ties go to the category listed
first in the lexicon.
"""

from typing import Callable, Dict, Iterable, Optional

from src.config import SUPPORTED_LANGUAGES, Language
from src.intake.domain.value_objects import Lexicon, normalize_text

KeywordWeight = Callable[[str], int]


def keyword_length(keyword: str) -> int:
    return len(keyword)


class KeywordClassifier:
    """
    Deterministic, read-only classifier over an injected Lexicon.

    Safe to share between concurrent requests: it holds no mutable state.
    """

    def __init__(
        self,
        lexicon: Lexicon,
        fallback_language: str = Language.ENGLISH,
        known_languages: Optional[Iterable[str]] = None,
        weight: KeywordWeight = keyword_length,
    ):
        self._lexicon = lexicon
        self._fallback_language = normalize_text(fallback_language)
        known = set(known_languages) if known_languages is not None else set(SUPPORTED_LANGUAGES)
        self._known_languages = frozenset(known | set(lexicon.languages))
        self._weight = weight

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

    def resolve_language(self, language: Optional[str]) -> str:
        """Map a requested language to the lexicon slice that will be used."""
        if language:
            candidate = normalize_text(language.strip())
            if candidate in self._known_languages:
                return candidate
        return self._fallback_language

    def score(self, description: str, language: Optional[str] = None) -> Dict[str, int]:
        """
        Per-category scores in lexicon order.

        Returns an empty dict when the language has no lexicon entry.
        """
        groups = self._lexicon.groups_for(self.resolve_language(language))
        if not groups:
            return {}

        text = normalize_text(description or "")
        scores: Dict[str, int] = {}
        for category_name, keywords in groups:
            scores[category_name] = sum(
                self._weight(keyword) for keyword in keywords if keyword in text
            )
        return scores

    def classify(self, description: str, language: Optional[str] = None) -> Optional[str]:
        """
        Best matching category name, or None when nothing matches.
        """
        best_name: Optional[str] = None
        best_score = 0
        # Strict comparison keeps the first category on ties
        for category_name, value in self.score(description, language).items():
            if value > best_score:
                best_name, best_score = category_name, value
        return best_name
