"""
Intake Value Objects
====================

Immutable value objects for the routing engine.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared between requests.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from src.intake.domain.entities import Category

KeywordGroup = Tuple[str, Tuple[str, ...]]


def normalize_text(text: str) -> str:
    """Case-insensitive comparable form used for descriptions and keywords."""
    return text.lower()


@dataclass(frozen=True)
class Lexicon:
    """
    Per-language keyword lexicon.

    Maps language -> ordered (category name, keywords) pairs. Keyword order
    and category order follow the source document; category order decides
    ties during classification.

    Keywords are stored already normalized and with blanks removed.
    """
    _entries: Mapping[str, Tuple[KeywordGroup, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Mapping[str, Iterable[str]]]
    ) -> "Lexicon":
        """Build a lexicon from a plain language -> category -> keywords mapping."""
        entries = {}
        for language, categories in data.items():
            groups = []
            for category_name, keywords in categories.items():
                normalized = tuple(
                    normalize_text(keyword)
                    for keyword in keywords
                    if keyword and keyword.strip()
                )
                groups.append((category_name, normalized))
            entries[normalize_text(language.strip())] = tuple(groups)
        return cls(MappingProxyType(entries))

    @classmethod
    def empty(cls) -> "Lexicon":
        return cls()

    @property
    def languages(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    @property
    def is_empty(self) -> bool:
        return not any(self._entries.values())

    def groups_for(self, language: str) -> Optional[Tuple[KeywordGroup, ...]]:
        """Keyword groups for a language, or None when the language has no entry."""
        return self._entries.get(language)

    def category_count(self, language: str) -> int:
        return len(self._entries.get(language, ()))

    def __contains__(self, language: object) -> bool:
        return language in self._entries


@dataclass(frozen=True)
class RoutingDecision:
    """
    Final (category, agency) pair for a submission.

    The agency always comes from the category record; it is never chosen
    on its own.
    """
    category_id: int
    agency_id: int
    category_name: str
    strategy: str

    @classmethod
    def from_category(cls, category: Category, strategy: str) -> "RoutingDecision":
        if category.agency_id is None:
            raise ValueError(f"Category '{category.name}' has no agency")
        return cls(
            category_id=category.id,
            agency_id=category.agency_id,
            category_name=category.name,
            strategy=strategy,
        )


@dataclass(frozen=True)
class DayWindow:
    """
    Inclusive start/end of one calendar day.

    An aware moment keeps its own zone. A naive moment is server local
    time, and each bound gets the UTC offset in force at that instant, so
    a DST change during the day does not shift the window.
    """
    start: datetime
    end: datetime

    @classmethod
    def containing(cls, moment: datetime) -> "DayWindow":
        start = moment.replace(hour=0, minute=0, second=0, microsecond=0)
        end = moment.replace(hour=23, minute=59, second=59, microsecond=999999)
        if moment.tzinfo is None:
            start, end = start.astimezone(), end.astimezone()
        return cls(start=start, end=end)

    @property
    def stamp(self) -> str:
        """YYYYMMDD of the day."""
        return self.start.strftime("%Y%m%d")
