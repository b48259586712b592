"""
Intake Domain Layer
===================

Domain layer for the citizen intake module.

Contains:
- Entities: Agency, Category, Submission
- Value Objects: Lexicon, RoutingDecision, DayWindow
- Domain Services: KeywordClassifier

This layer is framework-agnostic and contains pure business logic.
"""

from src.intake.domain.entities import Agency, Category, Submission
from src.intake.domain.value_objects import (
    Lexicon,
    RoutingDecision,
    DayWindow,
    normalize_text,
)
from src.intake.domain.classifier import KeywordClassifier, keyword_length

__all__ = [
    # Entities
    "Agency",
    "Category",
    "Submission",
    # Value Objects
    "Lexicon",
    "RoutingDecision",
    "DayWindow",
    "normalize_text",
    # Domain Services
    "KeywordClassifier",
    "keyword_length",
]
