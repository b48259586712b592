"""
Intake Infrastructure Layer
===========================

Infrastructure implementations for the citizen intake module.

Contains:
- Models: SQLAlchemy ORM models
- Repositories: Data access implementations
- External: keyword lexicon loader
"""

from src.intake.infrastructure.models import AgencyModel, CategoryModel, SubmissionModel
from src.intake.infrastructure.repositories import (
    SQLAlchemyAgencyRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemySubmissionRepository,
)
from src.intake.infrastructure.external import LexiconDocument, load_lexicon

__all__ = [
    "AgencyModel",
    "CategoryModel",
    "SubmissionModel",
    "SQLAlchemyAgencyRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemySubmissionRepository",
    "LexiconDocument",
    "load_lexicon",
]
