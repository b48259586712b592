"""
Intake Infrastructure Models
============================

SQLAlchemy ORM models for the intake module.

These are the database representations of our domain entities.
They belong in the infrastructure layer, not the domain layer.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config import Language, SubmissionStatus
from src.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AgencyModel(Base):
    """
    Database model for Agency entity.

    Maps to the 'agencies' table.
    """
    __tablename__ = "agencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_information: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


class CategoryModel(Base):
    """
    Database model for Category entity.

    Maps to the 'categories' table. Deleting an agency leaves its
    categories in place with no agency.
    """
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    agency_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("agencies.id", onupdate="CASCADE", ondelete="SET NULL"),
        nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    agency: Mapped[Optional[AgencyModel]] = relationship(AgencyModel, lazy="raise")


class SubmissionModel(Base):
    """
    Database model for Submission entity.

    Maps to the 'submissions' table.
    """
    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Business identifier handed to the citizen
    ticket_id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)

    # Routing
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    agency_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("agencies.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Content
    subject: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    citizen_contact: Mapped[str] = mapped_column(String(255), nullable=False)
    language_preference: Mapped[str] = mapped_column(String(32), nullable=False, default=Language.ENGLISH)

    # Review
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=SubmissionStatus.RECEIVED)
    admin_response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    category: Mapped[Optional[CategoryModel]] = relationship(CategoryModel, lazy="raise")
    agency: Mapped[Optional[AgencyModel]] = relationship(AgencyModel, lazy="raise")
