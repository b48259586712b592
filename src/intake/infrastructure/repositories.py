"""
Intake Infrastructure Repositories
==================================

SQLAlchemy implementations of the intake repository interfaces.

Repositories translate between ORM models and domain entities and wrap
driver errors in RepositoryException so the application layer never sees
SQLAlchemy types.
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core import DuplicateTicketIdException, RepositoryException
from src.intake.application import (
    IAgencyRepository,
    ICategoryRepository,
    ISubmissionRepository,
)
from src.intake.domain import Agency, Category, Submission
from src.intake.infrastructure.models import AgencyModel, CategoryModel, SubmissionModel


@contextmanager
def translate_errors(operation: str):
    """Re-raise SQLAlchemy errors as RepositoryException."""
    try:
        yield
    except SQLAlchemyError as e:
        raise RepositoryException(f"{operation} failed: {e}", {"operation": operation}) from e


def _to_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.astimezone(timezone.utc)


def agency_from_model(model: AgencyModel) -> Agency:
    return Agency(
        id=model.id,
        name=model.name,
        contact_email=model.contact_email,
        contact_information=model.contact_information,
    )


def category_from_model(model: CategoryModel) -> Category:
    return Category(
        id=model.id,
        name=model.name,
        agency_id=model.agency_id,
        description=model.description,
    )


def submission_from_model(model: SubmissionModel, with_relations: bool = False) -> Submission:
    submission = Submission(
        id=model.id,
        ticket_id=model.ticket_id,
        subject=model.subject,
        description=model.description,
        citizen_contact=model.citizen_contact,
        language_preference=model.language_preference,
        category_id=model.category_id,
        agency_id=model.agency_id,
        status=model.status,
        admin_response=model.admin_response,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
    if with_relations:
        submission.category = category_from_model(model.category) if model.category else None
        submission.agency = agency_from_model(model.agency) if model.agency else None
    return submission


class SQLAlchemyAgencyRepository(IAgencyRepository):
    """SQLAlchemy implementation for agencies."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, agency_id: int) -> Optional[Agency]:
        with translate_errors("find agency"):
            model = await self._session.get(AgencyModel, agency_id)
        return agency_from_model(model) if model else None

    async def find_by_name(self, name: str) -> Optional[Agency]:
        stmt = select(AgencyModel).where(AgencyModel.name == name)
        with translate_errors("find agency by name"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return agency_from_model(model) if model else None

    async def list_all(self) -> List[Agency]:
        stmt = select(AgencyModel).order_by(AgencyModel.name)
        with translate_errors("list agencies"):
            result = await self._session.execute(stmt)
        return [agency_from_model(model) for model in result.scalars().all()]

    async def create(
        self,
        name: str,
        contact_email: Optional[str] = None,
        contact_information: Optional[str] = None
    ) -> Agency:
        model = AgencyModel(
            name=name,
            contact_email=contact_email,
            contact_information=contact_information,
        )
        self._session.add(model)
        with translate_errors("create agency"):
            await self._session.flush()
        return agency_from_model(model)


class SQLAlchemyCategoryRepository(ICategoryRepository):
    """SQLAlchemy implementation for categories."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, category_id: int) -> Optional[Category]:
        with translate_errors("find category"):
            model = await self._session.get(CategoryModel, category_id)
        return category_from_model(model) if model else None

    async def find_by_name(self, name: str) -> Optional[Category]:
        stmt = select(CategoryModel).where(CategoryModel.name == name)
        with translate_errors("find category by name"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return category_from_model(model) if model else None

    async def list_all(self) -> List[Category]:
        stmt = select(CategoryModel).order_by(CategoryModel.name)
        with translate_errors("list categories"):
            result = await self._session.execute(stmt)
        return [category_from_model(model) for model in result.scalars().all()]

    async def create(
        self,
        name: str,
        agency_id: Optional[int] = None,
        description: Optional[str] = None
    ) -> Category:
        model = CategoryModel(name=name, agency_id=agency_id, description=description)
        self._session.add(model)
        with translate_errors("create category"):
            await self._session.flush()
        return category_from_model(model)


class SQLAlchemySubmissionRepository(ISubmissionRepository):
    """SQLAlchemy implementation for submissions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _detailed(self):
        return (
            select(SubmissionModel)
            .options(
                selectinload(SubmissionModel.category),
                selectinload(SubmissionModel.agency),
            )
            .execution_options(populate_existing=True)
        )

    async def count_created_between(self, start: datetime, end: datetime) -> int:
        stmt = select(func.count(SubmissionModel.id)).where(
            SubmissionModel.created_at >= _to_utc(start),
            SubmissionModel.created_at <= _to_utc(end),
        )
        with translate_errors("count submissions"):
            result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def exists_by_ticket_id(self, ticket_id: str) -> bool:
        stmt = select(SubmissionModel.id).where(SubmissionModel.ticket_id == ticket_id)
        with translate_errors("check ticket id"):
            result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def create(self, submission: Submission) -> Submission:
        model = SubmissionModel(
            ticket_id=submission.ticket_id,
            subject=submission.subject,
            description=submission.description,
            citizen_contact=submission.citizen_contact,
            language_preference=submission.language_preference,
            category_id=submission.category_id,
            agency_id=submission.agency_id,
            status=submission.status,
            admin_response=submission.admin_response,
            created_at=_to_utc(submission.created_at),
            updated_at=submission.updated_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Nothing but read-only lookups precede the insert in this session
            await self._session.rollback()
            if await self.exists_by_ticket_id(submission.ticket_id):
                raise DuplicateTicketIdException(submission.ticket_id) from e
            raise RepositoryException(f"create submission failed: {e}") from e
        except SQLAlchemyError as e:
            raise RepositoryException(f"create submission failed: {e}") from e

        return submission_from_model(model)

    async def get_by_ticket_id(self, ticket_id: str) -> Optional[Submission]:
        stmt = self._detailed().where(SubmissionModel.ticket_id == ticket_id)
        with translate_errors("get submission"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return submission_from_model(model, with_relations=True) if model else None

    async def get_by_id(self, submission_id: int) -> Optional[Submission]:
        stmt = self._detailed().where(SubmissionModel.id == submission_id)
        with translate_errors("get submission"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return submission_from_model(model, with_relations=True) if model else None

    async def list_by_agency(self, agency_id: int) -> List[Submission]:
        stmt = (
            self._detailed()
            .where(SubmissionModel.agency_id == agency_id)
            .order_by(SubmissionModel.created_at.desc(), SubmissionModel.id.desc())
        )
        with translate_errors("list submissions"):
            result = await self._session.execute(stmt)
        return [submission_from_model(m, with_relations=True) for m in result.scalars().all()]

    async def update_review(self, submission: Submission) -> Submission:
        with translate_errors("update submission"):
            model = await self._session.get(SubmissionModel, submission.id)
            if model is None:
                raise RepositoryException(f"Submission {submission.id} not found")

            # Routing fields are never written here
            model.status = submission.status
            model.admin_response = submission.admin_response
            model.updated_at = submission.updated_at or datetime.now(timezone.utc)
            await self._session.flush()

        updated = await self.get_by_id(submission.id)
        if updated is None:
            raise RepositoryException(f"Submission {submission.id} not found")
        return updated

    async def count_all(self) -> int:
        with translate_errors("count submissions"):
            result = await self._session.execute(select(func.count(SubmissionModel.id)))
        return int(result.scalar_one())

    async def count_by_status(self) -> Dict[str, int]:
        stmt = (
            select(SubmissionModel.status, func.count(SubmissionModel.id))
            .group_by(SubmissionModel.status)
        )
        with translate_errors("count submissions by status"):
            result = await self._session.execute(stmt)
        return {status: int(count) for status, count in result.all()}

    async def count_by_category(self) -> List[Tuple[Optional[str], int]]:
        count = func.count(SubmissionModel.id)
        stmt = (
            select(CategoryModel.name, count)
            .select_from(SubmissionModel)
            .outerjoin(CategoryModel, SubmissionModel.category_id == CategoryModel.id)
            .group_by(CategoryModel.name)
            .order_by(count.desc(), CategoryModel.name)
        )
        with translate_errors("count submissions by category"):
            result = await self._session.execute(stmt)
        return [(name, int(total)) for name, total in result.all()]
