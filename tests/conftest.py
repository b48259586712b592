"""
Shared test fixtures.

Engine tests run against in-memory fakes; repository and API tests run
against SQLite in memory through aiosqlite.
"""

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.admin.infrastructure import BcryptPasswordHasher
from src.core import DuplicateTicketIdException, RepositoryException
from src.infrastructure.database import Base, get_session
from src.infrastructure.database.seed import SeedDocument, seed_reference_data
from src.intake.application import ICategoryRepository, ISubmissionRepository
from src.intake.domain import Category, KeywordClassifier, Lexicon, Submission

# Register mapped tables
import src.admin.infrastructure.models  # noqa: F401
import src.intake.infrastructure.models  # noqa: F401


FIXED_NOW = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

LEXICON_DATA = {
    "english": {
        "Water & Sanitation": ["water", "pipe", "sewage"],
        "Electricity": ["electricity", "power", "blackout"],
        "Roads & Transport": ["road", "pothole"],
        "General": ["service"],
    },
    "kinyarwanda": {
        "Water & Sanitation": ["amazi"],
        "Electricity": ["amashanyarazi", "umuriro"],
        "Roads & Transport": ["umuhanda"],
    },
}


# ========== In-memory fakes ==========

class FakeCategoryRepository(ICategoryRepository):
    """Category lookups over a fixed list, recording every call."""

    def __init__(self, categories: List[Category], fail: bool = False):
        self._categories = list(categories)
        self.fail = fail
        self.calls: List[Tuple[str, object]] = []

    async def find_by_id(self, category_id: int) -> Optional[Category]:
        self.calls.append(("id", category_id))
        if self.fail:
            raise RepositoryException("categories unavailable")
        return next((c for c in self._categories if c.id == category_id), None)

    async def find_by_name(self, name: str) -> Optional[Category]:
        self.calls.append(("name", name))
        if self.fail:
            raise RepositoryException("categories unavailable")
        return next((c for c in self._categories if c.name == name), None)

    async def list_all(self) -> List[Category]:
        return sorted(self._categories, key=lambda c: c.name)


class FakeSubmissionRepository(ISubmissionRepository):
    """
    Submission store that enforces ticket ID uniqueness on insert.

    Every read yields to the event loop so concurrent callers interleave.
    """

    def __init__(self):
        self.rows: Dict[str, Submission] = {}
        self.fail_count = False
        self.preexisting: set = set()
        self._next_id = 1

    async def count_created_between(self, start: datetime, end: datetime) -> int:
        await asyncio.sleep(0)
        if self.fail_count:
            raise RepositoryException("count unavailable")
        return len(self.rows)

    async def exists_by_ticket_id(self, ticket_id: str) -> bool:
        await asyncio.sleep(0)
        return ticket_id in self.rows or ticket_id in self.preexisting

    async def create(self, submission: Submission) -> Submission:
        await asyncio.sleep(0)
        if submission.ticket_id in self.rows or submission.ticket_id in self.preexisting:
            raise DuplicateTicketIdException(submission.ticket_id)
        submission.id = self._next_id
        self._next_id += 1
        self.rows[submission.ticket_id] = submission
        return submission

    async def get_by_ticket_id(self, ticket_id: str) -> Optional[Submission]:
        return self.rows.get(ticket_id)

    async def get_by_id(self, submission_id: int) -> Optional[Submission]:
        return next((s for s in self.rows.values() if s.id == submission_id), None)

    async def list_by_agency(self, agency_id: int) -> List[Submission]:
        matches = [s for s in self.rows.values() if s.agency_id == agency_id]
        return sorted(matches, key=lambda s: (s.created_at, s.id), reverse=True)

    async def update_review(self, submission: Submission) -> Submission:
        self.rows[submission.ticket_id] = submission
        return submission

    async def count_all(self) -> int:
        return len(self.rows)

    async def count_by_status(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for s in self.rows.values():
            counts[s.status] = counts.get(s.status, 0) + 1
        return counts

    async def count_by_category(self) -> List[Tuple[Optional[str], int]]:
        return []


@pytest.fixture
def lexicon() -> Lexicon:
    return Lexicon.from_mapping(LEXICON_DATA)


@pytest.fixture
def classifier(lexicon) -> KeywordClassifier:
    return KeywordClassifier(lexicon)


@pytest.fixture
def categories() -> List[Category]:
    return [
        Category(id=1, name="Water & Sanitation", agency_id=10),
        Category(id=2, name="Electricity", agency_id=20),
        Category(id=3, name="Roads & Transport", agency_id=None),
        Category(id=4, name="General", agency_id=99),
    ]


@pytest.fixture
def category_repo(categories) -> FakeCategoryRepository:
    return FakeCategoryRepository(categories)


@pytest.fixture
def submission_repo() -> FakeSubmissionRepository:
    return FakeSubmissionRepository()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


# ========== SQLite database ==========

@pytest.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


SEED = SeedDocument.model_validate({
    "agencies": [
        {"name": "Water Agency", "contact_email": "water@example.rw", "contact_information": "3535"},
        {"name": "Energy Agency", "contact_email": "energy@example.rw"},
        {"name": "Local Government"},
    ],
    "categories": [
        {"name": "Water & Sanitation", "agency": "Water Agency"},
        {"name": "Electricity", "agency": "Energy Agency"},
        {"name": "Roads & Transport"},
        {"name": "General", "agency": "Local Government"},
    ],
    "admins": [
        {"username": "water_admin", "password": "water-pass", "agency": "Water Agency"},
        {"username": "energy_admin", "password": "energy-pass", "agency": "Energy Agency"},
        {"username": "water_viewer", "password": "viewer-pass", "agency": "Water Agency", "role": "viewer"},
    ],
})


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
async def seeded(session_maker, hasher):
    async with session_maker() as session:
        await seed_reference_data(session, SEED, hasher)
        await session.commit()
    return session_maker


# ========== API client ==========

@pytest.fixture
async def client(seeded, classifier, lexicon):
    from src.main import app

    async def override_get_session():
        async with seeded() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.state.classifier = classifier
    app.state.lexicon = lexicon

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log an admin in and return the Authorization header."""

    async def _login(username: str, password: str) -> Dict[str, str]:
        response = await client.post("/api/admin/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        token = response.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _login
