"""Service test fixtures — in-memory fakes, async SQLite DB and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine
    - Fake-store fixtures share one user1 / lecture(1, 1, capacity 5) baseline

Design Decisions:
    - SQLite in-memory for behaviour tests: fast, no external dependency
    - file_db_manager runs the production DatabaseSessionManager over a SQLite file,
      so concurrent sessions get separate connections and real write locking
    - Seed data committed from its own session: requests only see committed rows
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from conference.db.base import Base
from conference.infrastructure.database import get_db, DatabaseSessionManager
from conference.models.lecture import Lecture
from conference.models.user import User
from conference.services.registration_service import RegistrationService
import conference.infrastructure.database as db_module
from conference.main import app

from tests.services.fake_stores import (
    FakeLecture,
    FakeTransaction,
    FakeUser,
    InMemoryLectureRepository,
    InMemoryUserRepository,
)


# ─── In-memory fakes ─────────────────────────────────────────────

@pytest.fixture
def user1():
    return FakeUser(id=1, login="user1", email="user1@example.com")


@pytest.fixture
def user2():
    return FakeUser(id=2, login="user2", email="user2@example.com")


@pytest.fixture
def lecture():
    return FakeLecture(
        id=1, title="Java Basics", path_number=1, lecture_number=1, capacity=5,
    )


@pytest.fixture
def user_repo(user1, user2):
    return InMemoryUserRepository([user1, user2])


@pytest.fixture
def lecture_repo(lecture):
    return InMemoryLectureRepository([lecture])


@pytest.fixture
def transaction():
    return FakeTransaction()


@pytest.fixture
def service(user_repo, lecture_repo, transaction):
    return RegistrationService(user_repo, lecture_repo, transaction)


# ─── SQLite-backed ───────────────────────────────────────────────

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_conference(test_session_factory):
    """Two users, three lectures: (1,1) cap 5, (1,2) cap 1, (2,1) cap 0."""
    async with test_session_factory() as session:
        session.add_all([
            User(login="user1", email="user1@example.com", lectures=set()),
            User(login="user2", email="user2@example.com", lectures=set()),
            Lecture(
                title="Java Basics", path_number=1, lecture_number=1,
                capacity=5, users=set(),
            ),
            Lecture(
                title="Spring in Depth", path_number=1, lecture_number=2,
                capacity=1, users=set(),
            ),
            Lecture(
                title="Closed Workshop", path_number=2, lecture_number=1,
                capacity=0, users=set(),
            ),
        ])
        await session.commit()


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def file_db_manager(tmp_path):
    """Two users and one single-seat lecture (1, 1) in a SQLite file database."""
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'conference.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with manager.session() as session:
        session.add_all([
            User(login="user1", email="user1@example.com", lectures=set()),
            User(login="user2", email="user2@example.com", lectures=set()),
            Lecture(
                title="Last Seat", path_number=1, lecture_number=1,
                capacity=1, users=set(),
            ),
        ])
        await session.commit()
    yield manager
    await manager.dispose()
