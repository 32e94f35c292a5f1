import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from preplanner.db.session import get_session, init_db
from preplanner.llm.router import get_completion_service
from preplanner.main import app


class FakeCompletionService:
    """Returns canned replies in order (the last one repeats) and counts calls."""

    def __init__(self, *replies, error: Exception | None = None):
        self.replies = list(replies) or ["{}"]
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system: str, user: str) -> str:
        self.calls.append((system, user))
        if self.error is not None:
            raise self.error
        idx = min(len(self.calls) - 1, len(self.replies) - 1)
        return self.replies[idx]


@pytest.fixture
def fake_llm():
    return FakeCompletionService()


@pytest.fixture
def db_engine(tmp_path):
    # NullPool: TestClient may drive requests from different event loops
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    yield engine


@pytest.fixture
def client(fake_llm, db_engine):
    maker = async_sessionmaker(db_engine, expire_on_commit=False)

    async def _session():
        await init_db(db_engine)
        async with maker() as db:
            yield db

    app.dependency_overrides[get_completion_service] = lambda: fake_llm
    app.dependency_overrides[get_session] = _session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_llm():
    return FakeCompletionService
