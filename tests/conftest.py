import pytest
import os
from datetime import datetime
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Configure settings before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GITHUB_CLIENT_ID", "test-client-id")
os.environ.setdefault("GITHUB_CLIENT_SECRET", "test-client-secret")

from chat_app.config import Settings
from chat_app.database import Base
from chat_app.models import User, Room, Message
from chat_app.schemas import ExternalIdentity, RoomSummary, TokenGranted


@pytest.fixture
async def test_engine():
    """Create a test database engine using in-memory SQLite"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session"""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_settings():
    """Test settings fixture"""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        github_client_id="test-client-id",
        github_client_secret="test-client-secret",
    )


@pytest.fixture
def user_factory():
    """Factory for creating user objects"""
    def create(
        id: int = 7,
        login: str = "alice",
        avatar_url: str = "https://avatars.githubusercontent.com/u/7",
        access_token: str = "abc123",
    ) -> User:
        return User(
            id=id,
            login=login,
            avatar_url=avatar_url,
            access_token=access_token,
            created_at=datetime.utcnow()
        )
    return create


@pytest.fixture
def room_factory():
    """Factory for creating room objects"""
    def create(name: str = "general") -> Room:
        return Room(name=name, created_at=datetime.utcnow())
    return create


@pytest.fixture
def message_factory():
    """Factory for creating message objects"""
    def create(room_id: int, created_at: datetime, user_id: int = None, message: str = "hello") -> Message:
        return Message(
            room_id=room_id,
            user_id=user_id,
            message=message,
            created_at=created_at
        )
    return create


# Mock fixtures for external services
@pytest.fixture
def identity():
    return ExternalIdentity(login="alice", id=7, avatar_url="https://avatars.githubusercontent.com/u/7")


@pytest.fixture
def mock_oauth(identity):
    """Mock GitHub OAuth provider that grants tok1 for any code"""
    mock = MagicMock()
    mock.get_auth_url = MagicMock(return_value="https://github.com/login/oauth/authorize?client_id=test-client-id")
    mock.exchange_code_for_token = AsyncMock(return_value=TokenGranted(access_token="tok1"))
    mock.get_user_info = AsyncMock(return_value=identity)
    return mock


@pytest.fixture
def mock_user_repo():
    """Mock session store with no matching users"""
    mock = MagicMock()
    mock.find_by_access_token = AsyncMock(return_value=[])
    mock.upsert = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_room_repo():
    """Mock room catalog with two rooms"""
    mock = MagicMock()
    mock.list_with_activity = AsyncMock(return_value=[
        RoomSummary(id=1, name="general", last_message_at=datetime(2026, 10, 18, 10, 40, 5)),
        RoomSummary(id=2, name="random", last_message_at=None),
    ])
    return mock
