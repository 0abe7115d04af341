import pytest
from unittest.mock import AsyncMock, patch
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from chat_app.exceptions import StoreReadError, StoreWriteError
from chat_app.models import User
from chat_app.repositories.user_repository import UserRepository
from chat_app.schemas import ExternalIdentity


class TestUserRepository:
    """Test UserRepository session store operations"""

    @pytest.fixture
    def repo(self, db_session: AsyncSession):
        return UserRepository(db_session)

    @pytest.mark.asyncio
    async def test_find_by_access_token(self, repo, user_factory):
        """Test finding display fields by session token"""
        repo.db.add(user_factory(access_token="abc123"))
        await repo.db.commit()

        rows = await repo.find_by_access_token("abc123")
        assert len(rows) == 1
        assert rows[0].login == "alice"
        assert rows[0].avatar_url == "https://avatars.githubusercontent.com/u/7"

    @pytest.mark.asyncio
    async def test_find_by_access_token_not_found(self, repo, user_factory):
        """Test unknown token returns no rows"""
        repo.db.add(user_factory(access_token="abc123"))
        await repo.db.commit()

        rows = await repo.find_by_access_token("forged")
        assert rows == []

    @pytest.mark.asyncio
    async def test_find_by_access_token_store_error(self, repo):
        """Test query failure surfaces the driver message"""
        error = OperationalError("SELECT", {}, Exception("connection refused"))
        with patch.object(repo.db, "execute", AsyncMock(side_effect=error)):
            with pytest.raises(StoreReadError) as exc_info:
                await repo.find_by_access_token("abc123")

        assert exc_info.value.message == "connection refused"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_upsert_creates_user(self, repo, identity):
        """Test first login inserts the user row"""
        await repo.upsert(identity, "tok1")

        user = (await repo.db.execute(select(User).where(User.id == 7))).scalar_one_or_none()
        assert user is not None
        assert user.login == "alice"
        assert user.access_token == "tok1"

    @pytest.mark.asyncio
    async def test_upsert_overwrites_same_identity(self, repo, identity):
        """Test repeat login updates token, login and avatar without duplicating"""
        await repo.upsert(identity, "tok1")
        renamed = ExternalIdentity(login="alice-renamed", id=7, avatar_url="https://example.com/new.png")
        await repo.upsert(renamed, "tok2")

        count = (await repo.db.execute(select(func.count()).select_from(User))).scalar_one()
        assert count == 1

        rows = await repo.find_by_access_token("tok2")
        assert [row.login for row in rows] == ["alice-renamed"]
        assert await repo.find_by_access_token("tok1") == []

    @pytest.mark.asyncio
    async def test_upsert_store_error(self, repo):
        """Test constraint violation is reported as a write error"""
        await repo.upsert(ExternalIdentity(login="alice", id=7), "shared")

        with pytest.raises(StoreWriteError) as exc_info:
            await repo.upsert(ExternalIdentity(login="bob", id=8), "shared")

        assert exc_info.value.status_code == 400
        assert "UNIQUE" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_find_by_access_token_connection_refused(self, repo):
        """Test unwrapped driver connection errors become read errors"""
        error = ConnectionRefusedError("connection refused")
        with patch.object(repo.db, "execute", AsyncMock(side_effect=error)):
            with pytest.raises(StoreReadError) as exc_info:
                await repo.find_by_access_token("abc123")

        assert exc_info.value.message == "connection refused"

    @pytest.mark.asyncio
    async def test_upsert_connection_refused(self, repo, identity):
        """Test unwrapped driver connection errors become write errors"""
        error = ConnectionRefusedError("connection refused")
        with patch.object(repo.db, "execute", AsyncMock(side_effect=error)):
            with pytest.raises(StoreWriteError) as exc_info:
                await repo.upsert(identity, "tok1")

        assert exc_info.value.message == "connection refused"
        assert exc_info.value.status_code == 400
