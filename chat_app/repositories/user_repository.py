"""Repository for User model - the session store."""

import logging
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from chat_app.exceptions import StoreReadError, StoreWriteError
from chat_app.models import User
from chat_app.repositories.base_repository import STORE_ERRORS, BaseRepository, store_error_message
from chat_app.schemas import ExternalIdentity

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def find_by_access_token(self, access_token: str) -> list:
        """Display fields (login, avatar_url) of users holding this token.

        An empty list means the token is unknown. Raises StoreReadError when
        the query itself fails.
        """
        stmt = select(User.login, User.avatar_url).where(User.access_token == access_token)
        try:
            result = await self.db.execute(stmt)
        except STORE_ERRORS as e:
            raise StoreReadError(store_error_message(e)) from e
        return result.all()

    async def upsert(self, identity: ExternalIdentity, access_token: str) -> None:
        """Insert or update the user keyed by GitHub id.

        A repeat login overwrites login, avatar_url and access_token on the
        existing row. Raises StoreWriteError on failure.
        """
        insert = _UPSERT_INSERTS.get(self.dialect_name)
        if insert is None:
            raise StoreWriteError(f"Upsert not supported for dialect {self.dialect_name}")

        values = {
            'id': identity.id,
            'login': identity.login,
            'avatar_url': identity.avatar_url,
            'access_token': access_token,
        }
        stmt = insert(User).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.id],
            set_={
                'login': stmt.excluded.login,
                'avatar_url': stmt.excluded.avatar_url,
                'access_token': stmt.excluded.access_token,
            },
        )
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except STORE_ERRORS as e:
            await self.db.rollback()
            raise StoreWriteError(store_error_message(e)) from e
        logger.info(f"Upserted user {identity.login} ({identity.id})")
