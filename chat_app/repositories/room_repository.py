"""Repository for the room catalog (rooms with their latest activity)."""

from typing import List
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from chat_app.exceptions import CatalogReadError
from chat_app.models import Room, Message
from chat_app.repositories.base_repository import STORE_ERRORS, BaseRepository, store_error_message
from chat_app.schemas import RoomSummary


def rooms_with_activity():
    """Rooms left-joined with the time of their most recent message."""
    last_message_at = func.max(Message.created_at).label('last_message_at')
    return (
        select(Room.id, Room.name, last_message_at)
        .outerjoin(Message, Message.room_id == Room.id)
        .group_by(Room.id, Room.name)
        .subquery('rooms_with_activity')
    )


class RoomRepository(BaseRepository[Room]):
    """Read-only room catalog."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Room)

    async def list_with_activity(self) -> List[RoomSummary]:
        """Room summaries, most recently active first; rooms without messages last.

        Raises CatalogReadError on any query failure.
        """
        view = rooms_with_activity()
        stmt = select(view.c.id, view.c.name, view.c.last_message_at).order_by(
            view.c.last_message_at.desc().nulls_last(),
            view.c.id,
        )
        try:
            result = await self.db.execute(stmt)
        except STORE_ERRORS as e:
            raise CatalogReadError(store_error_message(e)) from e
        return [RoomSummary.model_validate(row) for row in result.all()]
