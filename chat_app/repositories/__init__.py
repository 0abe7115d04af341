"""Repository layer for centralized database access."""

from chat_app.repositories.base_repository import BaseRepository
from chat_app.repositories.user_repository import UserRepository
from chat_app.repositories.room_repository import RoomRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'RoomRepository',
]
