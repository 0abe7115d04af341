"""Dependency injection setup for repositories and the login gate."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chat_app.auth import AuthGate, GitHubOAuth
from chat_app.config import Settings, get_settings
from chat_app.database import get_db
from chat_app.repositories import UserRepository, RoomRepository


async def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """Get user repository."""
    return UserRepository(db)


async def get_room_repository(db: AsyncSession = Depends(get_db)) -> RoomRepository:
    """Get room repository."""
    return RoomRepository(db)


def get_oauth_provider(settings: Settings = Depends(get_settings)) -> GitHubOAuth:
    return GitHubOAuth(settings)


async def get_auth_gate(
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
    rooms: RoomRepository = Depends(get_room_repository),
    oauth: GitHubOAuth = Depends(get_oauth_provider),
) -> AuthGate:
    """Get the login gate wired to this request's repositories."""
    return AuthGate(settings, users, rooms, oauth)
