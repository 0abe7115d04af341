"""Data schemas - Pydantic models for the login gate"""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


class ExternalIdentity(BaseModel):
    """Identity snapshot returned by GitHub for one token exchange"""
    model_config = ConfigDict(frozen=True)

    login: str
    id: int
    avatar_url: Optional[str] = None


class TokenGranted(BaseModel):
    access_token: str


class TokenDenied(BaseModel):
    error: str


TokenResponse = Union[TokenGranted, TokenDenied]


class RoomSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    last_message_at: Optional[datetime] = None


class AuthOutcome(BaseModel):
    """Render payload for an authenticated visitor. Logged out is plain False."""
    rooms: List[RoomSummary]


__all__ = [
    'ExternalIdentity',
    'TokenGranted',
    'TokenDenied',
    'TokenResponse',
    'RoomSummary',
    'AuthOutcome',
]
