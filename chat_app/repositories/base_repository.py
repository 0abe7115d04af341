"""Base repository with shared query helpers."""

import asyncio
from typing import Generic, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar('ModelT')


# Failures of the store itself; asyncpg connection errors reach us unwrapped
STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


def store_error_message(exc: Exception) -> str:
    """Driver-level message of a failed statement, without SQLAlchemy's wrapping."""
    orig = getattr(exc, 'orig', None)
    if orig is not None:
        return str(orig)
    return str(exc)


class BaseRepository(Generic[ModelT]):
    """Generic repository bound to one model and one session."""

    def __init__(self, db: AsyncSession, model_class: type[ModelT]):
        self.db = db
        self.model_class = model_class

    @property
    def dialect_name(self) -> str:
        return self.db.get_bind().dialect.name
