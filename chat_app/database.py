from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from chat_app.config import get_settings
import logging

logger = logging.getLogger(__name__)
settings = get_settings()


def _engine_options(database_url: str) -> dict:
    """Pool options; SQLite uses its own static/single-thread pools"""
    if database_url.startswith("sqlite"):
        return {}
    # - pool_pre_ping=True: validates connections before using them
    # - pool_recycle=3600: recycle connections every hour
    return {
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_size": 10,
        "max_overflow": 10,
    }


engine = create_async_engine(
    settings.database_url,
    echo=False,
    **_engine_options(settings.database_url),
)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db():
    """Dependency for getting database session"""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db():
    """Initialize database tables"""
    # Register tables on Base.metadata
    import chat_app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized successfully")


async def close_db():
    """Close database connection"""
    await engine.dispose()
