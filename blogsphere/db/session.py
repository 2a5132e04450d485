from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool, NullPool
from blogsphere.config import settings
from blogsphere.db.base import Base
from blogsphere.exceptions import ServiceError
from typing import AsyncGenerator
import logging

logger = logging.getLogger(__name__)

def build_engine(url: str, testing: bool = False) -> AsyncEngine:
    """Engine for ``url``; SQLite shares one connection so in-memory data survives"""
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if testing:
        return create_async_engine(url, echo=settings.DEBUG, poolclass=NullPool)
    return create_async_engine(
        url,
        echo=settings.DEBUG,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
    )

def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    # expire_on_commit stays off: handlers serialize blogs after commit
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

engine = build_engine(settings.database_url, testing=settings.is_testing)
AsyncSessionLocal = build_session_factory(engine)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except ServiceError:
            # Expected failures (404, 403, ...) are not database errors
            await session.rollback()
            raise
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise

async def init_db():
    """Create all tables"""
    import blogsphere.models  # noqa: F401  registers the mappers
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized successfully")

async def close_db():
    """Close database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
