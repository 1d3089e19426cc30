from collections.abc import AsyncGenerator, AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings
from src.pf_common.errors import StoreError

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=20,
    max_overflow=10,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    async with async_session_factory() as session:
        yield session


@contextmanager
def store_errors() -> Iterator[None]:
    """Re-raise driver/SQLAlchemy failures as StoreError.

    Domain errors (AppError subclasses) pass through untouched. Repositories
    that need to interpret an IntegrityError catch it before it gets here.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreError(f"Backing store failure: {exc.__class__.__name__}") from exc


@asynccontextmanager
async def unit_of_work(db: AsyncSession) -> AsyncIterator[None]:
    """Commit on success; roll back and re-raise on any failure.

    SQLAlchemy errors leave the block as StoreError, domain errors unchanged.
    """
    try:
        with store_errors():
            yield
            await db.commit()
    except Exception:
        await db.rollback()
        raise
