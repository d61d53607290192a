"""
Help Center Backend — Database Session Management
===================================================

What:  Async SQLAlchemy engine, session factory and the per-request session
       dependency.
How:   One engine (and connection pool) per process. Each request receives its
       own AsyncSession through `get_db_session`, which rolls back on any
       error and always closes the session, returning the connection to the
       pool on every exit path.

Commit ownership:
    Services commit their own writes before returning. The exit code of a
    yield dependency runs after the response has been sent, so a commit there
    could fail or lag behind a 201 the client already holds. The commit left
    in `get_db_session` only ends the read transaction of GET requests.

Timeout policy:
    Every store call is attempted once. DB_CONNECT_TIMEOUT is handed to the
    driver as its connect timeout and DB_POOL_TIMEOUT bounds the wait for a
    free pooled connection, so no call hangs on a driver default.

Parameter binding:
    All statements are SQLAlchemy expressions; values are always sent as bound
    parameters. Never build SQL text from request data.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from helpcenter.config import settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """
    Build create_async_engine() keyword arguments for `database_url`.

    Connect-timeout argument names differ per driver: asyncpg takes `timeout`,
    aiomysql takes `connect_timeout`, aiosqlite takes `timeout` (lock wait).
    SQLite does not get pool sizing.
    """
    url = make_url(database_url)
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "echo": settings.log_level == "DEBUG",
    }

    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"timeout": settings.db_connect_timeout}
        return options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=3600,
    )
    if url.get_driver_name() == "aiomysql":
        options["connect_args"] = {"connect_timeout": settings.db_connect_timeout}
    else:
        options["connect_args"] = {"timeout": settings.db_connect_timeout}
    return options


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

# expire_on_commit=False: ORM objects stay readable after the dependency
# commits, which happens after the route has built its response model.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models (and Alembic's metadata)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one AsyncSession per request.

    Commit whatever is still pending on success (writes are already committed
    by the services), rollback on any exception (then re-raise so the global
    handlers can answer), close unconditionally.

    Example:
        @router.get("/users/{user_id}")
        async def get_user(user_id: int, db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """Close every pooled connection. Called from the shutdown lifespan."""
    await engine.dispose()
