"""DB 엔진, 세션 팩토리, ORM 베이스.

One async engine per process. PostgreSQL (asyncpg) in deployment; the
test suite builds its own in-memory SQLite engine and overrides get_db.
Request handlers share the session yielded by get_db and commit it
themselves after a successful mutation.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from foundation.config import settings


def _pool_options(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        return {}
    # statement_cache_size=0: pgbouncer 트랜잭션 모드 호환
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "connect_args": {"statement_cache_size": 0},
    }


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL, echo=settings.DEBUG, **_pool_options(settings.DATABASE_URL)
)

# 커밋 후에도 응답 직렬화를 위해 속성 유지
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    """모든 모델의 선언적 베이스 — Models register their tables on Base.metadata."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 세션 — Rolled back implicitly if the handler never commits."""
    async with async_session() as session:
        yield session
