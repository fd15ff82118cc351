"""공통 픽스처 — SQLite 인메모리 DB, API 클라이언트, 사용자와 토큰.

Every test gets a fresh schema in an in-memory aiosqlite database and
one AsyncSession shared by the fixtures and the API (get_db is
overridden), so rows created by fixtures are visible to the requests.
Uploads land in tmp_path; SMTP is not configured, so emails end up as
LOGGED notifications.
"""

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from foundation.database import Base, get_db
from foundation.main import app
from foundation.models import *  # noqa: F401,F403
from foundation.models.social import Prestation
from foundation.models.user import ROLE_ADMIN, ROLE_USER, Role, User
from foundation.services.storage_service import storage_service
from foundation.utils.jwt import ACCESS, issue_token
from foundation.utils.password import hash_password


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """테스트 하나의 DB 세션 — A brand new schema per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async def _same_session() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _same_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def uploads_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(storage_service, "uploads_dir", tmp_path)
    return tmp_path


# --- 데이터 — Seed rows ---

@pytest_asyncio.fixture
async def roles(db: AsyncSession) -> dict[str, Role]:
    created = {name: Role(name=name) for name in (ROLE_USER, ROLE_ADMIN)}
    db.add_all(created.values())
    await db.flush()
    return created


async def _add_user(db: AsyncSession, role_list: list[Role], password: str = "secret123", **fields) -> User:
    user = User(password_hash=hash_password(password), roles=role_list, **fields)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def employee(db: AsyncSession, roles) -> User:
    """직원 Jane Doe (EMP001, 부서 RH)."""
    return await _add_user(
        db, [roles[ROLE_USER]],
        email="jane@fondation.ma", first_name="Jane", last_name="Doe",
        matricule="EMP001", service_code="RH",
    )


@pytest_asyncio.fixture
async def other_employee(db: AsyncSession, roles) -> User:
    return await _add_user(
        db, [roles[ROLE_USER]],
        email="omar@fondation.ma", first_name="Omar", last_name="Benali", matricule="EMP002",
    )


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession, roles) -> User:
    """관리자 (USER + ADMIN), 비밀번호 admin123."""
    return await _add_user(
        db, [roles[ROLE_USER], roles[ROLE_ADMIN]], password="admin123",
        email="admin@fondation.ma", first_name="Admin", last_name="Fondation", matricule="ADM001",
    )


@pytest_asyncio.fixture
async def prestation(db: AsyncSession) -> Prestation:
    """활성 지원 서비스 — 100 to 1000, at most two demandes a year."""
    row = Prestation(
        title="Aide au logement",
        prestation_type="AIDE_FINANCIERE",
        category="LOGEMENT",
        min_amount=Decimal("100"),
        max_amount=Decimal("1000"),
        max_requests_per_year=2,
        processing_time_days=15,
        display_order=1,
    )
    db.add(row)
    await db.flush()
    await db.refresh(row)
    return row


# --- 토큰 — Access tokens ---

def make_token(user: User) -> str:
    token, _ = issue_token({"sub": str(user.id), "email": user.email, "roles": user.role_names}, ACCESS)
    return token


@pytest.fixture
def employee_token(employee) -> str:
    return make_token(employee)


@pytest.fixture
def other_token(other_employee) -> str:
    return make_token(other_employee)


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
