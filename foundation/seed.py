"""초기 데이터 시드 스크립트 — 역할, 관리자 계정, 홈 화면 정보 생성.

Seed script — Creates the built-in roles, the first admin account and the
default home page row. Run it once to bootstrap an empty database.

Usage:
    python -m foundation.seed

Creates:
    - 2개 역할: USER, ADMIN (2 roles)
    - 1개 관리자 계정: admin@fondation.local / admin123 (1 admin user)
    - 기본 SiteInfo 행 (Default site info row)
"""

import asyncio

from foundation.database import async_session, engine, Base
from foundation.models import Role, User
from foundation.models.user import ROLE_ADMIN, ROLE_USER
from foundation.repositories.auth_repository import auth_repository
from foundation.services.site_info_service import site_info_service
from foundation.utils.password import hash_password

ADMIN_EMAIL: str = "admin@fondation.local"
ADMIN_PASSWORD: str = "admin123"


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data. Creates tables if they don't
    exist, then inserts whatever is missing.

    Idempotent: 이미 있는 데이터는 건너뜁니다 (Existing rows are kept).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        roles: list[Role] = [
            await auth_repository.get_or_create_role(db, ROLE_USER),
            await auth_repository.get_or_create_role(db, ROLE_ADMIN),
        ]

        admin: User | None = await auth_repository.get_user_by_email(db, ADMIN_EMAIL)
        if admin is None:
            admin = User(
                email=ADMIN_EMAIL,
                password_hash=hash_password(ADMIN_PASSWORD),
                first_name="Admin",
                last_name="Fondation",
                matricule="ADM0001",
                is_active=True,
                roles=roles,
            )
            db.add(admin)
            print(f"Created admin user {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
        else:
            print(f"Admin user {ADMIN_EMAIL} already exists. Skipping.")

        # 기본 홈 화면 정보 — Default home page row
        await site_info_service.get_or_create(db)

        await db.commit()
        print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed())
