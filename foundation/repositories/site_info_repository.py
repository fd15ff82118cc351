"""홈 화면 정보 레포지토리 — Single-row site info access."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import SiteInfo
from foundation.repositories.base import BaseRepository


class SiteInfoRepository(BaseRepository[SiteInfo]):

    def __init__(self) -> None:
        super().__init__(SiteInfo)

    async def get_current(self, db: AsyncSession) -> SiteInfo | None:
        result = await db.execute(select(SiteInfo).order_by(SiteInfo.updated_at).limit(1))
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
site_info_repository: SiteInfoRepository = SiteInfoRepository()
