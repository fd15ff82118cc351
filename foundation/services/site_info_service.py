"""홈 화면 정보 서비스 — Home page mission/stats held in a single SiteInfo row."""

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import SiteInfo
from foundation.repositories.site_info_repository import site_info_repository
from foundation.schemas.content import HomeResponse, SiteInfoResponse, SiteInfoUpdate

# 기본 홈 화면 내용 — Content of the row created on first access
DEFAULT_MISSION: str = "Our mission is to serve and support our community through excellence and innovation."
DEFAULT_STATS: dict[str, int] = {"totalUsers": 0, "totalEvents": 0, "totalPartners": 0}
DEFAULT_MINISTRY_CONTENT: str = "Ministry information will be updated soon."


class SiteInfoService:
    """홈 화면 정보 서비스.

    The site info row is created with default content the first time it
    is read.
    """

    def _to_response(self, info: SiteInfo) -> SiteInfoResponse:
        return SiteInfoResponse(
            id=str(info.id),
            mission=info.mission,
            stats=info.stats or {},
            ministry_content=info.ministry_content,
            updated_at=info.updated_at,
        )

    async def get_or_create(self, db: AsyncSession) -> SiteInfo:
        info: SiteInfo | None = await site_info_repository.get_current(db)
        if info is None:
            info = await site_info_repository.create(
                db,
                {
                    "mission": DEFAULT_MISSION,
                    "stats": dict(DEFAULT_STATS),
                    "ministry_content": DEFAULT_MINISTRY_CONTENT,
                },
            )
        return info

    async def get_home(self, db: AsyncSession) -> HomeResponse:
        info: SiteInfo = await self.get_or_create(db)
        return HomeResponse(mission=info.mission, stats=info.stats or {})

    async def get_site_info(self, db: AsyncSession) -> SiteInfoResponse:
        return self._to_response(await self.get_or_create(db))

    async def update_site_info(self, db: AsyncSession, data: SiteInfoUpdate) -> SiteInfoResponse:
        info: SiteInfo = await self.get_or_create(db)
        info = await site_info_repository.apply(db, info, data.model_dump(exclude_unset=True))
        return self._to_response(info)


# 싱글턴 인스턴스 — Singleton instance
site_info_service: SiteInfoService = SiteInfoService()
