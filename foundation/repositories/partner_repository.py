"""파트너 레포지토리.

Partner Repository — Sector filtered listing and distinct sectors.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import Partner
from foundation.repositories.base import BaseRepository


class PartnerRepository(BaseRepository[Partner]):

    def __init__(self) -> None:
        super().__init__(Partner)

    async def list_partners(self, db: AsyncSession, sector: str | None = None) -> Sequence[Partner]:
        query: Select = select(Partner)
        if sector:
            query = query.where(Partner.sector == sector)
        return (await db.execute(query.order_by(Partner.name))).scalars().all()

    async def get_sectors(self, db: AsyncSession) -> list[str]:
        query: Select = (
            select(Partner.sector)
            .where(Partner.sector.is_not(None))
            .distinct()
            .order_by(Partner.sector)
        )
        return list((await db.execute(query)).scalars().all())


# 싱글턴 인스턴스 — Singleton instance
partner_repository: PartnerRepository = PartnerRepository()
