"""파트너 서비스 — Partner CRUD and sector listing."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import Partner
from foundation.repositories.partner_repository import partner_repository
from foundation.schemas.content import PartnerCreate, PartnerResponse, PartnerUpdate
from foundation.utils.exceptions import NotFoundError


class PartnerService:

    def _to_response(self, partner: Partner) -> PartnerResponse:
        return PartnerResponse(
            id=str(partner.id),
            name=partner.name,
            logo_url=partner.logo_url,
            website=partner.website,
            sector=partner.sector,
            phone=partner.phone,
            email=partner.email,
            created_at=partner.created_at,
        )

    async def list_partners(self, db: AsyncSession, sector: str | None = None) -> list[PartnerResponse]:
        return [self._to_response(p) for p in await partner_repository.list_partners(db, sector)]

    async def list_sectors(self, db: AsyncSession) -> list[str]:
        return await partner_repository.get_sectors(db)

    async def get_partner(self, db: AsyncSession, partner_id: UUID) -> PartnerResponse:
        partner: Partner | None = await partner_repository.get_by_id(db, partner_id)
        if partner is None:
            raise NotFoundError("Partner not found")
        return self._to_response(partner)

    async def create_partner(self, db: AsyncSession, data: PartnerCreate) -> PartnerResponse:
        partner: Partner = await partner_repository.create(db, data.model_dump())
        return self._to_response(partner)

    async def update_partner(self, db: AsyncSession, partner_id: UUID, data: PartnerUpdate) -> PartnerResponse:
        partner: Partner | None = await partner_repository.update(
            db, partner_id, data.model_dump(exclude_unset=True)
        )
        if partner is None:
            raise NotFoundError("Partner not found")
        return self._to_response(partner)

    async def delete_partner(self, db: AsyncSession, partner_id: UUID) -> None:
        if not await partner_repository.delete(db, partner_id):
            raise NotFoundError("Partner not found")


# 싱글턴 인스턴스 — Singleton instance
partner_service: PartnerService = PartnerService()
