"""재단 소개 서비스 — 소개 블록 관리 및 순서 재배치.

Foundation Info Service — Management of the "about the foundation" blocks
(mission, vision, values, history, team, contact) and their display order.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.content import FoundationInfo, InfoType
from foundation.repositories.foundation_info_repository import foundation_info_repository
from foundation.schemas.content import (
    FoundationInfoCreate,
    FoundationInfoResponse,
    FoundationInfoUpdate,
)
from foundation.utils.exceptions import BadRequestError, NotFoundError
from foundation.utils.ids import parse_uuids


class FoundationInfoService:
    """재단 소개 블록 비즈니스 로직을 처리하는 서비스.

    Service handling foundation info blocks.
    """

    def _to_response(self, block: FoundationInfo) -> FoundationInfoResponse:
        return FoundationInfoResponse(
            id=str(block.id),
            title=block.title,
            content=block.content,
            info_type=block.info_type,
            display_order=block.display_order,
            is_active=block.is_active,
            created_at=block.created_at,
        )

    async def list_public(
        self,
        db: AsyncSession,
        info_types: list[InfoType] | None = None,
    ) -> list[FoundationInfoResponse]:
        """활성 블록 공개 목록 — Active blocks ordered by display_order, optionally filtered by type."""
        types: list[str] | None = [t.value for t in info_types] if info_types else None
        blocks = await foundation_info_repository.list_blocks(db, types, active_only=True)
        return [self._to_response(b) for b in blocks]

    async def list_admin(self, db: AsyncSession, info_type: InfoType | None = None) -> list[FoundationInfoResponse]:
        types: list[str] | None = [info_type.value] if info_type else None
        blocks = await foundation_info_repository.list_blocks(db, types, active_only=False)
        return [self._to_response(b) for b in blocks]

    async def get_block(self, db: AsyncSession, block_id: UUID) -> FoundationInfoResponse:
        block: FoundationInfo | None = await foundation_info_repository.get_by_id(db, block_id)
        if block is None:
            raise NotFoundError("Foundation info not found")
        return self._to_response(block)

    async def create_block(self, db: AsyncSession, data: FoundationInfoCreate) -> FoundationInfoResponse:
        """블록 생성 — display_order is set to the type's current max + 1."""
        max_order: int = await foundation_info_repository.get_max_display_order(db, data.info_type.value)
        block: FoundationInfo = await foundation_info_repository.create(
            db,
            {
                "title": data.title,
                "content": data.content,
                "info_type": data.info_type.value,
                "is_active": data.is_active,
                "display_order": max_order + 1,
            },
        )
        return self._to_response(block)

    async def update_block(
        self,
        db: AsyncSession,
        block_id: UUID,
        data: FoundationInfoUpdate,
    ) -> FoundationInfoResponse:
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("info_type") is not None:
            update_data["info_type"] = update_data["info_type"].value
        block: FoundationInfo | None = await foundation_info_repository.update(db, block_id, update_data)
        if block is None:
            raise NotFoundError("Foundation info not found")
        return self._to_response(block)

    async def set_active(self, db: AsyncSession, block_id: UUID, is_active: bool) -> FoundationInfoResponse:
        block: FoundationInfo | None = await foundation_info_repository.update(
            db, block_id, {"is_active": is_active}
        )
        if block is None:
            raise NotFoundError("Foundation info not found")
        return self._to_response(block)

    async def delete_block(self, db: AsyncSession, block_id: UUID) -> None:
        if not await foundation_info_repository.delete(db, block_id):
            raise NotFoundError("Foundation info not found")

    async def reorder(
        self,
        db: AsyncSession,
        info_type: InfoType,
        ids: list[str],
    ) -> list[FoundationInfoResponse]:
        """유형 내 블록 순서를 재배치합니다.

        Reorder the blocks of one info type: each block gets
        display_order = position + 1 in the given list.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            info_type: 대상 유형 (Info type being reordered)
            ids: 새 순서대로 정렬된 블록 ID 목록 (Block ids in the desired order)

        Raises:
            BadRequestError: 없는 ID 또는 다른 유형의 블록 포함
                             (Unknown id, or a block of another type)
        """
        uuid_ids: list[UUID] = parse_uuids(ids)
        blocks = {b.id: b for b in await foundation_info_repository.get_by_ids(db, uuid_ids)}
        if len(blocks) != len(set(uuid_ids)) or any(b.info_type != info_type.value for b in blocks.values()):
            raise BadRequestError("Ids must reference existing blocks of the given type")

        for position, block_id in enumerate(uuid_ids):
            blocks[block_id].display_order = position + 1
        await db.flush()

        return await self.list_admin(db, info_type)


# 싱글턴 인스턴스 — Singleton instance
foundation_info_service: FoundationInfoService = FoundationInfoService()
