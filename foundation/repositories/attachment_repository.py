"""첨부파일 레포지토리 — Attachments of a demande."""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.models.social import Attachment
from foundation.repositories.base import BaseRepository


class AttachmentRepository(BaseRepository[Attachment]):

    def __init__(self) -> None:
        super().__init__(Attachment)

    async def get_by_demande(self, db: AsyncSession, demande_id: UUID) -> Sequence[Attachment]:
        query = (
            select(Attachment)
            .where(Attachment.demande_id == demande_id)
            .order_by(Attachment.uploaded_at)
        )
        return (await db.execute(query)).scalars().all()


# 싱글턴 인스턴스 — Singleton instance
attachment_repository: AttachmentRepository = AttachmentRepository()
