"""관리자 대시보드 라우터 — Aggregated figures for the back office."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foundation.api.deps import require_admin
from foundation.database import get_db
from foundation.models.user import User
from foundation.schemas.dashboard import DashboardStats
from foundation.services.dashboard_service import dashboard_service

router: APIRouter = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> DashboardStats:
    """대시보드 통계 — Demandes, amounts, catalogue, avis and site content."""
    return await dashboard_service.get_stats(db)
