"""후기(Avis) Pydantic 요청/응답 스키마 정의.

Avis (review) request/response schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from foundation.models.social import AvisType


class AvisCreate(BaseModel):
    """후기 작성 요청 스키마.

    Attributes:
        prestation_id: 대상 지원 서비스 ID, 선택 (Reviewed prestation, optional)
        demande_id: 대상 신청 ID, 선택, 본인 신청만 (Reviewed demande, must be the caller's)
        rating: 평점 1-5 (Rating)
        is_anonymous: 익명 여부 (Hide the author name publicly)
    """

    prestation_id: str | None = None
    demande_id: str | None = None
    avis_type: AvisType = AvisType.GENERAL
    rating: int = Field(ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)
    is_anonymous: bool = False


class AvisReply(BaseModel):
    admin_response: str = Field(min_length=1, max_length=2000)


class AvisResponse(BaseModel):
    id: str
    user_id: str
    user_name: str
    is_anonymous: bool
    prestation_id: str | None
    demande_id: str | None
    avis_type: str
    rating: int
    comment: str | None
    status: str
    is_approved: bool
    is_featured: bool
    moderated_at: datetime | None
    approved_by: str | None
    approved_at: datetime | None
    admin_response: str | None
    response_date: datetime | None
    created_at: datetime


class AvisPublicResponse(BaseModel):
    """공개 후기 — Public view without the author, demande or moderation links."""

    id: str
    user_name: str
    is_anonymous: bool
    prestation_id: str | None
    avis_type: str
    rating: int
    comment: str | None
    is_featured: bool
    admin_response: str | None
    response_date: datetime | None
    created_at: datetime


class AvisStats(BaseModel):
    """평점 통계 — Rating aggregate over approved avis."""

    prestation_id: str | None
    average_rating: float | None
    count: int
