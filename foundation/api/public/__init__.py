"""공개 API 라우터 패키지 — 인증 없이 접근 가능한 엔드포인트 통합.

Public API Router package — Aggregates the anonymous endpoints of the
public site into a single router.

Included routers:
    - home: 홈 화면 (Mission and figures)
    - news / events / partners / foundation_info: 공개 콘텐츠 (Public content)
    - prestations: 활성 지원 서비스 (Active prestations)
    - avis: 승인된 후기 (Approved avis)
    - contact: 문의 접수 (Contact form)
"""

from fastapi import APIRouter

from foundation.api.public.avis import router as avis_router
from foundation.api.public.contact import router as contact_router
from foundation.api.public.events import router as events_router
from foundation.api.public.foundation_info import router as foundation_info_router
from foundation.api.public.home import router as home_router
from foundation.api.public.news import router as news_router
from foundation.api.public.partners import router as partners_router
from foundation.api.public.prestations import router as prestations_router

public_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 콘텐츠 라우터 등록 — Site content
# ---------------------------------------------------------------------------
public_router.include_router(home_router, tags=["Public Home"])
public_router.include_router(news_router, prefix="/news", tags=["Public News"])
public_router.include_router(events_router, prefix="/events", tags=["Public Events"])
public_router.include_router(partners_router, prefix="/partners", tags=["Public Partners"])
public_router.include_router(foundation_info_router, prefix="/foundation-info", tags=["Public Foundation Info"])
public_router.include_router(contact_router, tags=["Public Contact"])

# ---------------------------------------------------------------------------
# 사회 지원 라우터 등록 — Social aid catalogue and reviews
# ---------------------------------------------------------------------------
public_router.include_router(prestations_router, prefix="/prestations", tags=["Public Prestations"])
public_router.include_router(avis_router, prefix="/avis", tags=["Public Avis"])
