"""관리자 API 라우터 패키지 — 백오피스 엔드포인트 통합.

Admin API Router package — Aggregates every back-office router. All
endpoints require the ADMIN role.

Included routers:
    - users: 사용자 관리 (User management)
    - news / events / partners / foundation_info / site_info: 콘텐츠 관리 (Site content)
    - contacts: 문의 처리 (Contact messages)
    - prestations / demandes / avis: 사회 지원 (Social aid)
    - dashboard / notifications: 통계 및 발송 기록 (Figures and email log)
"""

from fastapi import APIRouter

from foundation.api.admin.avis import router as avis_router
from foundation.api.admin.contacts import router as contacts_router
from foundation.api.admin.dashboard import router as dashboard_router
from foundation.api.admin.demandes import router as demandes_router
from foundation.api.admin.events import router as events_router
from foundation.api.admin.foundation_info import router as foundation_info_router
from foundation.api.admin.news import router as news_router
from foundation.api.admin.notifications import router as notifications_router
from foundation.api.admin.partners import router as partners_router
from foundation.api.admin.prestations import router as prestations_router
from foundation.api.admin.site_info import router as site_info_router
from foundation.api.admin.users import router as users_router

admin_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 사용자 라우터 등록 — Users
# ---------------------------------------------------------------------------
admin_router.include_router(users_router, prefix="/users", tags=["Admin Users"])

# ---------------------------------------------------------------------------
# 콘텐츠 라우터 등록 — Site content
# ---------------------------------------------------------------------------
admin_router.include_router(news_router, prefix="/news", tags=["Admin News"])
admin_router.include_router(events_router, prefix="/events", tags=["Admin Events"])
admin_router.include_router(partners_router, prefix="/partners", tags=["Admin Partners"])
admin_router.include_router(foundation_info_router, prefix="/foundation-info", tags=["Admin Foundation Info"])
admin_router.include_router(contacts_router, prefix="/contacts", tags=["Admin Contacts"])
admin_router.include_router(site_info_router, prefix="/site-info", tags=["Admin Site Info"])

# ---------------------------------------------------------------------------
# 사회 지원 라우터 등록 — Social aid
# ---------------------------------------------------------------------------
admin_router.include_router(prestations_router, prefix="/prestations", tags=["Admin Prestations"])
admin_router.include_router(demandes_router, prefix="/demandes", tags=["Admin Demandes"])
admin_router.include_router(avis_router, prefix="/avis", tags=["Admin Avis"])

# ---------------------------------------------------------------------------
# 통계 및 알림 라우터 등록 — Dashboard and notifications
# ---------------------------------------------------------------------------
admin_router.include_router(dashboard_router, prefix="/dashboard", tags=["Admin Dashboard"])
admin_router.include_router(notifications_router, prefix="/notifications", tags=["Admin Notifications"])
