"""앱 API 라우터 패키지 — 인증된 사용자(직원)용 엔드포인트 통합.

App API Router package — Aggregates all endpoints available to any
authenticated user into a single router.

Included routers:
    - profile: 내 프로필 및 아바타 (My profile and avatar)
    - demandes: 내 지원 신청 및 첨부파일 (My demandes and attachments)
    - avis: 내 후기 (My avis)
    - events: 행사 참가 등록 (Event registration)
    - notifications: 내 알림 (My notifications)
"""

from fastapi import APIRouter

from foundation.api.app.avis import router as avis_router
from foundation.api.app.demandes import router as demandes_router
from foundation.api.app.events import router as events_router
from foundation.api.app.notifications import router as notifications_router
from foundation.api.app.profile import router as profile_router

app_router: APIRouter = APIRouter()

# 프로필: /profile, /profile/avatar
app_router.include_router(profile_router, tags=["App Profile"])

# ---------------------------------------------------------------------------
# 사회 지원 라우터 등록 — Social aid routers
# ---------------------------------------------------------------------------
app_router.include_router(demandes_router, prefix="/my/demandes", tags=["My Demandes"])
app_router.include_router(avis_router, prefix="/my/avis", tags=["My Avis"])

# ---------------------------------------------------------------------------
# 행사/알림 라우터 등록 — Events and notifications
# ---------------------------------------------------------------------------
app_router.include_router(events_router, prefix="/events", tags=["App Events"])
app_router.include_router(notifications_router, prefix="/my/notifications", tags=["My Notifications"])
