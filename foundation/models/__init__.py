"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 역할 및 사용자 (Role and User)
    token: 리프레시 토큰 (Refresh tokens)
    content: 뉴스, 행사, 파트너, 재단 소개, 문의, 홈 정보 (News, events, partners, foundation info, contacts, site info)
    social: 지원 서비스, 신청, 첨부파일, 후기 (Prestations, demandes, attachments, avis)
    notification: 이메일 알림 기록 (Email notification log)
"""

from foundation.models.user import Role, User, user_roles
from foundation.models.token import RefreshToken
from foundation.models.content import Contact, Event, FoundationInfo, News, Partner, SiteInfo
from foundation.models.social import Attachment, Avis, Demande, Prestation
from foundation.models.notification import Notification

__all__ = [
    "Role", "User", "user_roles",
    "RefreshToken",
    "News", "Event", "Partner", "FoundationInfo", "Contact", "SiteInfo",
    "Prestation", "Demande", "Attachment", "Avis",
    "Notification",
]
