"""관리자 대시보드 통계 스키마.

Admin dashboard statistics schema.
"""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """대시보드 통계 응답.

    Attributes:
        total_demandes / pending_demandes / approved_demandes / rejected_demandes / paid_demandes:
            신청 건수 (Demande counts; pending = SUBMITTED + IN_REVIEW)
        demandes_by_status: 상태별 신청 건수 (Count per status)
        total_requested_amount / total_approved_amount / total_paid_amount:
            금액 합계 (Amount totals)
        average_processing_days: 제출부터 처리까지 평균 일수 (Mean submit-to-process delay)
    """

    total_demandes: int
    pending_demandes: int
    approved_demandes: int
    rejected_demandes: int
    paid_demandes: int
    demandes_by_status: dict[str, int]

    total_requested_amount: float
    total_approved_amount: float
    total_paid_amount: float

    total_prestations: int
    active_prestations: int

    total_avis: int
    pending_avis: int
    average_rating: float | None
    positive_avis: int
    negative_avis: int

    average_processing_days: float | None

    total_users: int
    published_news: int
    upcoming_events: int
    new_contacts: int
