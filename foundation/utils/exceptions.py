"""서비스 계층 오류 — FastAPI가 그대로 {"detail": ...} 응답으로 변환합니다.

Services raise these instead of building HTTPException by hand:

    raise NotFoundError("Prestation not found")
    raise BadRequestError("Yearly request limit reached for this prestation")
"""

from fastapi import HTTPException, status


class ApiError(HTTPException):
    """상태 코드와 기본 메시지를 클래스에 고정한 HTTPException."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(status_code=type(self).status_code, detail=detail or self.default_detail)


class BadRequestError(ApiError):
    """400 — 검증 스키마로 표현되지 않는 업무 규칙 위반.

    Inactive prestation, amount out of range, yearly limit reached,
    illegal status transition, full event, rejected upload.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"


class ForbiddenError(ApiError):
    """403 — 다른 사용자의 신청서/후기에 대한 작업."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Insufficient permissions"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class DuplicateError(ApiError):
    """409 — 이메일/직원 번호, 뉴스 slug, 같은 대상에 대한 두 번째 후기."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"
