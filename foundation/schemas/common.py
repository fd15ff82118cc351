"""공통 Pydantic 요청/응답 스키마 정의.

Common Pydantic request/response schema definitions shared across
API domains: plain messages, reorder payloads and the partial-update base.
"""

from typing import ClassVar

from pydantic import BaseModel, Field, model_validator


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message response schema for simple confirmations
    (deletes, status changes, logout).

    Attributes:
        message: 응답 메시지 (Response message string)
    """

    message: str  # 응답 메시지 (Human-readable confirmation message)


class ReorderRequest(BaseModel):
    """순서 변경 요청 — IDs in their new display order (first gets 1)."""

    ids: list[str] = Field(min_length=1)


class PartialUpdate(BaseModel):
    """부분 수정 요청의 공통 베이스.

    Omitted fields keep their stored value. Fields named in `not_null`
    back NOT NULL columns: they may be omitted but an explicit null is
    refused with 422.
    """

    not_null: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _refuse_null(self) -> "PartialUpdate":
        nulled = sorted(name for name in self.not_null if name in self.model_fields_set and getattr(self, name) is None)
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self
