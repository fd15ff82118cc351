"""목록 페이지네이션 — page/per_page 쿼리 파라미터와 Page 응답.

Every paginated list of the API (admin back office, "my" lists of the
employee app, public news/events/avis) answers with the same envelope:
{items, total, page, per_page, pages}.
"""

import math
from typing import Annotated, Any, Sequence

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

PageQuery = Annotated[int, Query(ge=1, description="페이지 번호 (1-based page number)")]
PerPageQuery = Annotated[int, Query(ge=1, le=100, description="페이지당 항목 수 (Items per page, max 100)")]


class Page(BaseModel):
    """페이지 응답.

    Attributes:
        items: 현재 페이지 항목 (Response models of the current page)
        total: 필터 적용 후 전체 건수 (Total rows matching the filters)
        page / per_page: 요청한 페이지와 크기 (Requested page and size)
        pages: 전체 페이지 수, 결과가 없으면 0 (Page count, 0 when empty)
    """

    items: list[Any]
    total: int
    page: int
    per_page: int
    pages: int


def build_page(items: Sequence[Any], total: int, page: int, per_page: int) -> Page:
    return Page(
        items=list(items),
        total=total,
        page=page,
        per_page=per_page,
        pages=math.ceil(total / per_page) if per_page else 0,
    )


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """정렬된 목록 쿼리를 잘라서 실행합니다.

    Run the count over the unordered query, then fetch one OFFSET/LIMIT
    slice of the ordered one.

    Returns:
        tuple[Sequence[Any], int]: (페이지 행, 전체 건수)
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    rows = await db.execute(query.offset((page - 1) * per_page).limit(per_page))
    return rows.scalars().all(), total
