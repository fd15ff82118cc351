"""URL 슬러그 생성 — Slug generation for news URLs."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str, max_length: int = 200) -> str:
    """제목을 ASCII 소문자 대시 구분 슬러그로 변환합니다.

    "Journée portes ouvertes 2025" -> "journee-portes-ouvertes-2025"
    """
    folded: str = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug: str = _NON_ALNUM.sub("-", folded.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "article"
