"""요청 헬퍼 — Request helpers."""

from starlette.requests import Request


def client_ip(request: Request) -> str | None:
    """클라이언트 IP — First X-Forwarded-For hop when behind a proxy, else the peer address."""
    forwarded: str | None = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.client.host if request.client else None
