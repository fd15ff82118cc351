"""요청 로그 미들웨어 — API 호출마다 Axiom 이벤트 하나.

Each API call becomes one Axiom event: method, path, query, client IP,
the JSON body with secrets masked, status, duration and, for 4xx/5xx,
the error detail. Upload (multipart) bodies and file downloads are not
logged. With AXIOM_API_TOKEN or AXIOM_DATASET unset the middleware does
nothing.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from foundation.config import settings
from foundation.utils.request import client_ip

logger = logging.getLogger(__name__)

_MASKED = re.compile(r"pass(word|wd)?|secret|token|authorization|api_?key|credential", re.IGNORECASE)
_UNLOGGED = ("/health", "/docs", "/redoc", "/openapi.json")
_MAX_TEXT = 2000
_MAX_ERROR = 500


def mask(value: Any, depth: int = 0) -> Any:
    """비밀 값 가리기 — Masks values under secret-looking keys, trims long lists and strings."""
    if depth > 5:
        return "..."
    if isinstance(value, dict):
        return {key: "***" if _MASKED.search(key) else mask(item, depth + 1) for key, item in value.items()}
    if isinstance(value, list):
        return [mask(item, depth + 1) for item in value[:20]]
    if isinstance(value, str) and len(value) > _MAX_TEXT:
        return value[:_MAX_TEXT] + "...(truncated)"
    return value


def is_logged(path: str) -> bool:
    return path not in _UNLOGGED and not path.startswith("/files/")


async def _json_body(request: Request) -> Any:
    if request.method not in ("POST", "PUT", "PATCH"):
        return None
    if "application/json" not in request.headers.get("content-type", ""):
        return None
    raw: bytes = await request.body()
    if not raw:
        return None
    try:
        return mask(json.loads(raw))
    except ValueError:
        return "(invalid json body)"


async def _buffer_error(response: Response) -> tuple[Response, str]:
    """오류 응답 본문을 읽고 같은 내용으로 다시 만든 응답과 오류 사유를 반환합니다."""
    chunks: list[bytes] = []
    async for chunk in response.body_iterator:
        chunks.append(chunk if isinstance(chunk, bytes) else chunk.encode("utf-8"))
    raw: bytes = b"".join(chunks)

    try:
        decoded = json.loads(raw)
        reason = str(decoded.get("detail", decoded) if isinstance(decoded, dict) else decoded)
    except ValueError:
        reason = raw.decode("utf-8", errors="replace")

    rebuilt = Response(
        content=raw,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type=response.media_type,
    )
    return rebuilt, reason[:_MAX_ERROR]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """API 호출 로그를 Axiom 데이터셋으로 전송합니다."""

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._dataset: str = settings.AXIOM_DATASET
        self._client: AxiomClient | None = (
            AxiomClient(token=settings.AXIOM_API_TOKEN)
            if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET
            else None
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._client is None or not is_logged(request.url.path):
            return await call_next(request)

        started: float = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": client_ip(request),
        }
        if request.query_params:
            event["query_params"] = mask(dict(request.query_params))
        body = await _json_body(request)
        if body is not None:
            event["request_body"] = body

        event["status_code"] = 500
        try:
            response: Response = await call_next(request)
            event["status_code"] = response.status_code
            if response.status_code >= 400:
                response, event["error"] = await _buffer_error(response)
            return response
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._send(event)

    def _send(self, event: dict[str, Any]) -> None:
        # 전송 실패는 경고만 남기고 응답에는 영향 없음
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception as exc:
            logger.warning("Axiom ingest failed for %s %s: %s", event["method"], event["path"], exc)
