"""애플리케이션 진입점 — `uvicorn foundation.main:app`.

Mounts the four API surfaces of the foundation under /api/v1:
auth (tokens), public (anonymous site), app (signed-in employees) and
admin (back office), plus the notify endpoint and local file serving.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foundation.api.admin import admin_router
from foundation.api.app import app_router
from foundation.api.auth import router as auth_router
from foundation.api.files import router as files_router
from foundation.api.notify import router as notify_router
from foundation.api.public import public_router
from foundation.config import settings
from foundation.middleware.axiom_logging import AxiomLoggingMiddleware

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app: FastAPI = FastAPI(title=settings.APP_NAME, version="1.0.0")

# 마지막에 추가한 미들웨어가 바깥쪽 — CORS wraps the request logger
app.add_middleware(AxiomLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api/v1"

app.include_router(auth_router, prefix=f"{API_PREFIX}/auth", tags=["Auth"])
app.include_router(public_router, prefix=f"{API_PREFIX}/public")
app.include_router(app_router, prefix=f"{API_PREFIX}/app")
app.include_router(admin_router, prefix=f"{API_PREFIX}/admin")
app.include_router(notify_router, prefix=f"{API_PREFIX}/notify", tags=["Notify"])
app.include_router(files_router, tags=["Files"])


@app.get("/health", tags=["Health"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
