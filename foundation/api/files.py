"""로컬 파일 라우터 — Serves uploads when no S3 bucket is configured."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from foundation.services.storage_service import storage_service
from foundation.utils.exceptions import NotFoundError

router: APIRouter = APIRouter()


@router.get("/files/{key:path}")
async def get_file(key: str) -> FileResponse:
    path: Path | None = storage_service.resolve_local(key)
    if path is None:
        raise NotFoundError("File not found")
    return FileResponse(path)
