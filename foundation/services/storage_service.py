"""파일 저장소 — 아바타와 신청서 첨부파일.

Uploaded files are stored in the S3 bucket when AWS credentials and a
bucket are configured, otherwise on the local disk under the uploads
directory, from where GET /files/{key} serves them. Keys look like
"<folder>/YYYY/MM/DD/<hex>.<ext>".
"""

import uuid
from datetime import datetime, timezone
from pathlib import Path

import boto3
from botocore.config import Config as BotoConfig
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from foundation.config import REPO_ROOT, settings
from foundation.utils.exceptions import BadRequestError

FILES_ROUTE: str = "/files/"


def _extension(filename: str | None) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def _too_large(max_bytes: int) -> str:
    return f"File too large (max {max_bytes // (1024 * 1024)} MB)"


class StorageService:
    """S3/로컬 저장소 — The backend is chosen from the settings on every call."""

    def __init__(self, uploads_dir: Path | None = None) -> None:
        self.uploads_dir: Path = uploads_dir or (
            Path(settings.LOCAL_UPLOADS_DIR) if settings.LOCAL_UPLOADS_DIR else REPO_ROOT / "uploads"
        )
        self._s3 = None

    @property
    def is_local(self) -> bool:
        return not (settings.AWS_ACCESS_KEY_ID and settings.AWS_S3_BUCKET)

    def _s3_client(self):
        if self._s3 is None:
            self._s3 = boto3.client(
                "s3",
                region_name=settings.AWS_S3_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._s3

    async def read_upload(self, file: UploadFile, max_bytes: int) -> bytes:
        """업로드 본문 읽기 — At most max_bytes + 1 bytes, so validate_upload still sees an oversized file.

        Raises:
            BadRequestError: 선언된 크기가 이미 한도 초과 (Declared size over the limit)
        """
        if file.size is not None and file.size > max_bytes:
            raise BadRequestError(_too_large(max_bytes))
        return await file.read(max_bytes + 1)

    def validate_upload(
        self,
        filename: str | None,
        size: int,
        allowed_extensions: frozenset[str],
        max_bytes: int,
    ) -> str:
        """확장자와 크기 검사 후 소문자 확장자를 반환합니다.

        Raises:
            BadRequestError: 허용되지 않은 확장자, 빈 파일, 크기 초과
        """
        ext: str = _extension(filename)
        if ext not in allowed_extensions:
            raise BadRequestError(f"File type not allowed (allowed: {', '.join(sorted(allowed_extensions))})")
        if not size:
            raise BadRequestError("File is empty")
        if size > max_bytes:
            raise BadRequestError(_too_large(max_bytes))
        return ext

    async def save(self, folder: str, ext: str, data: bytes, content_type: str | None = None) -> str:
        """새 키로 저장하고 공개 URL을 반환합니다 (S3 URL 또는 /files/<key>)."""
        today: str = datetime.now(timezone.utc).strftime("%Y/%m/%d")
        key: str = f"{folder}/{today}/{uuid.uuid4().hex}.{ext}"

        if self.is_local:
            await run_in_threadpool(self._write_local, key, data)
            return FILES_ROUTE + key

        put_args: dict = {"Bucket": settings.AWS_S3_BUCKET, "Key": key, "Body": data}
        if content_type:
            put_args["ContentType"] = content_type
        await run_in_threadpool(lambda: self._s3_client().put_object(**put_args))
        return f"https://{settings.AWS_S3_BUCKET}.s3.{settings.AWS_S3_REGION}.amazonaws.com/{key}"

    def _write_local(self, key: str, data: bytes) -> None:
        target: Path = self.uploads_dir / key
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def resolve_local(self, key: str) -> Path | None:
        """로컬 파일 경로 — None for missing files and keys escaping the uploads directory."""
        root: Path = self.uploads_dir.resolve()
        candidate: Path = (root / key).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return candidate
        return None


storage_service: StorageService = StorageService()
