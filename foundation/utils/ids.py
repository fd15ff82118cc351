"""문자열 ID 변환 — Parsing of UUIDs received as plain strings in request bodies."""

from uuid import UUID

from foundation.utils.exceptions import BadRequestError


def parse_uuid(value: str, field: str = "id") -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise BadRequestError(f"Invalid {field}")


def parse_uuids(values: list[str], field: str = "id") -> list[UUID]:
    """ID 목록 변환 — 400 on the first malformed value."""
    return [parse_uuid(value, field) for value in values]
