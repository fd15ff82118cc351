"""bcrypt 비밀번호 해시 — users.password_hash에는 해시만 저장."""

import bcrypt

_ENCODING = "utf-8"


def hash_password(password: str) -> str:
    salt: bytes = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode(_ENCODING), salt).decode(_ENCODING)


def verify_password(password: str, password_hash: str) -> bool:
    """입력 비밀번호와 저장된 해시 비교."""
    return bcrypt.checkpw(password.encode(_ENCODING), password_hash.encode(_ENCODING))
