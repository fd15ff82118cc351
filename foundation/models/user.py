"""사용자 및 역할 관련 SQLAlchemy ORM 모델 정의.

User and Role SQLAlchemy ORM model definitions.
A user carries both credentials (login email, bcrypt hash) and the
employee profile (matricule, service, family information, notification
preferences). Roles are attached through a many-to-many association.

Tables:
    - roles: 역할 (USER, ADMIN)
    - user_roles: 사용자-역할 연결 (User/role association)
    - users: 사용자 계정 및 프로필 (User accounts with profile)
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foundation.database import Base

# 기본 역할 이름 — Built-in role names
ROLE_USER: str = "USER"
ROLE_ADMIN: str = "ADMIN"

# 사용자-역할 연결 테이블 — User/role association table
user_roles: Table = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Uuid, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """역할 모델 — 권한 그룹.

    Role model. "USER" is granted at registration, "ADMIN" unlocks the
    back-office routes.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 역할 이름, 전역 고유 (Role name, globally unique)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "roles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    users = relationship("User", secondary=user_roles, back_populates="roles")


class User(Base):
    """사용자 모델 — 인증 정보 및 직원 프로필.

    User model — Credentials and employee profile.
    Email is the login identifier and is unique; the matricule is the
    employee number and is unique as well. Deleting a user from the
    admin panel is a soft delete (deleted_at + is_active=False).

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 로그인 이메일, 고유 (Login email, unique)
        password_hash: bcrypt 해시 (Bcrypt password hash)
        first_name / last_name: 이름 (Given / family name)
        matricule: 직원 번호, 고유 (Employee number, unique)
        service_code: 소속 부서 코드 (Department code)
        phone: 전화번호 10자리 (10-digit phone number)
        address / birth_date / family_status / children_count: 프로필 정보 (Profile data)
        avatar_url: 프로필 이미지 URL (Avatar URL)
        notif_email / notif_news / notif_events: 알림 수신 설정 (Notification preferences)
        is_active: 활성 상태 (Active flag)
        deleted_at: 소프트 삭제 일시 (Soft delete timestamp)
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 이메일 — Login email (unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    # 직원 번호 — Employee number (unique)
    matricule: Mapped[str] = mapped_column(String(10), unique=True, nullable=False, index=True)
    service_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # 프로필 — Profile
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    family_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    children_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # 알림 설정 — Notification preferences
    notif_email: Mapped[bool] = mapped_column(Boolean, default=True)
    notif_news: Mapped[bool] = mapped_column(Boolean, default=True)
    notif_events: Mapped[bool] = mapped_column(Boolean, default=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    roles = relationship("Role", secondary=user_roles, back_populates="users", lazy="selectin")
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def role_names(self) -> list[str]:
        return sorted(role.name for role in self.roles)

    @property
    def can_sign_in(self) -> bool:
        """활성 상태이며 삭제되지 않은 계정."""
        return self.is_active and self.deleted_at is None

    def has_role(self, name: str) -> bool:
        return any(role.name == name for role in self.roles)
