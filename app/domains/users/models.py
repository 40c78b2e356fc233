"""Users 도메인 모델 정의

users 테이블은 email에 유니크 인덱스를 가지며,
애플리케이션 레벨 중복 검사가 경합으로 뚫려도 최종 방어선 역할을 합니다.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    Index,
    LargeBinary,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.core.utils.datetime import now_utc

# 컬럼 최대 길이
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 256
PHONE_MAX_LENGTH = 20
OCCUPATION_MAX_LENGTH = 100
SEX_MAX_LENGTH = 10

EMAIL_UNIQUE_INDEX = "ix_users_email"


class User(Base):
    """사용자 모델"""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="사용자 ID",
    )
    first_name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, comment="이름"
    )
    last_name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, comment="성"
    )
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        nullable=False,
        comment="이메일 (소문자 저장)",
    )
    phone: Mapped[str] = mapped_column(
        String(PHONE_MAX_LENGTH),
        nullable=False,
        default="",
        server_default="",
        comment="전화번호",
    )
    birth_day: Mapped[date] = mapped_column(
        Date, nullable=False, comment="생년월일 (파싱 실패 시 0001-01-01)"
    )
    occupation: Mapped[str] = mapped_column(
        String(OCCUPATION_MAX_LENGTH),
        nullable=False,
        default="",
        server_default="",
        comment="직업",
    )
    sex: Mapped[str] = mapped_column(
        String(SEX_MAX_LENGTH),
        nullable=False,
        default="",
        server_default="",
        comment="성별",
    )
    profile: Mapped[Optional[bytes]] = mapped_column(
        LargeBinary, nullable=True, comment="프로필 바이너리"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=now_utc,
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="수정 일시"
    )

    __table_args__ = (
        Index(EMAIL_UNIQUE_INDEX, "email", unique=True),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
