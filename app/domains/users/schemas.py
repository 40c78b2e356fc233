"""Users 도메인 스키마 정의

요청/응답 JSON은 camelCase 키(firstName, birthDay 등)를 사용합니다.
snake_case 키로도 요청할 수 있습니다.
"""

import base64
from datetime import date
from typing import Any, Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.core.schemas import APIResponse, BaseSchema
from app.core.utils.datetime import format_date
from app.domains.users.models import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    OCCUPATION_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    SEX_MAX_LENGTH,
)


class UserBase(BaseSchema):
    """사용자 생성/수정 공통 필드"""

    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LENGTH)
    phone: str = Field(default="", max_length=PHONE_MAX_LENGTH)
    birth_day: str = Field(default="", description="생년월일 (DD/MM/YYYY)")
    occupation: str = Field(default="", max_length=OCCUPATION_MAX_LENGTH)
    sex: str = Field(default="", max_length=SEX_MAX_LENGTH)
    profile: Optional[str] = Field(
        default=None, description="프로필 바이너리 (base64)"
    )

    # 길이 검사 전에 앞뒤 공백 제거 (공백만 있으면 min_length에 걸림)
    @field_validator(
        "first_name", "last_name", "email", "occupation", "sex", mode="before"
    )
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


class UserCreate(UserBase):
    """사용자 생성 요청 스키마"""


class UserUpdate(UserBase):
    """사용자 수정 요청 스키마

    모든 변경 가능 필드를 통째로 교체합니다 (profile 생략 시 삭제).
    """


class UserResponse(BaseSchema):
    """사용자 응답 스키마"""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    birth_day: str = Field(..., description="생년월일 (DD/MM/YYYY)")
    occupation: str
    sex: str
    profile: Optional[str] = Field(
        default=None, description="프로필 바이너리 (base64)"
    )

    @field_validator("birth_day", mode="before")
    @classmethod
    def format_birth_day(cls, v: Any) -> Any:
        if isinstance(v, date):
            return format_date(v)
        return v

    @field_validator("profile", mode="before")
    @classmethod
    def encode_profile(cls, v: Any) -> Any:
        if isinstance(v, (bytes, bytearray)):
            return base64.b64encode(v).decode("ascii")
        return v


UserResult = APIResponse[UserResponse]
UserListResult = APIResponse[list[UserResponse]]
UserDeleteResult = APIResponse[str]
