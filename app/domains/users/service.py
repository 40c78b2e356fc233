"""Users 도메인 서비스

사용자 CRUD 비즈니스 로직 계층입니다.

각 작업은 예외를 밖으로 던지지 않고 항상 APIResponse 엔벨로프를 반환합니다.
- 도메인 실패(USER_NOT_FOUND, DUPLICATE_EMAIL 등): 도메인 예외를 엔벨로프로 변환
- 그 외 실패(DB 오류 등): 로그를 남기고 일반 실패 메시지 + 내부 오류 내용 반환
"""

import base64
import uuid
from datetime import date
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import BaseAPIException, ErrorCode, error_code_value
from app.core.logging import get_logger
from app.core.middlewares.context import get_request_id
from app.core.schemas import (
    APIResponse,
    create_error_response,
    create_response,
)
from app.core.utils.datetime import MIN_DATE, now_utc, parse_date
from app.domains.users.exceptions import (
    DuplicateEmailException,
    InvalidBirthDayException,
    UserNotFoundException,
)
from app.domains.users.models import EMAIL_UNIQUE_INDEX, User
from app.domains.users.repository import UserRepository
from app.domains.users.schemas import (
    UserBase,
    UserCreate,
    UserDeleteResult,
    UserListResult,
    UserResponse,
    UserResult,
    UserUpdate,
)

logger = get_logger(__name__)

# 응답 메시지
USER_SAVED = "User saved successfully"
USER_UPDATED = "User updated successfully"
USER_DELETED = "User deleted successfully"
SAVE_FAILED = "Failed to save data. Please try again."
FETCH_FAILED = "Failed to fetch data. Please try again."
UPDATE_FAILED = "Failed to update data. Please try again."
DELETE_FAILED = "Failed to delete data. Please try again."


def normalize_email(email: str) -> str:
    """이메일 정규화 (소문자 + 앞뒤 공백 제거)"""
    return email.lower().strip()


def decode_profile(value: str) -> bytes:
    """base64 프로필 디코딩

    줄바꿈된 base64도 허용하도록 공백 문자를 제거한 뒤 엄격하게 디코딩합니다.
    그 외 알파벳이 아닌 문자가 있으면 binascii.Error가 발생합니다.
    """
    return base64.b64decode("".join(value.split()), validate=True)


def is_duplicate_email_error(exc: IntegrityError) -> bool:
    """IntegrityError가 email 유니크 제약 위반인지 확인"""
    text = str(exc.orig or exc).lower()
    if EMAIL_UNIQUE_INDEX in text:
        return True
    return ("unique" in text or "duplicate" in text) and "email" in text


class UserService:
    """사용자 서비스"""

    def __init__(
        self,
        session: AsyncSession,
        strict_birth_day: Optional[bool] = None,
        expose_internal_errors: Optional[bool] = None,
    ):
        self.repository = UserRepository(session)
        self.strict_birth_day = (
            settings.strict_birth_day
            if strict_birth_day is None
            else strict_birth_day
        )
        self.expose_internal_errors = (
            settings.expose_internal_errors
            if expose_internal_errors is None
            else expose_internal_errors
        )

    async def create_user(self, user_data: UserCreate) -> UserResult:
        """사용자 생성

        Args:
            user_data: 사용자 생성 데이터

        Returns:
            생성된 사용자를 담은 응답 (실패 시 DUPLICATE_EMAIL 등)
        """
        try:
            email = normalize_email(user_data.email)
            if await self.repository.get_by_email(email):
                raise DuplicateEmailException(email=email)

            user = User(
                id=uuid.uuid4(),
                created_at=now_utc(),
                **self._build_fields(user_data),
            )

            try:
                created_user = await self.repository.create(user)
                await self.repository.commit()
            except IntegrityError as e:
                await self.repository.rollback()
                if is_duplicate_email_error(e):
                    raise DuplicateEmailException(email=email) from e
                raise

            self._log("User created", created_user.id, "created")
            return create_response(
                data=UserResponse.model_validate(created_user),
                message=USER_SAVED,
                id=created_user.id,
            )

        except BaseAPIException as e:
            return self._domain_failure(e)
        except Exception as e:
            return await self._unexpected_failure(e, SAVE_FAILED, "create")

    async def get_user(self, user_id: UUID) -> UserResult:
        """사용자 조회

        Args:
            user_id: 사용자 ID

        Returns:
            사용자 정보를 담은 응답 (없으면 USER_NOT_FOUND)
        """
        try:
            user = await self._get_existing(user_id)
            return create_response(
                data=UserResponse.model_validate(user), id=user.id
            )

        except BaseAPIException as e:
            return self._domain_failure(e)
        except Exception as e:
            return await self._unexpected_failure(
                e, FETCH_FAILED, "fetch", user_id
            )

    async def get_users(self) -> UserListResult:
        """전체 사용자 목록 조회

        Returns:
            사용자 목록을 담은 응답 (사용자가 없으면 빈 목록)
        """
        try:
            users = await self.repository.get_list()
            return create_response(
                data=[UserResponse.model_validate(user) for user in users]
            )

        except Exception as e:
            return await self._unexpected_failure(e, FETCH_FAILED, "list")

    async def update_user(
        self, user_id: UUID, user_data: UserUpdate
    ) -> UserResult:
        """사용자 수정

        변경 가능한 모든 필드를 요청 값으로 교체하고 updated_at을 갱신합니다.

        Args:
            user_id: 수정할 사용자 ID
            user_data: 사용자 수정 데이터

        Returns:
            수정된 사용자를 담은 응답 (USER_NOT_FOUND, DUPLICATE_EMAIL 가능)
        """
        try:
            user = await self._get_existing(user_id)

            email = normalize_email(user_data.email)
            if await self.repository.get_by_email(email, exclude_id=user_id):
                raise DuplicateEmailException(email=email)

            # 모든 값을 먼저 계산한 뒤 반영 (도중 실패 시 부분 수정 방지)
            fields = self._build_fields(user_data)
            for name, value in fields.items():
                setattr(user, name, value)
            user.updated_at = now_utc()

            try:
                updated_user = await self.repository.update(user)
                await self.repository.commit()
            except IntegrityError as e:
                await self.repository.rollback()
                if is_duplicate_email_error(e):
                    raise DuplicateEmailException(email=email) from e
                raise

            self._log("User updated", updated_user.id, "updated")
            return create_response(
                data=UserResponse.model_validate(updated_user),
                message=USER_UPDATED,
                id=updated_user.id,
            )

        except BaseAPIException as e:
            return self._domain_failure(e)
        except Exception as e:
            return await self._unexpected_failure(
                e, UPDATE_FAILED, "update", user_id
            )

    async def delete_user(self, user_id: UUID) -> UserDeleteResult:
        """사용자 삭제 (Hard Delete)

        Args:
            user_id: 삭제할 사용자 ID

        Returns:
            삭제 결과 응답 (데이터 없음, 없으면 USER_NOT_FOUND)
        """
        try:
            user = await self._get_existing(user_id)
            await self.repository.delete(user)
            await self.repository.commit()

            self._log("User deleted", user_id, "deleted")
            return create_response(message=USER_DELETED)

        except BaseAPIException as e:
            return self._domain_failure(e)
        except Exception as e:
            return await self._unexpected_failure(
                e, DELETE_FAILED, "delete", user_id
            )

    async def _get_existing(self, user_id: UUID) -> User:
        """사용자 조회, 없으면 UserNotFoundException"""
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id=user_id)
        return user

    def _build_fields(self, user_data: UserBase) -> dict[str, Any]:
        """요청 데이터를 저장용 컬럼 값으로 변환

        - 이름/직업/성별: 앞뒤 공백 제거
        - 이메일: 소문자 + 공백 제거
        - 전화번호: 그대로 저장
        - 생년월일: DD/MM/YYYY 파싱 (실패 시 MIN_DATE 또는 INVALID_BIRTHDAY)
        - 프로필: base64 디코딩, 공백과 줄바꿈 무시 (없으면 None)
        """
        profile = (
            decode_profile(user_data.profile)
            if user_data.profile is not None
            else None
        )
        return {
            "first_name": user_data.first_name.strip(),
            "last_name": user_data.last_name.strip(),
            "email": normalize_email(user_data.email),
            "phone": user_data.phone,
            "birth_day": self._parse_birth_day(user_data.birth_day),
            "occupation": user_data.occupation.strip(),
            "sex": user_data.sex.strip(),
            "profile": profile,
        }

    def _parse_birth_day(self, birth_day: str) -> date:
        parsed = parse_date(birth_day)
        if parsed is not None:
            return parsed
        if self.strict_birth_day:
            raise InvalidBirthDayException(birth_day=birth_day)
        return MIN_DATE

    def _domain_failure(self, exc: BaseAPIException) -> APIResponse[Any]:
        """도메인 예외를 실패 응답으로 변환"""
        return create_error_response(
            message=exc.message, error=error_code_value(exc.error_code)
        )

    async def _unexpected_failure(
        self,
        exc: Exception,
        message: str,
        action: str,
        user_id: Optional[UUID] = None,
    ) -> APIResponse[Any]:
        """예상치 못한 오류를 실패 응답으로 변환 (트랜잭션 롤백 포함)"""
        logger.exception(
            "User operation failed",
            extra={
                "request_id": get_request_id(),
                "user_id": str(user_id) if user_id else None,
                "action": action,
            },
        )
        try:
            await self.repository.rollback()
        except Exception:
            logger.warning(
                "Rollback after failure also failed",
                exc_info=True,
                extra={"request_id": get_request_id(), "action": action},
            )

        if self.expose_internal_errors:
            error = str(exc) or type(exc).__name__
        else:
            error = ErrorCode.INTERNAL_ERROR.value
        return create_error_response(message=message, error=error)

    def _log(self, event: str, user_id: UUID, action: str) -> None:
        logger.info(
            event,
            extra={
                "request_id": get_request_id(),
                "user_id": str(user_id),
                "action": action,
            },
        )
