"""Users 도메인 예외 정의"""

from enum import Enum
from uuid import UUID

from app.core.exceptions import BadRequestException, NotFoundException


class UserErrorCode(str, Enum):
    """사용자 도메인 에러 코드"""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_BIRTHDAY = "INVALID_BIRTHDAY"


class UserNotFoundException(NotFoundException):
    """사용자를 찾을 수 없는 경우"""

    def __init__(self, user_id: UUID | None = None):
        detail = {"user_id": str(user_id)} if user_id else {}
        super().__init__(
            message="User not found",
            error_code=UserErrorCode.USER_NOT_FOUND,
            detail=detail,
        )


class DuplicateEmailException(BadRequestException):
    """이미 다른 사용자가 사용 중인 이메일인 경우"""

    def __init__(self, email: str | None = None):
        detail = {"email": email} if email else {}
        super().__init__(
            message="Email already exists",
            error_code=UserErrorCode.DUPLICATE_EMAIL,
            detail=detail,
        )


class InvalidBirthDayException(BadRequestException):
    """생년월일이 DD/MM/YYYY 형식이 아닌 경우 (strict_birth_day 설정 시)"""

    def __init__(self, birth_day: str | None = None):
        detail = {"birth_day": birth_day} if birth_day else {}
        super().__init__(
            message="Birth day must be in DD/MM/YYYY format",
            error_code=UserErrorCode.INVALID_BIRTHDAY,
            detail=detail,
        )
