"""Users 도메인 모듈

사용자 CRUD (생성, 단건/전체 조회, 수정, 삭제) 도메인입니다.

구조:
    - models.py: SQLAlchemy 모델 정의 (User)
    - schemas.py: Pydantic 스키마 (UserCreate, UserUpdate, UserResponse, etc.)
    - repository.py: 데이터 접근 계층
    - service.py: 비즈니스 로직 (이메일 중복 검사, 필드 정규화, 결과 엔벨로프)
    - router.py: API 엔드포인트 (결과 → HTTP 상태 코드 매핑)
    - exceptions.py: 도메인 예외
"""

from app.domains.users.exceptions import (
    DuplicateEmailException,
    InvalidBirthDayException,
    UserErrorCode,
    UserNotFoundException,
)
from app.domains.users.models import User
from app.domains.users.router import router
from app.domains.users.schemas import (
    UserCreate,
    UserResponse,
    UserResult,
    UserUpdate,
)
from app.domains.users.service import UserService

__all__ = [
    "User",
    "UserService",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserResult",
    "router",
    "UserErrorCode",
    "UserNotFoundException",
    "DuplicateEmailException",
    "InvalidBirthDayException",
]
