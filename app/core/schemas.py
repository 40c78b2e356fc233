"""공통 API 응답 스키마

이 모듈은 API 응답의 일관된 구조를 정의합니다.
성공/실패 모두 같은 평면 구조(id, message, data, success, error)를 사용합니다.

Usage::

    # 성공 응답
    from app.core.schemas import APIResponse, create_response
    return create_response(data=user, id=user.id, message="User saved")

    # 실패 응답
    from app.core.schemas import create_error_response
    return create_error_response(message="Not found", error="NOT_FOUND")

Note:
    Generic 타입의 classmethod는 Pydantic에서 제한이 있으므로,
    팩토리 함수(create_response, create_error_response)를 사용하거나
    직접 생성자를 호출하세요.
"""

from typing import Any, Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """기본 스키마 (ORM 모델 변환 + camelCase 직렬화용)"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class APIResponse(BaseModel, Generic[DataT]):
    """API 응답 엔벨로프

    Example::

        @router.get("/{id}", response_model=APIResponse[UserResponse])
        async def get_user(id: UUID):
            return APIResponse(
                id=id,
                success=True,
                data=UserResponse.model_validate(user),
            )
    """

    id: Optional[UUID] = Field(default=None, description="대상 리소스 ID")
    message: str = Field(default="", description="사용자용 메시지")
    data: Optional[DataT] = Field(default=None, description="응답 데이터")
    success: bool = Field(default=True, description="성공 여부")
    error: Optional[str] = Field(default=None, description="에러 코드")


def create_response(
    data: Optional[DataT] = None,
    message: str = "",
    id: Optional[UUID] = None,
) -> APIResponse[DataT]:
    """성공 응답 생성 팩토리 함수

    Args:
        data: 응답 데이터
        message: 응답 메시지
        id: 대상 리소스 ID

    Returns:
        APIResponse 인스턴스
    """
    return APIResponse(id=id, message=message, data=data, success=True)


def create_error_response(
    message: str,
    error: Optional[str],
    data: Any = None,
) -> APIResponse[Any]:
    """실패 응답 생성 팩토리 함수

    Args:
        message: 사용자용 에러 메시지
        error: 에러 코드 (또는 내부 오류 메시지)
        data: 추가 정보 (선택)

    Returns:
        success=False인 APIResponse 인스턴스
    """
    return APIResponse(message=message, error=error, data=data, success=False)
