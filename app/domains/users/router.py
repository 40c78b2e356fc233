"""Users 도메인 라우터

사용자 CRUD API 엔드포인트입니다.
서비스가 반환한 엔벨로프를 그대로 응답하고, 실패 시 상태 코드만 지정합니다.
"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.schemas import APIResponse
from app.domains.users.exceptions import UserErrorCode
from app.domains.users.schemas import (
    UserCreate,
    UserDeleteResult,
    UserListResult,
    UserResult,
    UserUpdate,
)
from app.domains.users.service import UserService

router = APIRouter()

# 에러 코드별 HTTP 상태 코드 (목록에 없으면 엔드포인트 기본값 사용)
ERROR_STATUS_CODES = {
    UserErrorCode.USER_NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    UserErrorCode.DUPLICATE_EMAIL.value: status.HTTP_400_BAD_REQUEST,
    UserErrorCode.INVALID_BIRTHDAY.value: status.HTTP_400_BAD_REQUEST,
}


def get_user_service(session: AsyncSession = Depends(get_db)) -> UserService:
    """UserService 의존성"""
    return UserService(session)


def apply_failure_status(
    response: Response, result: APIResponse[Any], default_status: int
) -> None:
    """실패 응답이면 에러 코드에 맞는 상태 코드 지정"""
    if result.success:
        return
    response.status_code = ERROR_STATUS_CODES.get(
        result.error or "", default_status
    )


@router.post(
    "",
    response_model=UserResult,
    responses={400: {"model": UserResult}},
)
async def create_user(
    user_data: UserCreate,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """사용자 생성"""
    result = await service.create_user(user_data)
    apply_failure_status(response, result, status.HTTP_400_BAD_REQUEST)
    return result


@router.get(
    "/{user_id}",
    response_model=UserResult,
    responses={404: {"model": UserResult}},
)
async def get_user(
    user_id: UUID,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """사용자 상세 조회"""
    result = await service.get_user(user_id)
    apply_failure_status(response, result, status.HTTP_404_NOT_FOUND)
    return result


@router.get("", response_model=UserListResult)
async def get_users(service: UserService = Depends(get_user_service)):
    """사용자 목록 조회 (실패해도 200, success=false)"""
    return await service.get_users()


@router.put(
    "/{user_id}",
    response_model=UserResult,
    responses={
        400: {"model": UserResult},
        404: {"model": UserResult},
    },
)
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """사용자 수정"""
    result = await service.update_user(user_id, user_data)
    apply_failure_status(response, result, status.HTTP_400_BAD_REQUEST)
    return result


@router.delete(
    "/{user_id}",
    response_model=UserDeleteResult,
    responses={404: {"model": UserDeleteResult}},
)
async def delete_user(
    user_id: UUID,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """사용자 삭제"""
    result = await service.delete_user(user_id)
    apply_failure_status(response, result, status.HTTP_404_NOT_FOUND)
    return result
