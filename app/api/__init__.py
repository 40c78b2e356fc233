"""API 라우터"""

from fastapi import APIRouter

from app.domains.users.router import router as users_router

api_router = APIRouter()

# 도메인 라우터 등록
api_router.include_router(users_router, prefix="/users", tags=["Users"])
