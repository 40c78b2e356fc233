from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings


def _engine_options() -> dict[str, Any]:
    """DB 종류에 맞는 엔진 옵션 반환 (SQLite는 커넥션 풀 설정 미지원)"""
    options: dict[str, Any] = {"echo": settings.database_echo}
    if not settings.is_sqlite:
        options.update(pool_pre_ping=True, pool_size=10, max_overflow=20)
    return options


# 비동기 엔진 생성
engine = create_async_engine(settings.database_url, **_engine_options())

# 비동기 세션 팩토리
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 모델 베이스 클래스"""

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """데이터베이스 세션 의존성

    요청 단위로 세션을 생성하고, 정상 종료 시 커밋합니다.
    예외(요청 취소 포함) 발생 시 롤백하여 부분 상태가 저장되지 않도록 합니다.

    Note:
        이 정리 단계는 응답 전송 이후에 실행됩니다.
        쓰기 작업은 서비스에서 응답 생성 전에 직접 커밋해야 합니다.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """데이터베이스 초기화 (개발/테스트용)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """데이터베이스 연결 종료"""
    await engine.dispose()
