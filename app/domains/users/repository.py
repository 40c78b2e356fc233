"""Users 도메인 리포지토리

사용자 CRUD를 위한 데이터 접근 계층입니다.
"""

from typing import Optional, Sequence, cast
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.users.models import User


class UserRepository:
    """사용자 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """ID로 사용자 조회

        Args:
            user_id: 사용자 ID

        Returns:
            사용자 객체 또는 None
        """
        query = select(User).where(User.id == user_id)
        result = await self.session.execute(query)
        return cast(Optional[User], result.scalar_one_or_none())

    async def get_by_email(
        self, email: str, exclude_id: Optional[UUID] = None
    ) -> Optional[User]:
        """이메일로 사용자 조회 (대소문자 무시)

        Args:
            email: 이메일
            exclude_id: 조회에서 제외할 사용자 ID (수정 시 본인 제외용)

        Returns:
            사용자 객체 또는 None
        """
        query = select(User).where(func.lower(User.email) == email.lower())

        if exclude_id is not None:
            query = query.where(User.id != exclude_id)

        result = await self.session.execute(query.limit(1))
        return cast(Optional[User], result.scalars().first())

    async def get_list(self) -> Sequence[User]:
        """전체 사용자 목록 조회 (생성 순)

        Returns:
            사용자 목록
        """
        query = select(User).order_by(User.created_at, User.id)
        result = await self.session.execute(query)
        return cast(Sequence[User], result.scalars().all())

    async def create(self, user: User) -> User:
        """사용자 생성

        Args:
            user: 생성할 사용자 객체

        Returns:
            생성된 사용자 객체
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """사용자 수정

        Args:
            user: 수정할 사용자 객체

        Returns:
            수정된 사용자 객체
        """
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """사용자 삭제 (Hard Delete)

        Args:
            user: 삭제할 사용자 객체
        """
        await self.session.delete(user)
        await self.session.flush()

    async def commit(self) -> None:
        """현재 트랜잭션 커밋

        응답을 만들기 전에 호출하여, 커밋 실패도 작업 실패로 처리되게 합니다.
        """
        await self.session.commit()

    async def rollback(self) -> None:
        """현재 트랜잭션 롤백"""
        await self.session.rollback()
