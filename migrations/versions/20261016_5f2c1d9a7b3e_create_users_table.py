"""create_users_table

Revision ID: 5f2c1d9a7b3e
Revises:
Create Date: 2026-10-16 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5f2c1d9a7b3e"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """업그레이드 마이그레이션: users 테이블 생성"""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, comment="사용자 ID"),
        sa.Column(
            "first_name", sa.String(length=100), nullable=False, comment="이름"
        ),
        sa.Column(
            "last_name", sa.String(length=100), nullable=False, comment="성"
        ),
        sa.Column(
            "email",
            sa.String(length=256),
            nullable=False,
            comment="이메일 (소문자 저장)",
        ),
        sa.Column(
            "phone",
            sa.String(length=20),
            nullable=False,
            server_default="",
            comment="전화번호",
        ),
        sa.Column(
            "birth_day",
            sa.Date(),
            nullable=False,
            comment="생년월일 (파싱 실패 시 0001-01-01)",
        ),
        sa.Column(
            "occupation",
            sa.String(length=100),
            nullable=False,
            server_default="",
            comment="직업",
        ),
        sa.Column(
            "sex",
            sa.String(length=10),
            nullable=False,
            server_default="",
            comment="성별",
        ),
        sa.Column(
            "profile",
            sa.LargeBinary(),
            nullable=True,
            comment="프로필 바이너리",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="생성 일시",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="수정 일시",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)


def downgrade() -> None:
    """다운그레이드 마이그레이션: users 테이블 삭제"""
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
