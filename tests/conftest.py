"""테스트 설정"""

import os

# 앱 임포트 전에 테스트용 설정 지정 (설정은 임포트 시점에 로드됨)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_MIGRATE", "false")

from typing import AsyncGenerator, Generator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402


def _is_docker_available() -> bool:
    """로컬 환경에서 Docker 접근 가능 여부 확인"""
    if os.getenv("FORCE_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return True
    if os.getenv("SKIP_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return False

    try:
        from docker import from_env

        client = from_env()
        client.ping()
        return True
    except Exception:
        return False


@pytest.fixture
def user_payload():
    """사용자 생성/수정 요청 본문 팩토리"""

    def _factory(**overrides):
        payload = {
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane.doe@example.com",
            "phone": "+1-555-0100",
            "birthDay": "15/06/1990",
            "occupation": "Engineer",
            "sex": "F",
            "profile": None,
        }
        payload.update(overrides)
        return payload

    return _factory


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """인메모리 SQLite 엔진 (테스트마다 새 스키마)"""
    # StaticPool: 모든 세션이 같은 인메모리 DB 연결을 공유
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    sqlite_engine: AsyncEngine,
) -> AsyncGenerator[AsyncSession, None]:
    """테스트 데이터베이스 세션"""
    async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
        bind=sqlite_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession):
    """비동기 테스트 클라이언트 (테스트 DB 사용)"""

    # 운영 get_db와 같이 요청이 끝나면 커밋, 실패 시 롤백
    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as client:
        yield client

    # 정리
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def postgres_container() -> Generator:
    """PostgreSQL 테스트 컨테이너"""
    if not _is_docker_available():
        pytest.skip("Docker is not available; skipping container-based tests.")

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_url(postgres_container) -> str:
    """테스트 PostgreSQL URL (asyncpg)"""
    return str(
        postgres_container.get_connection_url().replace(
            "postgresql+psycopg2://", "postgresql+asyncpg://"
        )
    )


@pytest_asyncio.fixture
async def pg_session(postgres_url: str) -> AsyncGenerator[AsyncSession, None]:
    """PostgreSQL 세션 (테스트마다 깨끗한 스키마)"""
    engine = create_async_engine(postgres_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest_asyncio.fixture
async def pg_client(pg_session: AsyncSession):
    """PostgreSQL을 사용하는 비동기 테스트 클라이언트"""

    async def override_get_db():
        try:
            yield pg_session
            await pg_session.commit()
        except Exception:
            await pg_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
