"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh database (StaticPool keeps the single in-memory
connection alive for the engine's lifetime), and uploads go to tmp_path.
Concurrency tests use `session_factory`, a file-backed database with one
connection per session.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.content import Comment, Tweet, Video
from app.models.user import User
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite://"
DEFAULT_PASSWORD = "password123!"


# ---------------------------------------------------------------------------
# 환경: 로컬 스토리지를 임시 디렉토리로
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def local_storage(tmp_path, monkeypatch):
    """업로드 파일을 tmp_path에 저장하도록 설정합니다 (S3 비활성)."""
    monkeypatch.setattr(settings, "LOCAL_UPLOADS_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "AWS_ACCESS_KEY_ID", "")
    monkeypatch.setattr(settings, "AWS_S3_BUCKET", "")
    return tmp_path


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 인메모리 DB를 만들고 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """파일 기반 SQLite DB의 세션 팩토리 — 연결이 여러 개 필요한 동시성 테스트용.

    Session factory over a file-backed SQLite database, so that each session
    gets its own connection and overlapping transactions are real.
    """
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'concurrency.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(eng, class_=AsyncSession, expire_on_commit=False)
    await eng.dispose()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_user(db: AsyncSession, username: str, password: str = DEFAULT_PASSWORD) -> User:
    """테스트 사용자를 직접 생성합니다."""
    user = User(
        username=username,
        email=f"{username}@test.com",
        full_name=username.capitalize(),
        password_hash=hash_password(password),
        avatar=f"http://test/uploads/avatars/{username}.png",
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def create_video(
    db: AsyncSession,
    owner: User,
    title: str = "Test Video",
    description: str = "A test video",
    views: int = 0,
    duration: float = 60.0,
    is_published: bool = True,
) -> Video:
    """테스트 동영상을 직접 생성합니다."""
    video = Video(
        owner_id=owner.id,
        video_file=f"http://test/uploads/videos/{title}.mp4",
        thumbnail=f"http://test/uploads/thumbnails/{title}.png",
        title=title,
        description=description,
        duration=duration,
        views=views,
        is_published=is_published,
    )
    db.add(video)
    await db.flush()
    await db.refresh(video)
    return video


async def create_tweet(db: AsyncSession, owner: User, content: str = "hello") -> Tweet:
    """테스트 트윗을 직접 생성합니다."""
    tweet = Tweet(owner_id=owner.id, content=content)
    db.add(tweet)
    await db.flush()
    await db.refresh(tweet)
    return tweet


async def create_comment(db: AsyncSession, owner: User, video: Video, content: str = "nice") -> Comment:
    comment = Comment(owner_id=owner.id, video_id=video.id, content=content)
    db.add(comment)
    await db.flush()
    await db.refresh(comment)
    return comment


@pytest_asyncio.fixture
async def alice(db: AsyncSession) -> User:
    return await create_user(db, "alice")


@pytest_asyncio.fixture
async def bob(db: AsyncSession) -> User:
    return await create_user(db, "bob")


@pytest_asyncio.fixture
async def carol(db: AsyncSession) -> User:
    return await create_user(db, "carol")


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id)})


def auth_header(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user)}"}
