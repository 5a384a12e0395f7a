"""
Pytest configuration and fixtures for testing.
"""
import os

# Configure the process before the application modules are imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-jwt-secret-key-for-testing-purposes-only"
os.environ.pop("GOOGLE_CLIENT_ID", None)
os.environ.pop("GOOGLE_CLIENT_SECRET", None)
os.environ.pop("GOOGLE_REDIRECT_URI", None)

from typing import AsyncGenerator, Callable, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from diary_api.core.config import Settings, get_settings
from diary_api.core.database import Base, get_db
from diary_api.core.passwords import hash_password
from diary_api.core.security import TokenService
from diary_api.main import create_app
from diary_api.models import Contact, Diary, User

TEST_JWT_SECRET = "test-jwt-secret-key-for-testing-purposes-only"
TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def test_settings() -> Settings:
    """Explicit settings object; tests never mutate os.environ for config."""
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        JWT_SECRET=TEST_JWT_SECRET,
        GOOGLE_CLIENT_ID="test-google-client-id",
        GOOGLE_CLIENT_SECRET="test-google-client-secret",
        GOOGLE_REDIRECT_URI="http://localhost:3000/api/auth/google/callback",
        ENVIRONMENT="test",
    )


@pytest.fixture
def token_service(test_settings) -> TokenService:
    return TokenService(test_settings)


@pytest_asyncio.fixture
async def db_engine():
    """In-memory database shared across connections for one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new database session for each test."""
    TestingSessionLocal = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def app(test_settings, db_session):
    """Application wired to the test settings and database session."""
    application = create_app(test_settings)

    async def override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_settings] = lambda: test_settings

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(db_session) -> Callable:
    """Factory inserting a user row; password users get a real bcrypt hash."""

    async def _make_user(
        email: str = "test@example.com",
        nickname: str = "Test User",
        password: Optional[str] = TEST_PASSWORD,
        name: Optional[str] = None,
    ) -> User:
        user = User(
            email=email,
            nickname=nickname,
            name=name,
            password_hash=hash_password(password) if password else None,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_diary(db_session) -> Callable:
    async def _make_diary(user: User, content: str = "Today was a good day.") -> Diary:
        diary = Diary(user_id=user.user_id, content=content)
        db_session.add(diary)
        await db_session.commit()
        await db_session.refresh(diary)
        return diary

    return _make_diary


@pytest.fixture
def make_contact(db_session) -> Callable:
    async def _make_contact(user: User, email: Optional[str] = None, phone: Optional[str] = None) -> Contact:
        contact = Contact(user_id=user.user_id, email=email, phone=phone)
        db_session.add(contact)
        await db_session.commit()
        await db_session.refresh(contact)
        return contact

    return _make_contact


@pytest.fixture
def login_as(client, token_service) -> Callable:
    """Put a valid session cookie for the user on the test client."""

    def _login_as(user: User) -> str:
        token = token_service.sign_session_token(user.user_id, user.email)
        client.cookies.set("auth-token", token)
        return token

    return _login_as


def _cookie_cleared(response, name: str = "auth-token") -> bool:
    """True if the response expires the named cookie with path=/."""
    for header in response.headers.get_list("set-cookie"):
        lowered = header.lower()
        if header.startswith(f"{name}=") and "max-age=0" in lowered and "path=/" in lowered:
            return True
    return False


@pytest.fixture
def cookie_cleared() -> Callable:
    return _cookie_cleared
