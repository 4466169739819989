"""
Shared fixtures: an in-memory SQLite database, a session for service tests
and an HTTP client for API tests.
"""
import httpx
import pytest
from jose import jwt
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.db.engine import Database
from app.main import create_app

ALICE = "user-alice"
BOB = "user-bob"


def make_token(owner_id: str) -> str:
    return jwt.encode({settings.jwt_user_claim: owner_id}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_headers(owner_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(owner_id)}"}


@pytest.fixture
async def database():
    db = Database(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session_factory() as s:
        yield s


@pytest.fixture
async def client(database):
    app = create_app(database)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def alice():
    return auth_headers(ALICE)


@pytest.fixture
def bob():
    return auth_headers(BOB)
