"""테스트 공용 fixture.

설정 모듈이 import 시점에 환경 변수를 읽으므로, 앱을 import하기 전에 임시 DB와 로그 경로를 지정합니다.
외부 사용자 서비스는 httpx.MockTransport로 대체합니다.
"""

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="foodlist-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "test.log")
os.environ["SCHEDULER_ENABLED"] = "False"
os.environ["DEBUG"] = "False"

import httpx  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from foodlist.database import AsyncSessionLocal, Base, async_engine  # noqa: E402
from foodlist.utils.http import get_async_client  # noqa: E402
from main import app  # noqa: E402

ALICE = "0b6f3c1e-6a0e-4c57-9d3b-1f1f2a7c0a01"
BOB = "5d2e8b44-2f6b-4d0f-8a47-8c9e51e0b202"
CAROL = "9a7c4d10-3b1e-4e8a-b6f2-0d5a6c3e9c03"
UNKNOWN = "ffffffff-ffff-ffff-ffff-ffffffffffff"

USERS = {
    ALICE: {"id": ALICE, "email": "alice@example.com", "name": "Alice"},
    BOB: {"id": BOB, "email": "bob@example.com", "name": "Bob"},
    CAROL: {"id": CAROL, "email": "carol@example.com", "name": "Carol"},
}


def user_service_handler(request: httpx.Request) -> httpx.Response:
    """GET /users/{id} 만 지원하는 가짜 사용자 서비스"""
    user_id = request.url.path.rsplit("/", 1)[-1]
    if user_id in USERS:
        return httpx.Response(200, json=USERS[user_id])
    return httpx.Response(404, json={"detail": "not found"})


async def override_async_client():
    async with AsyncClient(transport=httpx.MockTransport(user_service_handler)) as c:
        yield c


def auth(user_id: str) -> dict:
    """X-User-ID 인증 헤더"""
    return {"X-User-ID": user_id}


@pytest_asyncio.fixture
async def setup_db():
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await async_engine.dispose()


@pytest_asyncio.fixture
async def session(setup_db):
    async with AsyncSessionLocal() as db:
        yield db


@pytest_asyncio.fixture
async def client(setup_db):
    app.dependency_overrides[get_async_client] = override_async_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def create_restaurant(client: AsyncClient, user_id: str, name: str, **fields):
    """API로 식당을 등록하고 응답의 restaurant 객체를 반환합니다."""
    response = await client.post(
        "/api/restaurants", json={"name": name, **fields}, headers=auth(user_id)
    )
    assert response.status_code == 201, response.text
    return response.json()["restaurant"]


async def create_review(client: AsyncClient, user_id: str, restaurant_id: str, rating: int):
    """API로 리뷰를 작성하고 응답의 review 객체를 반환합니다."""
    response = await client.post(
        "/api/reviews",
        json={"restaurant_id": restaurant_id, "rating": rating},
        headers=auth(user_id),
    )
    assert response.status_code == 201, response.text
    return response.json()["review"]


async def get_own_profile(client: AsyncClient, user_id: str) -> dict:
    """내 프로필을 조회합니다 (없으면 자동 생성됨)."""
    response = await client.get("/api/profile", headers=auth(user_id))
    assert response.status_code == 200, response.text
    return response.json()


async def make_private(client: AsyncClient, user_id: str, name: str = "Private") -> dict:
    """프로필을 비공개로 전환합니다."""
    response = await client.put(
        "/api/profile",
        json={"display_name": name, "public_profile": False},
        headers=auth(user_id),
    )
    assert response.status_code == 200, response.text
    return response.json()
