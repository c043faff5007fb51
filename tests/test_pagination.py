"""목록 페이지네이션 테스트 (오프셋/커서 방식)"""

import math
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from conftest import ALICE, create_restaurant
from foodlist.config import Config
from foodlist.models.restaurants import Restaurant
from foodlist.utils.pagination import decode_cursor, encode_cursor


async def seed_restaurants(client, count: int) -> list[str]:
    """식당을 순서대로 등록하고, 최신순 ID 목록을 반환합니다."""
    ids = []
    for i in range(count):
        restaurant = await create_restaurant(client, ALICE, f"Restaurante {i:02d}")
        ids.append(restaurant["id"])
    return list(reversed(ids))


def test_cursor_encoding_is_reversible():
    created_at = datetime(2026, 10, 17, 12, 30, 15, 123456)
    cursor = encode_cursor(created_at, "abc-123")

    assert "|" not in cursor
    assert decode_cursor(cursor) == (created_at, "abc-123")


@pytest.mark.parametrize("cursor", ["not-a-cursor", "%%%", "bm8tc2VwYXJhdG9y"])
def test_malformed_cursor_is_rejected(cursor):
    with pytest.raises(HTTPException) as exc_info:
        decode_cursor(cursor)
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_offset_pages_cover_everything_once(client):
    expected = await seed_restaurants(client, 5)
    limit = 2
    pages = math.ceil(len(expected) / limit)

    seen = []
    for page in range(1, pages + 1):
        response = await client.get(
            "/api/restaurants", params={"page": page, "limit": limit}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 5
        assert body["page"] == page
        assert body["limit"] == limit
        assert body["hasMore"] is (page < pages)
        assert body["nextPage"] == (page + 1 if page < pages else None)
        seen.extend(item["id"] for item in body["data"])

    assert seen == expected


@pytest.mark.asyncio
async def test_cursor_mode_survives_concurrent_inserts(client):
    expected = await seed_restaurants(client, 5)

    first = (
        await client.get("/api/restaurants", params={"cursor": "", "limit": 2})
    ).json()
    assert [item["id"] for item in first["data"]] == expected[:2]
    assert first["hasMore"] is True
    assert first["nextCursor"]

    # 첫 페이지 조회 이후 새 식당이 추가됨
    await create_restaurant(client, ALICE, "Recém-chegado")

    seen = [item["id"] for item in first["data"]]
    cursor = first["nextCursor"]
    while cursor:
        body = (
            await client.get("/api/restaurants", params={"cursor": cursor, "limit": 2})
        ).json()
        seen.extend(item["id"] for item in body["data"])
        cursor = body["nextCursor"]
        if not body["hasMore"]:
            assert cursor is None

    assert seen == expected
    assert len(seen) == len(set(seen))


@pytest.mark.asyncio
async def test_invalid_cursor_returns_400(client):
    response = await client.get("/api/restaurants", params={"cursor": "not-a-cursor"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid cursor"}


@pytest.mark.asyncio
async def test_empty_result(client):
    response = await client.get("/api/restaurants", params={"search": "nada"})
    body = response.json()

    assert response.status_code == 200
    assert body["data"] == []
    assert body["total"] == 0
    assert body["hasMore"] is False
    assert body["nextPage"] is None


@pytest.mark.asyncio
async def test_limit_is_clamped(client):
    response = await client.get("/api/restaurants", params={"limit": 1000})
    assert response.json()["limit"] == Config.MAX_PAGE_SIZE


@pytest.mark.asyncio
async def test_default_limit_and_cache_header(client):
    response = await client.get("/api/restaurants")
    assert response.json()["limit"] == Config.DEFAULT_PAGE_SIZE
    assert response.headers["cache-control"] == (
        "public, max-age=300, stale-while-revalidate=600"
    )


@pytest.mark.asyncio
async def test_cursor_breaks_timestamp_ties_by_id(client, session):
    created_at = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)
    session.add_all(
        [
            Restaurant(id=f"id-{i}", name=f"Mesmo instante {i}", created_at=created_at)
            for i in range(5)
        ]
    )
    await session.commit()

    seen = []
    params = {"cursor": "", "limit": 2}
    while True:
        body = (await client.get("/api/restaurants", params=params)).json()
        assert len(body["data"]) <= 2
        seen.extend(item["id"] for item in body["data"])
        if not body["hasMore"]:
            break
        params = {"cursor": body["nextCursor"], "limit": 2}

    assert seen == ["id-4", "id-3", "id-2", "id-1", "id-0"]


@pytest.mark.asyncio
async def test_next_page_and_cursor_belong_to_their_mode(client):
    await seed_restaurants(client, 3)

    offset = (await client.get("/api/restaurants", params={"limit": 2})).json()
    cursor = (
        await client.get("/api/restaurants", params={"cursor": "", "limit": 2})
    ).json()

    assert offset["nextPage"] == 2
    assert offset["nextCursor"] is None
    assert cursor["hasMore"] is True
    assert cursor["nextPage"] is None
    assert cursor["nextCursor"]
