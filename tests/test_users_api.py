"""사용자 공개 프로필 API 테스트"""

import pytest

from conftest import (
    ALICE,
    BOB,
    auth,
    create_restaurant,
    create_review,
    get_own_profile,
    make_private,
)

PUBLIC_CACHE = "public, max-age=300, stale-while-revalidate=600"


@pytest.mark.asyncio
async def test_private_profile_listing_hidden_from_anonymous(client):
    await make_private(client, ALICE)
    code = (await get_own_profile(client, ALICE))["userIdCode"]
    for i in range(13):
        await create_restaurant(client, ALICE, f"Privado {i}")

    anonymous = await client.get(f"/api/users/{code}/restaurants", params={"limit": 12})
    other = await client.get(
        f"/api/users/{code}/restaurants", params={"limit": 12}, headers=auth(BOB)
    )
    owner = await client.get(
        f"/api/users/{code}/restaurants", params={"limit": 12}, headers=auth(ALICE)
    )

    assert anonymous.status_code == 404
    assert anonymous.json() == {"error": "Profile is private"}
    assert other.status_code == 404
    assert owner.status_code == 200
    body = owner.json()
    assert len(body["data"]) == 12
    assert body["total"] == 13
    assert body["hasMore"] is True
    assert "cache-control" not in owner.headers


@pytest.mark.asyncio
async def test_unknown_user(client):
    detail = await client.get("/api/users/FL999999")
    listing = await client.get("/api/users/FL999999/reviews")

    assert detail.status_code == 404
    assert detail.json() == {"error": "User not found"}
    assert listing.status_code == 404
    assert listing.json() == {"error": "User not found"}


@pytest.mark.asyncio
async def test_public_profile_detail(client):
    await client.put(
        "/api/profile",
        json={"display_name": "Alice", "phone_number": "+55 11 90000-0000"},
        headers=auth(ALICE),
    )
    restaurant = await create_restaurant(client, BOB, "Do Bob")
    await create_review(client, ALICE, restaurant["id"], 5)
    code = (await get_own_profile(client, ALICE))["userIdCode"]

    anonymous = await client.get(f"/api/users/{code}")
    owner = await client.get(f"/api/users/{ALICE}", headers=auth(ALICE))

    assert anonymous.status_code == 200
    body = anonymous.json()
    assert body["name"] == "Alice"
    assert body["phoneNumber"] is None
    assert body["accessLevel"] == "PUBLIC"
    assert body["isOwnProfile"] is False
    assert body["stats"]["totalReviews"] == 1
    assert [r["rating"] for r in body["recentReviews"]] == [5]
    assert anonymous.headers["cache-control"] == PUBLIC_CACHE

    mine = owner.json()
    assert mine["phoneNumber"] == "+55 11 90000-0000"
    assert mine["accessLevel"] == "OWNER"
    assert mine["isOwnProfile"] is True
    assert "cache-control" not in owner.headers


@pytest.mark.asyncio
async def test_private_profile_detail_is_not_found(client):
    await make_private(client, ALICE)
    response = await client.get(f"/api/users/{ALICE}", headers=auth(BOB))
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


@pytest.mark.asyncio
async def test_access_endpoint(client):
    await make_private(client, ALICE)
    code = (await get_own_profile(client, ALICE))["userIdCode"]

    anonymous = (await client.get(f"/api/users/{code}/access")).json()
    owner = (await client.get(f"/api/users/{code}/access", headers=auth(ALICE))).json()
    missing = (await client.get("/api/users/FL999999/access")).json()

    assert anonymous == {
        "canAccess": False,
        "accessLevel": "NONE",
        "reason": "PRIVATE_PROFILE",
        "targetUserId": None,
    }
    assert owner["canAccess"] is True
    assert owner["accessLevel"] == "OWNER"
    assert owner["targetUserId"] == ALICE
    assert missing["reason"] == "PROFILE_NOT_FOUND"


@pytest.mark.asyncio
async def test_user_reviews_and_lists(client):
    restaurant = await create_restaurant(client, ALICE, "Comum")
    await create_review(client, BOB, restaurant["id"], 3)
    await client.post("/api/lists", json={"name": "Lista do Bob"}, headers=auth(BOB))

    reviews = await client.get(f"/api/users/{BOB}/reviews")
    lists = await client.get(f"/api/users/{BOB}/lists", params={"cursor": ""})

    assert reviews.status_code == 200
    assert [r["rating"] for r in reviews.json()["data"]] == [3]
    assert reviews.headers["cache-control"] == PUBLIC_CACHE
    assert [item["name"] for item in lists.json()["data"]] == ["Lista do Bob"]
    assert lists.json()["nextCursor"] is None


@pytest.mark.asyncio
async def test_search_users(client):
    await client.put(
        "/api/profile",
        json={"display_name": "Alice Santos", "location": "São Paulo"},
        headers=auth(ALICE),
    )
    await make_private(client, BOB, "Bob Santos")

    response = await client.get(
        "/api/users/search", params={"q": "santos"}, headers=auth(ALICE)
    )
    assert response.status_code == 200
    body = response.json()
    assert [u["name"] for u in body["data"]] == ["Alice Santos"]
    assert body["limit"] == 20

    bad_date = await client.get(
        "/api/users/search", params={"joinedAfter": "17/10/2026"}, headers=auth(ALICE)
    )
    assert bad_date.status_code == 400
    assert bad_date.json() == {"error": "Invalid joinedAfter date, expected YYYY-MM-DD"}


@pytest.mark.asyncio
async def test_search_requires_authentication(client):
    response = await client.get("/api/users/search")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_search_treats_percent_literally(client):
    await client.put(
        "/api/profile", json={"display_name": "Alice"}, headers=auth(ALICE)
    )
    await client.put(
        "/api/profile", json={"display_name": "Bob 100%"}, headers=auth(BOB)
    )

    response = await client.get(
        "/api/users/search", params={"q": "%"}, headers=auth(ALICE)
    )
    assert [u["name"] for u in response.json()["data"]] == ["Bob 100%"]


@pytest.mark.asyncio
async def test_me_returns_owner_view(client):
    await make_private(client, ALICE, "Alice")
    await client.put(
        "/api/profile",
        json={"display_name": "Alice", "phone_number": "+55 11 90000-0000"},
        headers=auth(ALICE),
    )
    restaurant = await create_restaurant(client, BOB, "Do Bob")
    await create_review(client, ALICE, restaurant["id"], 4)
    await client.post("/api/lists", json={"name": "Minha lista"}, headers=auth(ALICE))

    response = await client.get("/api/users/me", headers=auth(ALICE))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == ALICE
    assert body["accessLevel"] == "OWNER"
    assert body["isOwnProfile"] is True
    assert body["phoneNumber"] == "+55 11 90000-0000"
    assert [r["rating"] for r in body["recentReviews"]] == [4]
    assert [item["name"] for item in body["recentLists"]] == ["Minha lista"]
    assert "cache-control" not in response.headers


@pytest.mark.asyncio
async def test_me_requires_authentication(client):
    response = await client.get("/api/users/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


@pytest.mark.asyncio
async def test_update_me(client):
    response = await client.put(
        "/api/users/me",
        json={"display_name": "Alice Nova", "location": "Recife"},
        headers=auth(ALICE),
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Alice Nova"
    assert (await get_own_profile(client, ALICE))["location"] == "Recife"

    invalid = await client.put(
        "/api/users/me", json={"display_name": ""}, headers=auth(ALICE)
    )
    assert invalid.status_code == 400
    assert invalid.json() == {"error": "Display name is required"}
