"""리뷰 API 테스트"""

import pytest

from conftest import ALICE, BOB, UNKNOWN, auth, create_restaurant, create_review


@pytest.mark.asyncio
async def test_create_and_fetch_review(client):
    restaurant = await create_restaurant(client, ALICE, "Cantina da Nonna")

    response = await client.post(
        "/api/reviews",
        json={
            "restaurant_id": restaurant["id"],
            "rating": 4,
            "comment": "Ótima massa",
            "amount_spent": 85.5,
        },
        headers=auth(BOB),
    )
    assert response.status_code == 201
    review = response.json()["review"]
    assert review["rating"] == 4
    assert review["amountSpent"] == 85.5
    assert review["user"] == {"id": BOB, "name": "bob"}

    fetched = await client.get(f"/api/reviews/{review['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["review"]["comment"] == "Ótima massa"

    listed = await client.get(
        "/api/reviews", params={"restaurant_id": restaurant["id"]}
    )
    assert [r["id"] for r in listed.json()["reviews"]] == [review["id"]]


@pytest.mark.asyncio
async def test_list_requires_restaurant_id(client):
    response = await client.get("/api/reviews")
    assert response.status_code == 400
    assert response.json() == {"error": "restaurant_id parameter is required"}


@pytest.mark.asyncio
async def test_second_review_for_same_restaurant_conflicts(client):
    restaurant = await create_restaurant(client, ALICE, "Taqueria")
    await create_review(client, BOB, restaurant["id"], 5)

    response = await client.post(
        "/api/reviews",
        json={"restaurant_id": restaurant["id"], "rating": 3},
        headers=auth(BOB),
    )
    assert response.status_code == 409
    assert response.json() == {"error": "You have already reviewed this restaurant"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"rating": 0}, "Rating must be between 1 and 5"),
        ({"rating": 6}, "Rating must be between 1 and 5"),
        ({}, "Rating is required"),
        ({"rating": 3, "amount_spent": -10}, "Amount spent must be a positive number"),
        ({"rating": 3, "comment": "x" * 1001}, "Comment must be at most 1000 characters"),
    ],
)
async def test_create_validation(client, payload, message):
    restaurant = await create_restaurant(client, ALICE, "Validação")
    response = await client.post(
        "/api/reviews",
        json={"restaurant_id": restaurant["id"], **payload},
        headers=auth(BOB),
    )
    assert response.status_code == 400
    assert response.json() == {"error": message}


@pytest.mark.asyncio
async def test_create_for_unknown_restaurant(client):
    response = await client.post(
        "/api/reviews",
        json={"restaurant_id": "does-not-exist", "rating": 3},
        headers=auth(BOB),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_authentication_required(client):
    restaurant = await create_restaurant(client, ALICE, "Auth")
    body = {"restaurant_id": restaurant["id"], "rating": 3}

    anonymous = await client.post("/api/reviews", json=body)
    unknown = await client.post("/api/reviews", json=body, headers=auth(UNKNOWN))

    assert anonymous.status_code == 401
    assert unknown.status_code == 401
    assert anonymous.json() == {"error": "Authentication required"}


@pytest.mark.asyncio
async def test_put_out_of_range_rating_writes_nothing(client):
    restaurant = await create_restaurant(client, ALICE, "Padaria")
    review = await create_review(client, BOB, restaurant["id"], 4)

    response = await client.put(
        f"/api/reviews/{review['id']}",
        json={"rating": 6, "comment": "changed"},
        headers=auth(BOB),
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Rating must be between 1 and 5"}

    unchanged = (await client.get(f"/api/reviews/{review['id']}")).json()["review"]
    assert unchanged["rating"] == 4
    assert unchanged["comment"] is None


@pytest.mark.asyncio
async def test_put_updates_own_review(client):
    restaurant = await create_restaurant(client, ALICE, "Boteco")
    review = await create_review(client, BOB, restaurant["id"], 2)

    response = await client.put(
        f"/api/reviews/{review['id']}",
        json={"rating": 5, "comment": "Melhorou muito"},
        headers=auth(BOB),
    )
    assert response.status_code == 200
    updated = response.json()["review"]
    assert updated["rating"] == 5
    assert updated["comment"] == "Melhorou muito"


@pytest.mark.asyncio
async def test_other_users_cannot_modify_review(client):
    restaurant = await create_restaurant(client, ALICE, "Empório")
    review = await create_review(client, BOB, restaurant["id"], 3)

    put = await client.put(
        f"/api/reviews/{review['id']}", json={"rating": 1}, headers=auth(ALICE)
    )
    delete = await client.delete(f"/api/reviews/{review['id']}", headers=auth(ALICE))

    assert put.status_code == 404
    assert put.json() == {"error": "Review not found or access denied"}
    assert delete.status_code == 404


@pytest.mark.asyncio
async def test_delete_review(client):
    restaurant = await create_restaurant(client, ALICE, "Lanchonete")
    review = await create_review(client, BOB, restaurant["id"], 3)

    response = await client.delete(f"/api/reviews/{review['id']}", headers=auth(BOB))
    assert response.status_code == 200
    assert response.json() == {"message": "Review deleted successfully"}

    missing = await client.get(f"/api/reviews/{review['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Review not found"}


@pytest.mark.asyncio
async def test_malformed_body_is_bad_request(client):
    restaurant = await create_restaurant(client, ALICE, "Malformed")
    response = await client.post(
        "/api/reviews",
        json={"restaurant_id": restaurant["id"], "rating": "five"},
        headers=auth(BOB),
    )
    assert response.status_code == 400
    assert "error" in response.json()
