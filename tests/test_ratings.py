"""식당 평점 집계 테스트"""

import pytest

from conftest import ALICE, BOB, CAROL, auth, create_restaurant, create_review
from foodlist.models.restaurants import Restaurant
from foodlist.models.reviews import Review
from foodlist.services.ratings import (
    mean_rating,
    recompute_restaurant_rating,
    resync_derived_data,
)


def test_mean_rating():
    assert mean_rating([]) == 0
    assert mean_rating([5]) == 5
    assert mean_rating([1, 2, 4]) == pytest.approx(7 / 3)


@pytest.mark.asyncio
async def test_recompute_reads_every_review(session):
    restaurant = Restaurant(name="Cantina")
    session.add(restaurant)
    await session.commit()
    session.add_all(
        [
            Review(restaurant_id=restaurant.id, user_id=f"u{i}", rating=r)
            for i, r in enumerate([5, 4, 2])
        ]
    )
    await session.commit()

    await recompute_restaurant_rating(session, restaurant.id)

    await session.refresh(restaurant)
    assert restaurant.rating == pytest.approx(11 / 3)


@pytest.mark.asyncio
async def test_recompute_failure_is_swallowed(session, monkeypatch):
    async def broken_execute(*args, **kwargs):
        from sqlalchemy.exc import OperationalError

        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(session, "execute", broken_execute)
    # 예외가 전파되지 않아야 함
    await recompute_restaurant_rating(session, "missing")


@pytest.mark.asyncio
async def test_rating_tracks_review_mutations(client):
    restaurant = await create_restaurant(client, ALICE, "Pizzaria Napoli")
    rid = restaurant["id"]

    await create_review(client, ALICE, rid, 5)
    bob_review = await create_review(client, BOB, rid, 2)
    await create_review(client, CAROL, rid, 4)

    detail = (await client.get(f"/api/restaurants/{rid}")).json()["restaurant"]
    assert detail["rating"] == pytest.approx(11 / 3)
    assert detail["reviewCount"] == 3

    await client.put(
        f"/api/reviews/{bob_review['id']}", json={"rating": 5}, headers=auth(BOB)
    )
    detail = (await client.get(f"/api/restaurants/{rid}")).json()["restaurant"]
    assert detail["rating"] == pytest.approx(14 / 3)

    await client.delete(f"/api/reviews/{bob_review['id']}", headers=auth(BOB))
    detail = (await client.get(f"/api/restaurants/{rid}")).json()["restaurant"]
    assert detail["rating"] == pytest.approx(4.5)


@pytest.mark.asyncio
async def test_deleting_only_review_resets_rating(client):
    restaurant = await create_restaurant(client, ALICE, "Sushi Bar")
    review = await create_review(client, BOB, restaurant["id"], 3)

    response = await client.delete(f"/api/reviews/{review['id']}", headers=auth(BOB))
    assert response.status_code == 200

    detail = (await client.get(f"/api/restaurants/{restaurant['id']}")).json()
    assert detail["restaurant"]["rating"] == 0
    assert detail["restaurant"]["reviewCount"] == 0


@pytest.mark.asyncio
async def test_manual_recompute_endpoint(client, session):
    restaurant = await create_restaurant(client, ALICE, "Churrascaria")
    session.add(Review(restaurant_id=restaurant["id"], user_id="direct", rating=1))
    await session.commit()

    response = await client.post(
        f"/api/restaurants/{restaurant['id']}/rating", headers=auth(ALICE)
    )
    assert response.status_code == 200
    body = response.json()
    assert body["restaurant"]["rating"] == 1
    assert body["restaurant"]["reviewCount"] == 1


@pytest.mark.asyncio
async def test_resync_heals_stale_ratings(client, session):
    restaurant = await create_restaurant(client, ALICE, "Bistrô")
    await create_review(client, BOB, restaurant["id"], 4)

    stale = await session.get(Restaurant, restaurant["id"])
    stale.rating = 1.0
    await session.commit()

    await resync_derived_data()

    detail = (await client.get(f"/api/restaurants/{restaurant['id']}")).json()
    assert detail["restaurant"]["rating"] == 4
