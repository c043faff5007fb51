"""식당 리스트 API 테스트"""

import pytest

from conftest import ALICE, BOB, auth, create_restaurant


async def create_list(client, user_id, name, restaurant_ids=(), **fields):
    response = await client.post(
        "/api/lists",
        json={"name": name, "restaurant_ids": list(restaurant_ids), **fields},
        headers=auth(user_id),
    )
    assert response.status_code == 201, response.text
    return response.json()["list"]


@pytest.mark.asyncio
async def test_create_list_with_restaurants(client):
    first = await create_restaurant(client, ALICE, "Primeiro")
    second = await create_restaurant(client, ALICE, "Segundo")

    created = await create_list(
        client, BOB, " Para o fim de semana ", [first["id"], second["id"]],
        description="Lugares para testar",
    )

    assert created["name"] == "Para o fim de semana"
    assert created["creatorId"] == BOB
    assert created["restaurantCount"] == 2
    assert {r["id"] for r in created["restaurants"]} == {first["id"], second["id"]}

    fetched = (await client.get(f"/api/lists/{created['id']}")).json()["list"]
    assert fetched["restaurantCount"] == 2
    assert fetched["description"] == "Lugares para testar"


@pytest.mark.asyncio
async def test_create_validation(client):
    missing_name = await client.post(
        "/api/lists", json={"name": ""}, headers=auth(BOB)
    )
    unknown_restaurant = await client.post(
        "/api/lists",
        json={"name": "Lista", "restaurant_ids": ["ghost"]},
        headers=auth(BOB),
    )

    assert missing_name.status_code == 400
    assert missing_name.json() == {"error": "Name is required"}
    assert unknown_restaurant.status_code == 400
    assert unknown_restaurant.json() == {"error": "Unknown restaurants: ghost"}


@pytest.mark.asyncio
async def test_update_replaces_restaurants(client):
    first = await create_restaurant(client, ALICE, "Antigo")
    second = await create_restaurant(client, ALICE, "Novo")
    created = await create_list(client, BOB, "Rotativa", [first["id"]])

    response = await client.put(
        f"/api/lists/{created['id']}",
        json={"restaurant_ids": [second["id"]]},
        headers=auth(BOB),
    )
    assert response.status_code == 200
    updated = response.json()["list"]
    assert [r["id"] for r in updated["restaurants"]] == [second["id"]]
    assert updated["restaurantCount"] == 1
    assert updated["name"] == "Rotativa"


@pytest.mark.asyncio
async def test_only_creator_can_modify(client):
    created = await create_list(client, BOB, "Do Bob")

    put = await client.put(
        f"/api/lists/{created['id']}", json={"name": "Da Alice"}, headers=auth(ALICE)
    )
    delete = await client.delete(f"/api/lists/{created['id']}", headers=auth(ALICE))

    assert put.status_code == 404
    assert put.json() == {"error": "List not found or access denied"}
    assert delete.status_code == 404


@pytest.mark.asyncio
async def test_delete_list(client):
    created = await create_list(client, BOB, "Temporária")

    response = await client.delete(f"/api/lists/{created['id']}", headers=auth(BOB))
    assert response.status_code == 200
    assert response.json() == {"message": "List deleted successfully"}

    missing = await client.get(f"/api/lists/{created['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "List not found"}


@pytest.mark.asyncio
async def test_listing_search(client):
    await create_list(client, BOB, "Melhores pizzas")
    await create_list(client, ALICE, "Cafés tranquilos", description="Para trabalhar")

    response = await client.get("/api/lists", params={"search": "trabalhar"})
    body = response.json()

    assert response.status_code == 200
    assert [item["name"] for item in body["data"]] == ["Cafés tranquilos"]
    assert body["total"] == 1
    assert "cache-control" in response.headers


@pytest.mark.asyncio
async def test_listing_search_escapes_wildcards(client):
    await create_list(client, BOB, "Top_10")
    await create_list(client, BOB, "Top 5")

    body = (await client.get("/api/lists", params={"search": "Top_"})).json()
    assert [item["name"] for item in body["data"]] == ["Top_10"]
