"""분류 API 및 기본값 동기화 테스트"""

import pytest
from sqlalchemy import func, select

from conftest import ALICE, auth
from foodlist.config import Config
from foodlist.models.restaurants import CuisineType, DietaryOption, Feature
from foodlist.utils.lifespan import sync_taxonomies


@pytest.mark.asyncio
async def test_sync_inserts_defaults_once(session):
    defaults = Config.load_taxonomies()

    await sync_taxonomies()
    await sync_taxonomies()

    for key, model in (
        ("cuisine_types", CuisineType),
        ("dietary_options", DietaryOption),
        ("features", Feature),
    ):
        total = (await session.execute(select(func.count(model.id)))).scalar_one()
        assert total == len(defaults[key])


@pytest.mark.asyncio
async def test_list_is_sorted_by_name(client, session):
    session.add_all(
        [CuisineType(name=name) for name in ("Tailandesa", "Árabe", "Baiana")]
    )
    await session.commit()

    response = await client.get("/api/cuisine-types")
    body = response.json()

    assert response.status_code == 200
    assert body["total"] == 3
    assert [item["name"] for item in body["data"]] == sorted(
        ["Tailandesa", "Árabe", "Baiana"]
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, label",
    [
        ("/api/cuisine-types", "Cuisine type"),
        ("/api/dietary-options", "Dietary option"),
        ("/api/features", "Feature"),
    ],
)
async def test_create_and_duplicate(client, path, label):
    created = await client.post(
        path, json={"name": "Novidade", "icon": "✨"}, headers=auth(ALICE)
    )
    assert created.status_code == 201
    assert created.json()["name"] == "Novidade"

    duplicate = await client.post(path, json={"name": "Novidade"}, headers=auth(ALICE))
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": f"{label} already exists"}


@pytest.mark.asyncio
async def test_create_requires_name_and_auth(client):
    empty = await client.post("/api/features", json={"name": " "}, headers=auth(ALICE))
    anonymous = await client.post("/api/features", json={"name": "Wi-Fi"})

    assert empty.status_code == 400
    assert empty.json() == {"error": "Name is required"}
    assert anonymous.status_code == 401
