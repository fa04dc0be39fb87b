"""
Integration tests for major/minor type endpoints
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import func, select


async def create_major(client: AsyncClient, code="DW", name="动物", description=None):
    return await client.post(
        "/major-types", json={"type_code": code, "type_name": name, "description": description}
    )


@pytest.mark.asyncio
async def test_create_major_type(async_client: AsyncClient):
    r = await create_major(async_client)

    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["data"]["type_code"] == "DW"


@pytest.mark.asyncio
async def test_duplicate_major_type_is_409(async_client: AsyncClient):
    await create_major(async_client)

    r = await create_major(async_client, name="别的名字")

    assert r.status_code == 409
    assert r.json()["message"] == "Type code already exists"
    r = await async_client.get("/major-types/DW")
    assert r.json()["type_name"] == "动物"


@pytest.mark.asyncio
async def test_major_type_missing_fields_is_400(async_client: AsyncClient):
    r = await async_client.post("/major-types", json={"type_code": "DW"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_types_filter(async_client: AsyncClient):
    await create_major(async_client)
    await create_major(async_client, "ZW", "植物")

    r = await async_client.get("/idiom_major_types", params={"type_code": "all"})
    assert {t["type_code"] for t in r.json()} == {"DW", "ZW"}

    r = await async_client.get("/idiom_major_types")
    assert len(r.json()) == 2

    r = await async_client.get("/idiom_major_types", params={"type_code": "ZW"})
    assert [t["type_name"] for t in r.json()] == ["植物"]


@pytest.mark.asyncio
async def test_minor_type_with_unknown_parent_is_404(async_client: AsyncClient, db_session):
    from app.models.category import MinorType

    r = await async_client.post(
        "/minor-types",
        json={"type_code": "SUB_X", "major_type_code": "NOPE", "type_name": "x"},
    )

    assert r.status_code == 404
    assert r.json()["message"] == "Major type does not exist"
    count = (await db_session.execute(select(func.count()).select_from(MinorType))).scalar()
    assert count == 0


@pytest.mark.asyncio
async def test_minor_types_of_major(async_client: AsyncClient):
    await create_major(async_client)
    r = await async_client.post(
        "/minor-types",
        json={"type_code": "SUB_MS", "major_type_code": "DW", "type_name": "猛兽"},
    )
    assert r.status_code == 201

    r = await async_client.get("/major-types/DW/minor-types")
    assert [t["type_code"] for t in r.json()] == ["SUB_MS"]

    r = await async_client.get("/idiom_minor_types", params={"type_code": "SUB_MS"})
    assert r.json()[0]["major_type_code"] == "DW"


@pytest.mark.asyncio
async def test_major_without_minor_types_is_404(async_client: AsyncClient):
    await create_major(async_client)
    r = await async_client.get("/major-types/DW/minor-types")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_type_name_and_description(async_client: AsyncClient):
    await create_major(async_client, description="原描述")

    r = await async_client.put("/major-types/DW", json={"type_name": "动物类"})
    assert r.status_code == 200

    r = await async_client.get("/major-types/DW")
    assert r.json() == {"type_code": "DW", "type_name": "动物类", "description": "原描述"}

    await async_client.put("/major-types/DW", json={"type_name": "动物类", "description": "新描述"})
    r = await async_client.get("/major-types/DW")
    assert r.json()["description"] == "新描述"


@pytest.mark.asyncio
async def test_update_unknown_minor_type_is_404(async_client: AsyncClient):
    r = await async_client.put("/minor-types/SUB_NONE", json={"type_name": "x"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_unknown_major_type_is_404(async_client: AsyncClient):
    r = await async_client.get("/major-types/NONE")
    assert r.status_code == 404
    assert r.json()["error_code"] == "TYPE_NOT_FOUND"
