"""
Unit tests for major/minor type operations
"""
import pytest
from sqlalchemy import func, select

from app.core.exceptions import RequestFieldError, TypeCodeConflictError, TypeNotFoundError
from app.models.category import MinorType
from app.schemas.category import MajorTypeCreate, MinorTypeCreate, TypeUpdate
from app.services.category_service import CategoryService


@pytest.fixture
def service(db_session):
    return CategoryService(db_session)


async def seed_major(service, code="DW", name="动物"):
    return await service.create_major_type(MajorTypeCreate(type_code=code, type_name=name))


@pytest.mark.asyncio
async def test_create_and_list_major_types(service):
    await seed_major(service)
    await seed_major(service, "ZW", "植物")

    assert {t.type_code for t in await service.list_major_types()} == {"DW", "ZW"}
    assert {t.type_code for t in await service.list_major_types("all")} == {"DW", "ZW"}
    assert [t.type_code for t in await service.list_major_types("ZW")] == ["ZW"]
    assert await service.list_major_types("NONE") == []


@pytest.mark.asyncio
async def test_create_major_type_requires_code_and_name(service):
    with pytest.raises(RequestFieldError) as exc_info:
        await service.create_major_type(MajorTypeCreate(type_name="动物"))
    assert exc_info.value.details["fields"] == ["type_code"]


@pytest.mark.asyncio
async def test_duplicate_major_type_does_not_overwrite(service):
    await seed_major(service)

    with pytest.raises(TypeCodeConflictError):
        await service.create_major_type(MajorTypeCreate(type_code="DW", type_name="重复"))

    assert (await service.get_major_type("DW")).type_name == "动物"


@pytest.mark.asyncio
async def test_minor_type_with_unknown_parent_is_rejected(service, db_session):
    """Test no row is written when the parent major is missing"""
    with pytest.raises(TypeNotFoundError) as exc_info:
        await service.create_minor_type(
            MinorTypeCreate(type_code="SUB_X", major_type_code="NOPE", type_name="x")
        )

    assert exc_info.value.status_code == 404
    result = await db_session.execute(select(func.count()).select_from(MinorType))
    assert result.scalar() == 0


@pytest.mark.asyncio
async def test_duplicate_minor_type(service):
    await seed_major(service)
    data = MinorTypeCreate(type_code="SUB_MS", major_type_code="DW", type_name="猛兽")
    await service.create_minor_type(data)

    with pytest.raises(TypeCodeConflictError):
        await service.create_minor_type(data)


@pytest.mark.asyncio
async def test_list_minor_types_by_major(service):
    await seed_major(service)
    await seed_major(service, "ZW", "植物")
    await service.create_minor_type(MinorTypeCreate(type_code="SUB_MS", major_type_code="DW", type_name="猛兽"))
    await service.create_minor_type(MinorTypeCreate(type_code="SUB_HC", major_type_code="ZW", type_name="花草"))

    rows = await service.list_minor_types_by_major("DW")

    assert [r.type_code for r in rows] == ["SUB_MS"]


@pytest.mark.asyncio
async def test_update_keeps_description_unless_sent(service):
    await service.create_major_type(MajorTypeCreate(type_code="DW", type_name="动物", description="desc"))

    row = await service.update_major_type("DW", TypeUpdate(type_name="动物类"))
    assert row.type_name == "动物类"
    assert row.description == "desc"

    row = await service.update_major_type("DW", TypeUpdate(type_name="动物类", description="新描述"))
    assert row.description == "新描述"


@pytest.mark.asyncio
async def test_update_unknown_type(service):
    with pytest.raises(TypeNotFoundError):
        await service.update_minor_type("SUB_NONE", TypeUpdate(type_name="x"))


@pytest.mark.asyncio
async def test_update_requires_name(service):
    await seed_major(service)
    with pytest.raises(RequestFieldError):
        await service.update_major_type("DW", TypeUpdate(description="only description"))


@pytest.mark.asyncio
async def test_save_major_type_is_rerunnable(service):
    data = MajorTypeCreate(type_code="DW", type_name="动物")

    assert await service.save_major_type(data) is True
    assert await service.save_major_type(MajorTypeCreate(type_code="DW", type_name="动物们")) is False
    assert (await service.get_major_type("DW")).type_name == "动物们"


@pytest.mark.asyncio
async def test_save_minor_type_can_move_to_another_major(service):
    await seed_major(service)
    await seed_major(service, "ZW", "植物")
    await service.save_minor_type(MinorTypeCreate(type_code="SUB_X", major_type_code="DW", type_name="x"))

    inserted = await service.save_minor_type(
        MinorTypeCreate(type_code="SUB_X", major_type_code="ZW", type_name="x2")
    )

    assert inserted is False
    row = await service.get_minor_type("SUB_X")
    assert row.major_type_code == "ZW"
    assert row.type_name == "x2"
