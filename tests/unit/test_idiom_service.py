"""
Unit tests for idiom reads and upserts
"""
import pytest
from sqlalchemy import func, select

from app.core.exceptions import RequestFieldError
from app.models.idiom import Idiom
from app.schemas.idiom import IdiomPayload, ImageInfo
from app.services.idiom_service import IdiomService, blank_to_none


async def count_idioms(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(Idiom))
    return result.scalar()


def test_blank_to_none():
    assert blank_to_none(None) is None
    assert blank_to_none("  ") is None
    assert blank_to_none("A") == "A"


@pytest.mark.asyncio
async def test_upsert_inserts_unknown_idiom(db_session):
    """Test the first upsert of a name creates exactly one row"""
    service = IdiomService(db_session)

    created = await service.upsert_idiom(
        IdiomPayload(idiom="一马当先", description="d", examples=["e1"], major_type_code="", minor_type_code="")
    )

    assert created is True
    assert await count_idioms(db_session) == 1
    db_session.expire_all()
    row = await service.get_idiom("一马当先")
    assert row.major_type_code is None
    assert row.minor_type_code is None
    assert row.examples == ["e1"]
    assert row.exam_images == []


@pytest.mark.asyncio
async def test_upsert_updates_existing_idiom(db_session):
    """Test a second upsert replaces fields without duplicating"""
    service = IdiomService(db_session)
    await service.upsert_idiom(IdiomPayload(idiom="守株待兔", description="old", examples=["a"]))

    created = await service.upsert_idiom(
        IdiomPayload(
            idiom="守株待兔",
            description="new",
            examples=["b", "c"],
            exam_images=[ImageInfo(url="https://i.ibb.co/x.png", delete_url="https://ibb.co/del")],
            major_type_code="GS",
            minor_type_code="SUB_YY",
        )
    )

    assert created is False
    assert await count_idioms(db_session) == 1
    db_session.expire_all()
    row = await service.get_idiom("守株待兔")
    assert row.description == "new"
    assert row.examples == ["b", "c"]
    assert row.exam_images == [{"url": "https://i.ibb.co/x.png", "deleteUrl": "https://ibb.co/del"}]
    assert row.major_type_code == "GS"


@pytest.mark.asyncio
async def test_upsert_requires_name(db_session):
    service = IdiomService(db_session)
    with pytest.raises(RequestFieldError):
        await service.upsert_idiom(IdiomPayload(description="no name"))
    assert await count_idioms(db_session) == 0


@pytest.mark.asyncio
async def test_list_orders_by_major_type(db_session):
    service = IdiomService(db_session)
    await service.upsert_idiom(IdiomPayload(idiom="乙", major_type_code="B", minor_type_code="SUB_B"))
    await service.upsert_idiom(IdiomPayload(idiom="甲", major_type_code="A", minor_type_code="SUB_A"))

    idioms = await service.list_idioms()

    assert [i.major_type_code for i in idioms] == ["A", "B"]


@pytest.mark.asyncio
async def test_get_unknown_idiom_returns_none(db_session):
    assert await IdiomService(db_session).get_idiom("不存在") is None
