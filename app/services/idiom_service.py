"""
Idiom Service - reads and upserts idioms
"""
import logging
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import RequestFieldError, StorageError
from app.core.json_columns import JSONColumnError
from app.models.idiom import Idiom
from app.schemas.idiom import IdiomPayload

logger = logging.getLogger(__name__)


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Category codes are stored as NULL when absent or blank."""
    if value is None or not value.strip():
        return None
    return value


class IdiomService:
    """Idiom reads and whole-record upserts keyed by the idiom text"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_idioms(self) -> List[Idiom]:
        """
        List every idiom ordered by major type code

        Returns:
            Idioms with examples/exam_images already decoded
        """
        stmt = select(Idiom).order_by(Idiom.major_type_code, Idiom.idiom)
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except (SQLAlchemyError, JSONColumnError) as e:
            logger.error(f"Error fetching idioms: {e}", exc_info=True)
            raise StorageError("list_idioms") from e

    async def get_idiom(self, name: str) -> Optional[Idiom]:
        """
        Exact-match lookup on the idiom text

        Args:
            name: Decoded idiom text

        Returns:
            Idiom or None
        """
        stmt = select(Idiom).where(Idiom.idiom == name)
        try:
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except (SQLAlchemyError, JSONColumnError) as e:
            logger.error(f"Error fetching idiom '{name}': {e}", exc_info=True)
            raise StorageError("get_idiom") from e

    async def idiom_exists(self, name: str) -> bool:
        stmt = select(func.count()).select_from(Idiom).where(Idiom.idiom == name)
        result = await self.db.execute(stmt)
        return (result.scalar() or 0) > 0

    async def upsert_idiom(self, payload: IdiomPayload) -> bool:
        """
        Insert the idiom if its name is unknown, otherwise replace every
        editable field of the existing row.

        Args:
            payload: Full idiom record

        Returns:
            True if a new row was inserted, False if an existing one was updated
        """
        if not payload.idiom:
            raise RequestFieldError("Idiom is required", fields=["idiom"])

        images = None
        if payload.exam_images is not None:
            images = [img.model_dump(by_alias=True, exclude_none=True) for img in payload.exam_images]

        values = {
            "description": payload.description,
            "examples": list(payload.examples),
            "exam_images": images,
            "major_type_code": blank_to_none(payload.major_type_code),
            "minor_type_code": blank_to_none(payload.minor_type_code),
        }

        try:
            if not await self.idiom_exists(payload.idiom):
                self.db.add(Idiom(idiom=payload.idiom, **values))
                created = True
            else:
                await self.db.execute(
                    update(Idiom).where(Idiom.idiom == payload.idiom).values(**values)
                )
                created = False
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error updating idiom '{payload.idiom}': {e}", exc_info=True)
            raise StorageError("upsert_idiom") from e

        logger.info(
            f"Idiom {'inserted' if created else 'updated'}: {payload.idiom}",
            extra={"idiom": payload.idiom, "created": created},
        )
        return created
