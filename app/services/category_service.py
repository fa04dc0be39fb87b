"""
Category Service - major/minor type CRUD
"""
import logging
from typing import List, Optional, Type, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    RequestFieldError,
    StorageError,
    TypeCodeConflictError,
    TypeNotFoundError,
)
from app.models.category import MajorType, MinorType
from app.schemas.category import MajorTypeCreate, MinorTypeCreate, TypeUpdate

logger = logging.getLogger(__name__)

# literal filter value meaning "no filter"
ALL_TYPES = "all"

TypeModel = Union[MajorType, MinorType]


class CategoryService:
    """Creates, updates and lists the two levels of idiom categories"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _list(self, model: Type[TypeModel], type_code: Optional[str]) -> List[TypeModel]:
        stmt = select(model)
        if type_code and type_code != ALL_TYPES:
            stmt = stmt.where(model.type_code == type_code)
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {model.__tablename__}: {e}", exc_info=True)
            raise StorageError(f"list_{model.__tablename__}") from e

    async def _get(self, model: Type[TypeModel], type_code: str) -> Optional[TypeModel]:
        try:
            return await self.db.get(model, type_code)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {model.__tablename__} '{type_code}': {e}", exc_info=True)
            raise StorageError(f"get_{model.__tablename__}") from e

    async def _insert(self, row: TypeModel, kind: str) -> TypeModel:
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # lost a race with a concurrent create of the same code
            await self.db.rollback()
            raise TypeCodeConflictError(row.type_code, kind) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error creating {kind} type '{row.type_code}': {e}", exc_info=True)
            raise StorageError(f"create_{kind}_type") from e
        logger.info(f"{kind.capitalize()} type created: {row.type_code}", extra={"type_code": row.type_code})
        return row

    async def _update(self, model: Type[TypeModel], kind: str, type_code: str, data: TypeUpdate) -> TypeModel:
        if not data.type_name:
            raise RequestFieldError("Type name is required", fields=["type_name"])

        row = await self._get(model, type_code)
        if row is None:
            raise TypeNotFoundError(kind, type_code)

        # description only changes when the caller sent it
        update_fields = data.model_dump(exclude_unset=True)
        update_fields["type_name"] = data.type_name
        for field, value in update_fields.items():
            setattr(row, field, value)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error updating {kind} type '{type_code}': {e}", exc_info=True)
            raise StorageError(f"update_{kind}_type") from e
        logger.info(f"{kind.capitalize()} type updated: {type_code}", extra={"type_code": type_code})
        return row

    # Major types

    async def list_major_types(self, type_code: Optional[str] = None) -> List[MajorType]:
        """
        List major types

        Args:
            type_code: Exact code to filter on; None or "all" returns every row
        """
        return await self._list(MajorType, type_code)

    async def get_major_type(self, type_code: str) -> Optional[MajorType]:
        return await self._get(MajorType, type_code)

    async def create_major_type(self, data: MajorTypeCreate) -> MajorType:
        """
        Create a major type

        Raises:
            RequestFieldError: type_code or type_name missing
            TypeCodeConflictError: type_code already taken
        """
        missing = [f for f in ("type_code", "type_name") if not getattr(data, f)]
        if missing:
            raise RequestFieldError("Type code and name are required", fields=missing)

        if await self._get(MajorType, data.type_code) is not None:
            raise TypeCodeConflictError(data.type_code, "major")

        return await self._insert(
            MajorType(
                type_code=data.type_code,
                type_name=data.type_name,
                description=data.description or None,
            ),
            "major",
        )

    async def update_major_type(self, type_code: str, data: TypeUpdate) -> MajorType:
        return await self._update(MajorType, "major", type_code, data)

    # Minor types

    async def list_minor_types(self, type_code: Optional[str] = None) -> List[MinorType]:
        return await self._list(MinorType, type_code)

    async def get_minor_type(self, type_code: str) -> Optional[MinorType]:
        return await self._get(MinorType, type_code)

    async def list_minor_types_by_major(self, major_type_code: str) -> List[MinorType]:
        stmt = select(MinorType).where(MinorType.major_type_code == major_type_code)
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching minor types of '{major_type_code}': {e}", exc_info=True)
            raise StorageError("list_minor_types_by_major") from e

    async def create_minor_type(self, data: MinorTypeCreate) -> MinorType:
        """
        Create a minor type under an existing major type

        Raises:
            RequestFieldError: type_code, major_type_code or type_name missing
            TypeNotFoundError: major_type_code does not exist
            TypeCodeConflictError: type_code already taken
        """
        missing = [f for f in ("type_code", "major_type_code", "type_name") if not getattr(data, f)]
        if missing:
            raise RequestFieldError("Type code, major type code, and name are required", fields=missing)

        if await self._get(MajorType, data.major_type_code) is None:
            raise TypeNotFoundError("major", data.major_type_code, message="Major type does not exist")

        if await self._get(MinorType, data.type_code) is not None:
            raise TypeCodeConflictError(data.type_code, "minor")

        return await self._insert(
            MinorType(
                type_code=data.type_code,
                major_type_code=data.major_type_code,
                type_name=data.type_name,
                description=data.description or None,
            ),
            "minor",
        )

    async def update_minor_type(self, type_code: str, data: TypeUpdate) -> MinorType:
        return await self._update(MinorType, "minor", type_code, data)

    # Bulk import

    async def save_major_type(self, data: MajorTypeCreate) -> bool:
        """Insert or overwrite a major type; returns True when inserted."""
        if not data.type_code:
            raise RequestFieldError("Type code is required", fields=["type_code"])
        row = await self._get(MajorType, data.type_code)
        if row is None:
            await self.create_major_type(data)
            return True
        await self.update_major_type(
            data.type_code, TypeUpdate(type_name=data.type_name, description=data.description)
        )
        return False

    async def save_minor_type(self, data: MinorTypeCreate) -> bool:
        """Insert or overwrite a minor type; the parent must already exist."""
        if not data.type_code:
            raise RequestFieldError("Type code is required", fields=["type_code"])
        row = await self._get(MinorType, data.type_code)
        if row is None:
            await self.create_minor_type(data)
            return True
        if not data.major_type_code or await self._get(MajorType, data.major_type_code) is None:
            raise TypeNotFoundError("major", data.major_type_code, message="Major type does not exist")
        row.major_type_code = data.major_type_code
        await self.update_minor_type(
            data.type_code, TypeUpdate(type_name=data.type_name, description=data.description)
        )
        return False
