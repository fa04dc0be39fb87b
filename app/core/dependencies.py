"""
Dependency providers for FastAPI.
Services are built per request around the request's database session.
"""

from fastapi import Depends
from functools import lru_cache
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.services import CategoryService, IdiomService, ImageUploadService


def get_idiom_service(db: AsyncSession = Depends(get_db)) -> IdiomService:
    return IdiomService(db)


def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


@lru_cache()
def get_image_upload_service() -> ImageUploadService:
    """Single upload service per process; it holds no per-request state."""
    return ImageUploadService()
