"""
Category API endpoints - major and minor idiom types
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_category_service
from app.core.exceptions import TypeNotFoundError
from app.schemas.category import (
    MajorTypeCreate,
    MajorTypeRead,
    MinorTypeCreate,
    MinorTypeRead,
    TypeMutationResult,
    TypeUpdate,
)
from app.services.category_service import CategoryService

router = APIRouter(tags=["types"])


@router.get("/idiom_major_types", response_model=List[MajorTypeRead])
async def list_major_types(
    type_code: Optional[str] = None,
    service: CategoryService = Depends(get_category_service),
):
    """
    List major types

    - **type_code**: exact code, or `all` (default) for every type
    """
    rows = await service.list_major_types(type_code)
    return [MajorTypeRead.model_validate(r) for r in rows]


@router.get("/idiom_minor_types", response_model=List[MinorTypeRead])
async def list_minor_types(
    type_code: Optional[str] = None,
    service: CategoryService = Depends(get_category_service),
):
    """
    List minor types

    - **type_code**: exact code, or `all` (default) for every type
    """
    rows = await service.list_minor_types(type_code)
    return [MinorTypeRead.model_validate(r) for r in rows]


@router.get("/major-types/{type_code}", response_model=MajorTypeRead)
async def get_major_type(
    type_code: str,
    service: CategoryService = Depends(get_category_service),
):
    row = await service.get_major_type(type_code)
    if row is None:
        raise TypeNotFoundError("major", type_code)
    return MajorTypeRead.model_validate(row)


@router.get("/major-types/{type_code}/minor-types", response_model=List[MinorTypeRead])
async def list_minor_types_of_major(
    type_code: str,
    service: CategoryService = Depends(get_category_service),
):
    """
    List the minor types filed under one major type
    """
    rows = await service.list_minor_types_by_major(type_code)
    if not rows:
        raise TypeNotFoundError("minor", type_code, message="Minor types not found")
    return [MinorTypeRead.model_validate(r) for r in rows]


@router.post(
    "/major-types",
    response_model=TypeMutationResult,
    status_code=status.HTTP_201_CREATED,
)
async def create_major_type(
    data: MajorTypeCreate,
    service: CategoryService = Depends(get_category_service),
):
    """
    Create a major type

    - **type_code**: unique code (409 if taken)
    - **type_name**: display name
    - **description**: optional
    """
    row = await service.create_major_type(data)
    return TypeMutationResult(
        success=True,
        message="Major type created successfully",
        data=MajorTypeRead.model_validate(row),
    )


@router.put("/major-types/{type_code}", response_model=TypeMutationResult)
async def update_major_type(
    type_code: str,
    data: TypeUpdate,
    service: CategoryService = Depends(get_category_service),
):
    """
    Rename a major type; `description` changes only when sent
    """
    row = await service.update_major_type(type_code, data)
    return TypeMutationResult(
        success=True,
        message="Major type updated successfully",
        data=MajorTypeRead.model_validate(row),
    )


@router.post(
    "/minor-types",
    response_model=TypeMutationResult,
    status_code=status.HTTP_201_CREATED,
)
async def create_minor_type(
    data: MinorTypeCreate,
    service: CategoryService = Depends(get_category_service),
):
    """
    Create a minor type under an existing major type

    Unknown `major_type_code` -> 404, duplicate `type_code` -> 409.
    """
    row = await service.create_minor_type(data)
    return TypeMutationResult(
        success=True,
        message="Minor type created successfully",
        data=MinorTypeRead.model_validate(row),
    )


@router.put("/minor-types/{type_code}", response_model=TypeMutationResult)
async def update_minor_type(
    type_code: str,
    data: TypeUpdate,
    service: CategoryService = Depends(get_category_service),
):
    row = await service.update_minor_type(type_code, data)
    return TypeMutationResult(
        success=True,
        message="Minor type updated successfully",
        data=MinorTypeRead.model_validate(row),
    )
