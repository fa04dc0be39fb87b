"""
Idiom API endpoints - listing, lookup, upsert and example image upload
"""
from typing import List, Optional
from urllib.parse import unquote

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.core.dependencies import get_idiom_service, get_image_upload_service
from app.core.exceptions import IdiomNotFoundError, RequestFieldError
from app.schemas.idiom import IdiomPayload, IdiomRead, ImageInfo, UpsertResult
from app.services.idiom_service import IdiomService
from app.services.image_upload_service import ImageUploadService

router = APIRouter(tags=["idioms"])


@router.get("/idioms", response_model=List[IdiomRead])
async def list_idioms(service: IdiomService = Depends(get_idiom_service)):
    """
    List all idioms ordered by major type code

    `examples` and `examImages` are decoded lists; an idiom without
    images has `examImages: []`.
    """
    idioms = await service.list_idioms()
    return [IdiomRead.from_model(i) for i in idioms]


@router.get("/idiom", response_model=IdiomRead)
async def get_idiom(
    idiom: Optional[str] = None,
    service: IdiomService = Depends(get_idiom_service),
):
    """
    Get one idiom by its exact text

    - **idiom**: idiom text; percent-encoded values are accepted
    """
    if not idiom:
        raise RequestFieldError("Idiom parameter is required", fields=["idiom"])

    row = await service.get_idiom(idiom)
    if row is None and "%" in idiom:
        # clients that encode before building the query string send %XX twice
        row = await service.get_idiom(unquote(idiom))
    if row is None:
        raise IdiomNotFoundError(idiom)
    return IdiomRead.from_model(row)


@router.post("/update-idiom", response_model=UpsertResult)
async def update_idiom(
    payload: IdiomPayload,
    service: IdiomService = Depends(get_idiom_service),
):
    """
    Create or replace an idiom

    Inserts when the name is unknown, otherwise overwrites description,
    examples, images and both category codes. Blank codes are stored as null.
    """
    created = await service.upsert_idiom(payload)
    return UpsertResult(
        success=True,
        message="成语已插入" if created else "成语已更新",
        created=created,
    )


@router.post("/upload-image", response_model=ImageInfo)
async def upload_image(
    image: UploadFile = File(...),
    idiom: Optional[str] = Form(None),
    service: ImageUploadService = Depends(get_image_upload_service),
):
    """
    Upload an example image and return its hosted URL
    """
    content = await image.read()
    return await service.upload(content, filename=image.filename or "image", idiom=idiom)
