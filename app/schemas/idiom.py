"""
Idiom schemas for API requests/responses
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from app.schemas.base import OperationResult


class ImageInfo(BaseModel):
    """An uploaded example image and the link that removes it from the host"""
    model_config = ConfigDict(populate_by_name=True)

    url: str
    delete_url: Optional[str] = Field(default=None, alias="deleteUrl")


def _coerce_images(value):
    # early rows stored bare URL strings
    if value is None:
        return value
    return [{"url": item} if isinstance(item, str) else item for item in value]


class IdiomPayload(BaseModel):
    """
    Body of POST /update-idiom. Every call replaces the whole record.
    `idiom` is optional here so a missing name is reported as 400 by the service.
    """
    model_config = ConfigDict(populate_by_name=True)

    idiom: Optional[str] = None
    description: Optional[str] = ""
    examples: List[str] = Field(default_factory=list)
    exam_images: Optional[List[ImageInfo]] = Field(default=None, alias="examImages")
    major_type_code: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("major_type_code", "majorTypeCode")
    )
    minor_type_code: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("minor_type_code", "minorTypeCode")
    )

    @field_validator("examples", mode="before")
    @classmethod
    def none_examples_to_empty(cls, v):
        return [] if v is None else v

    @field_validator("exam_images", mode="before")
    @classmethod
    def coerce_images(cls, v):
        return _coerce_images(v)


class IdiomRead(BaseModel):
    """An idiom as served by GET /idioms and GET /idiom"""
    model_config = ConfigDict(populate_by_name=True)

    idiom: str
    description: Optional[str] = None
    examples: List[str] = Field(default_factory=list)
    exam_images: List[ImageInfo] = Field(default_factory=list, alias="examImages")
    major_type_code: Optional[str] = None
    minor_type_code: Optional[str] = None

    @field_validator("examples", "exam_images", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return [] if v is None else v

    @field_validator("exam_images", mode="before")
    @classmethod
    def coerce_images(cls, v):
        return _coerce_images(v)

    @classmethod
    def from_model(cls, row) -> "IdiomRead":
        return cls(
            idiom=row.idiom,
            description=row.description,
            examples=row.examples,
            exam_images=row.exam_images,
            major_type_code=row.major_type_code,
            minor_type_code=row.minor_type_code,
        )

    def to_payload(self) -> IdiomPayload:
        return IdiomPayload(
            idiom=self.idiom,
            description=self.description,
            examples=list(self.examples),
            exam_images=[img.model_copy() for img in self.exam_images],
            major_type_code=self.major_type_code,
            minor_type_code=self.minor_type_code,
        )


class UpsertResult(OperationResult):
    created: bool = False
