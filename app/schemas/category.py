"""
Major/minor type schemas for API requests/responses
"""
from pydantic import BaseModel, ConfigDict
from typing import Any, Optional


class MajorTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type_code: str
    type_name: str
    description: Optional[str] = None


class MinorTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type_code: str
    major_type_code: str
    type_name: str
    description: Optional[str] = None


# Required fields are Optional so that a missing value reaches the service
# and comes back as 400 rather than a schema error.
class MajorTypeCreate(BaseModel):
    type_code: Optional[str] = None
    type_name: Optional[str] = None
    description: Optional[str] = None


class MinorTypeCreate(BaseModel):
    type_code: Optional[str] = None
    major_type_code: Optional[str] = None
    type_name: Optional[str] = None
    description: Optional[str] = None


class TypeUpdate(BaseModel):
    """Body of PUT /major-types/{code} and PUT /minor-types/{code}"""
    type_name: Optional[str] = None
    description: Optional[str] = None


class TypeMutationResult(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: Optional[Any] = None
