"""
Idiom model: the primary content entity, keyed by its own text
"""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from app.core.db import Base
from app.core.json_columns import JSONList


class Idiom(Base):
    """
    A Chinese idiom with its annotations.
    Category codes are plain nullable columns; an idiom may reference a
    code before the category row exists (bulk imports load in any order).
    """
    __tablename__ = "idioms"

    idiom = Column(String(64), primary_key=True)
    description = Column(Text, nullable=True)
    examples = Column(JSONList, nullable=False, default=list)
    exam_images = Column(JSONList, nullable=True)  # [{"url": ..., "deleteUrl": ...}]
    major_type_code = Column(String(64), nullable=True, index=True)
    minor_type_code = Column(String(64), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
