"""
Two-level idiom taxonomy: major types and the minor types under them
"""
from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base


class MajorType(Base):
    __tablename__ = "idiom_major_types"

    type_code = Column(String(64), primary_key=True)
    type_name = Column(String(128), nullable=False)
    description = Column(Text, nullable=True)

    minor_types = relationship("MinorType", back_populates="major_type")


class MinorType(Base):
    __tablename__ = "idiom_minor_types"

    type_code = Column(String(64), primary_key=True)
    major_type_code = Column(
        String(64), ForeignKey("idiom_major_types.type_code"), nullable=False, index=True
    )
    type_name = Column(String(128), nullable=False)
    description = Column(Text, nullable=True)

    major_type = relationship("MajorType", back_populates="minor_types")
