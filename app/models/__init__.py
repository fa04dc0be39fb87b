"""
ORM models for the idiom editor backend.

Importing this package registers every table on the declarative base,
which create_tables() and the alembic revisions rely on.
"""

from .idiom import Idiom
from .category import MajorType, MinorType

__all__ = [
    "Idiom",
    "MajorType",
    "MinorType",
]
