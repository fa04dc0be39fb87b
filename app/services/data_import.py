"""
Bulk loading of category and idiom exports.

The input is three JSON files (major_types.json, minor_types.json,
idioms.json) in the same shape the API serves. Rows are written one at a
time with upsert semantics so a failed run can simply be repeated.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.category import MajorTypeCreate, MinorTypeCreate
from app.schemas.idiom import IdiomPayload
from app.services.category_service import CategoryService
from app.services.idiom_service import IdiomService

logger = logging.getLogger(__name__)

MAJOR_TYPES_FILE = "major_types.json"
MINOR_TYPES_FILE = "minor_types.json"
IDIOMS_FILE = "idioms.json"


@dataclass
class ImportData:
    major_types: List[Dict[str, Any]]
    minor_types: List[Dict[str, Any]]
    idioms: List[Dict[str, Any]]


@dataclass
class ImportAnalysis:
    total_major_types: int
    total_minor_types: int
    total_idioms: int
    invalid_minor_types: List[Dict[str, Any]] = field(default_factory=list)
    invalid_idioms: List[Dict[str, Any]] = field(default_factory=list)

    def summary(self) -> Dict[str, int]:
        return {
            "total_major_types": self.total_major_types,
            "total_minor_types": self.total_minor_types,
            "total_idioms": self.total_idioms,
            "invalid_minor_types": len(self.invalid_minor_types),
            "invalid_idioms": len(self.invalid_idioms),
        }


@dataclass
class ImportCounts:
    inserted: int = 0
    updated: int = 0


def load_import_data(data_dir: Path) -> ImportData:
    def read(name: str) -> List[Dict[str, Any]]:
        with open(data_dir / name, "r", encoding="utf-8") as f:
            rows = json.load(f)
        if not isinstance(rows, list):
            raise ValueError(f"{name} must contain a JSON array")
        return rows

    return ImportData(
        major_types=read(MAJOR_TYPES_FILE),
        minor_types=read(MINOR_TYPES_FILE),
        idioms=read(IDIOMS_FILE),
    )


def analyse_data(data: ImportData) -> ImportAnalysis:
    """Count rows and find minor types / idioms that reference unknown codes."""
    major_codes = {row.get("type_code") for row in data.major_types}
    minor_codes = {row.get("type_code") for row in data.minor_types}

    invalid_minor_types = [
        row for row in data.minor_types if row.get("major_type_code") not in major_codes
    ]
    invalid_idioms = [
        row for row in data.idioms
        if row.get("major_type_code") not in major_codes
        or row.get("minor_type_code") not in minor_codes
    ]
    return ImportAnalysis(
        total_major_types=len(data.major_types),
        total_minor_types=len(data.minor_types),
        total_idioms=len(data.idioms),
        invalid_minor_types=invalid_minor_types,
        invalid_idioms=invalid_idioms,
    )


async def import_data(db: AsyncSession, data: ImportData) -> Dict[str, ImportCounts]:
    """
    Write majors, then minors, then idioms, one statement per row.

    Stops at the first failing row by letting its exception propagate;
    rows written before it stay committed.
    """
    categories = CategoryService(db)
    idioms = IdiomService(db)
    counts = {"major_types": ImportCounts(), "minor_types": ImportCounts(), "idioms": ImportCounts()}

    def tally(key: str, inserted: bool) -> None:
        if inserted:
            counts[key].inserted += 1
        else:
            counts[key].updated += 1

    logger.info(f"Importing {len(data.major_types)} major types")
    for row in data.major_types:
        tally("major_types", await categories.save_major_type(MajorTypeCreate.model_validate(row)))

    logger.info(f"Importing {len(data.minor_types)} minor types")
    for row in data.minor_types:
        tally("minor_types", await categories.save_minor_type(MinorTypeCreate.model_validate(row)))

    logger.info(f"Importing {len(data.idioms)} idioms")
    for row in data.idioms:
        tally("idioms", await idioms.upsert_idiom(IdiomPayload.model_validate(row)))

    return counts
