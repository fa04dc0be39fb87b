#!/usr/bin/env python3
"""
Load major types, minor types and idioms from JSON exports into the
configured database.

Usage:
    python scripts/import_data.py path/to/importdata [--yes]

The directory must contain major_types.json, minor_types.json and
idioms.json. Every row is upserted, so the script can be re-run after a
failure; there is no resume and no cross-row transaction.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from app.core.db import create_tables, db_session, dispose_engine
from app.core.exceptions import IdiomEditorException
from app.core.logging import configure_logging
from app.services.data_import import analyse_data, import_data, load_import_data


def confirm(prompt: str) -> bool:
    answer = input(f"{prompt} (y/n) ")
    return answer.strip().lower() == "y"


async def run(data_dir: Path, assume_yes: bool) -> int:
    print("Analyzing data before import...")
    data = load_import_data(data_dir)
    analysis = analyse_data(data)

    print(f"Found {analysis.total_major_types} major types")
    print(f"Found {analysis.total_minor_types} minor types")
    print(f"Found {analysis.total_idioms} idioms")
    if analysis.invalid_minor_types:
        print("\nWarning: minor types with unknown major_type_code:")
        for row in analysis.invalid_minor_types:
            print(f"  {json.dumps(row, ensure_ascii=False)}")
    if analysis.invalid_idioms:
        print("\nWarning: idioms with unknown type codes:")
        for row in analysis.invalid_idioms:
            print(f"  {row.get('idiom')}: {row.get('major_type_code')} / {row.get('minor_type_code')}")

    print("\nAnalysis Summary:")
    print(json.dumps(analysis.summary(), indent=2))

    if not assume_yes and not confirm("\nDo you want to proceed with the import?"):
        print("Import cancelled")
        return 0

    await create_tables()
    try:
        async with db_session() as session:
            counts = await import_data(session, data)
    finally:
        await dispose_engine()

    for table, count in counts.items():
        print(f"✓ {table}: {count.inserted} inserted, {count.updated} updated")
    print("Data import completed successfully!")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import idiom data exports")
    parser.add_argument(
        "data_dir",
        nargs="?",
        default=str(Path(__file__).parent / "importdata"),
        help="Directory holding major_types.json, minor_types.json and idioms.json",
    )
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Skip the confirmation prompt",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for the import (default: WARNING)",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level.upper(), "text")

    try:
        status = asyncio.run(run(Path(args.data_dir), args.yes))
    except (OSError, ValueError, IdiomEditorException) as e:
        print(f"✗ Error importing data: {e}")
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
