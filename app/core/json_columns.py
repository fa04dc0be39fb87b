"""
JSON-encoded list columns.

`examples` and `exam_images` live in TEXT columns (MySQL and D1 have no
shared JSON type). encode_json_list/decode_json_list are the only place
that text is produced or parsed; JSONList wires them into SQLAlchemy so
models and services only ever see Python lists.
"""

import json
from typing import Any, List, Optional

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


class JSONColumnError(ValueError):
    """Stored text is not a JSON array."""


def encode_json_list(value: Optional[List[Any]]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise JSONColumnError(f"Expected a list, got {type(value).__name__}")
    return json.dumps(list(value), ensure_ascii=False)


def decode_json_list(text: Optional[str]) -> List[Any]:
    """Decode a stored column; NULL and empty text read back as []."""
    if text is None or text == "":
        return []
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONColumnError(f"Stored value is not valid JSON: {e}") from e
    if value is None:
        return []
    if not isinstance(value, list):
        raise JSONColumnError(f"Stored JSON is a {type(value).__name__}, not a list")
    return value


class JSONList(TypeDecorator):
    """TEXT column holding a JSON array."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return encode_json_list(value)

    def process_result_value(self, value, dialect):
        return decode_json_list(value)
