"""
Type code generation from category names.

A code is the uppercase pinyin initials of the name with everything
outside A-Z and 0-9 removed; minor codes carry the SUB_ prefix.
"""

import re
from typing import Iterable

from pypinyin import Style, lazy_pinyin

from app.core.exceptions import InvalidTypeNameError, TypeCodeConflictError
from app.services.text_normalization import normalize_text

MINOR_PREFIX = "SUB_"

_INVALID = re.compile(r"[^A-Z0-9]")


def name_to_code(name: str) -> str:
    normalized = normalize_text(name or "").strip()
    if not normalized:
        return ""
    initials = lazy_pinyin(normalized, style=Style.FIRST_LETTER)
    return _INVALID.sub("", "".join(initials).upper())


def generate_type_code(name: str, existing_codes: Iterable[str] = (), minor: bool = False) -> str:
    """
    Derive a type code for a new category.

    Args:
        name: Display name, e.g. 动物
        existing_codes: Codes already in use for the same kind
        minor: Prefix with SUB_

    Raises:
        InvalidTypeNameError: Nothing usable is left after stripping
        TypeCodeConflictError: The code is already taken
    """
    base = name_to_code(name)
    if not base:
        raise InvalidTypeNameError(name)
    code = f"{MINOR_PREFIX}{base}" if minor else base
    if code in set(existing_codes):
        raise TypeCodeConflictError(code, "minor" if minor else "major")
    return code
