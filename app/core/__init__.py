"""
Core infrastructure for the idiom editor backend.
Provides database sessions, exceptions, error handling, logging and column codecs.
"""

from .exceptions import (
    ErrorCode,
    IdiomEditorException,
    RequestFieldError,
    InvalidTypeNameError,
    IdiomNotFoundError,
    TypeNotFoundError,
    TypeCodeConflictError,
    StorageError,
    ImageUploadError,
)
from .json_columns import JSONList, JSONColumnError, encode_json_list, decode_json_list

__all__ = [
    "ErrorCode",
    "IdiomEditorException",
    "RequestFieldError",
    "InvalidTypeNameError",
    "IdiomNotFoundError",
    "TypeNotFoundError",
    "TypeCodeConflictError",
    "StorageError",
    "ImageUploadError",
    "JSONList",
    "JSONColumnError",
    "encode_json_list",
    "decode_json_list",
]
