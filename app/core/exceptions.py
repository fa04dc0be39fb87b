"""
Custom exceptions for the idiom editor backend.
Every exception carries the HTTP status it maps to so the handlers in
error_handlers.py can render it without a lookup table.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Request errors
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_TYPE_NAME = "INVALID_TYPE_NAME"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Lookup errors
    IDIOM_NOT_FOUND = "IDIOM_NOT_FOUND"
    TYPE_NOT_FOUND = "TYPE_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"

    # Conflicts
    TYPE_CODE_CONFLICT = "TYPE_CODE_CONFLICT"

    # Upstream / storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
    PROCESSING_TIMEOUT = "PROCESSING_TIMEOUT"

    # Generic errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class IdiomEditorException(Exception):
    """Base exception for the idiom editor backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class RequestFieldError(IdiomEditorException):
    """Raised when a required request field is missing or empty."""

    def __init__(self, message: str, fields: Optional[list] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.MISSING_REQUIRED_FIELD,
            details={"fields": fields} if fields else None,
            status_code=400
        )


class InvalidTypeNameError(IdiomEditorException):
    """Raised when a category name cannot produce a type code."""

    def __init__(self, type_name: str):
        super().__init__(
            message=f"Cannot derive a type code from '{type_name}'",
            error_code=ErrorCode.INVALID_TYPE_NAME,
            details={"type_name": type_name},
            status_code=400
        )


class IdiomNotFoundError(IdiomEditorException):
    """Raised when an idiom name has no row."""

    def __init__(self, idiom: str):
        super().__init__(
            message="Idiom not found",
            error_code=ErrorCode.IDIOM_NOT_FOUND,
            details={"idiom": idiom},
            status_code=404
        )


class TypeNotFoundError(IdiomEditorException):
    """Raised when a major or minor type code has no row."""

    def __init__(self, kind: str, type_code: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"{kind.capitalize()} type not found",
            error_code=ErrorCode.TYPE_NOT_FOUND,
            details={"kind": kind, "type_code": type_code},
            status_code=404
        )


class TypeCodeConflictError(IdiomEditorException):
    """Raised when a type code is already taken."""

    def __init__(self, type_code: str, kind: str = "major"):
        super().__init__(
            message="Type code already exists",
            error_code=ErrorCode.TYPE_CODE_CONFLICT,
            details={"kind": kind, "type_code": type_code},
            status_code=409
        )


class StorageError(IdiomEditorException):
    """Raised when the relational store fails; the cause is logged, not returned."""

    def __init__(self, operation: str):
        super().__init__(
            message="Internal server error",
            error_code=ErrorCode.STORAGE_ERROR,
            details={"operation": operation},
            status_code=500
        )


class ImageUploadError(IdiomEditorException):
    """Raised when the image host rejects or fails an upload."""

    def __init__(self, message: str = "Image upload failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.IMAGE_UPLOAD_FAILED,
            details=details,
            status_code=502
        )
