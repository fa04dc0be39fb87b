# Business logic services

from .idiom_service import IdiomService, blank_to_none
from .category_service import CategoryService, ALL_TYPES
from .image_upload_service import ImageUploadService
from .text_normalization import normalize_text
from .data_import import ImportAnalysis, ImportData, analyse_data, import_data, load_import_data

__all__ = [
    "IdiomService",
    "blank_to_none",
    "CategoryService",
    "ALL_TYPES",
    "ImageUploadService",
    "normalize_text",
    "ImportAnalysis",
    "ImportData",
    "analyse_data",
    "import_data",
    "load_import_data",
]
