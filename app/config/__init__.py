"""
Configuration package for the Idiom Editor Backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    SecuritySettings,
    ImgbbSettings,
    ClientSettings,
    settings,
    build_settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "SecuritySettings",
    "ImgbbSettings",
    "ClientSettings",
    "settings",
    "build_settings",
    "get_settings",
    "reload_settings",
]
