# API endpoints and routers

from .idiom_endpoints import router as idiom_router
from .type_endpoints import router as type_router
from .health_endpoints import router as health_router

__all__ = [
    "idiom_router",
    "type_router",
    "health_router",
]
