"""API routers for the REST API."""

from panelcut.web.routers.optimize import router as optimize_router
from panelcut.web.routers.validate import router as validate_router

__all__ = [
    "optimize_router",
    "validate_router",
]
