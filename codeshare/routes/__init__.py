"""API routes package."""

from codeshare.routes.share_routes import router as share_router
from codeshare.routes.container_routes import router as container_router

__all__ = ["share_router", "container_router"]
