"""API routes package for the Wishcard application."""

from wishcard.routes.auth import router as auth_router
from wishcard.routes.wishes import router as wishes_router
from wishcard.routes.admin import router as admin_router

__all__ = ["auth_router", "wishes_router", "admin_router"]
