"""API routers."""

from app.routers.auth import router as auth_router
from app.routers.seed import router as seed_router
from app.routers.users import router as users_router

__all__ = ["auth_router", "users_router", "seed_router"]
