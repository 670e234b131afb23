"""API Routes for CodeCollab."""

from codecollab.infrastructure.api.routes.auth_router import router as auth_router
from codecollab.infrastructure.api.routes.snippets_router import router as snippets_router
from codecollab.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "auth_router",
    "snippets_router",
    "users_router",
]
