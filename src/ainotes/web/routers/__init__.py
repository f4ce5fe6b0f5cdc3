from ainotes.web.routers.auth import router as auth_router
from ainotes.web.routers.notes import router as notes_router
from ainotes.web.routers.profile import router as profile_router
from ainotes.web.routers.summaries import router as summaries_router

__all__ = [
    "auth_router",
    "notes_router",
    "profile_router",
    "summaries_router",
]
