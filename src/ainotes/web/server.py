from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ainotes.app import App
from ainotes.config import Config
from ainotes.errors import UserError
from ainotes.web.error_handlers import general_exception_handler, user_error_handler
from ainotes.web.openapi import set_custom_openapi
from ainotes.web.routers import auth_router, notes_router, profile_router, summaries_router

API_PREFIX = "/api/v1"
API_ROUTERS: tuple[APIRouter, ...] = (auth_router, profile_router, notes_router, summaries_router)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Build the HTTP application around an `App` whose lifespan follows the server's."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="AI Notes API", lifespan=lifespan)

    if config.cors_origins:
        # Credentials are needed for the auth cookie
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
            allow_headers=["Authorization", "Content-Type"],
        )

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    for router in API_ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    set_custom_openapi(app)
    return app
