"""OpenAPI schema customisation and shared response models.

Security schemes come from the token dependencies in `deps`, so only
operations that need a session list them.
"""

from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

API_VERSION = "0.1.0"

OPENAPI_TAGS = [
    {"name": "auth", "description": "Sign up, sign in and sign out"},
    {"name": "profile", "description": "The signed-in user's account"},
    {"name": "notes", "description": "Notes of the signed-in user, with tags, favorites and attached summaries"},
    {"name": "summaries", "description": "AI summaries with a local extractive fallback"},
]


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema is None:
            app.openapi_schema = get_openapi(
                title=app.title,
                version=API_VERSION,
                summary="Personal notes with tags, favorites and AI summaries",
                routes=app.routes,
                tags=OPENAPI_TAGS,
            )
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid email or password", "type": "authentication_error"},
                {"message": "Note not found", "type": "not_found"},
                {"message": "Text is too short to summarize", "type": "too_short"},
            ]
        }
    }
