from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from ainotes.core.modules.note.models import Note, NoteFormData, NoteUpdate
from ainotes.core.modules.summary.models import SummaryResult
from ainotes.web.deps import AppDep, AuthTokenDep
from ainotes.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["notes"])


class AttachSummaryRequest(BaseModel):
    """Request to save a summary onto a note."""

    summary: str = Field(..., min_length=1, description="Summary text, usually from `generateNoteSummary`")


@router.get(
    "/notes",
    summary="List notes",
    description="""Get all notes of the current user in creation order.

With `q`, only notes whose title, content or any tag contains `q` are returned
(case-insensitive). An empty `q` matches every note.""",
    operation_id="listNotes",
    responses={
        200: {"description": "List of notes"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_notes(
    app: AppDep,
    auth_token: AuthTokenDep,
    q: Annotated[str | None, Query(description="Search text matched against title, content and tags")] = None,
) -> list[Note]:
    return await app.get_notes(auth_token, q)


@router.get(
    "/notes/favorites",
    summary="List favorite notes",
    description="Get the favorited notes of the current user.",
    operation_id="listFavoriteNotes",
    responses={
        200: {"description": "List of favorite notes"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_favorite_notes(app: AppDep, auth_token: AuthTokenDep) -> list[Note]:
    return await app.get_favorite_notes(auth_token)


@router.get(
    "/notes/recent",
    summary="List recent notes",
    description="Get the most recently updated notes of the current user, newest first.",
    operation_id="listRecentNotes",
    responses={
        200: {"description": "List of notes"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_recent_notes(
    app: AppDep,
    auth_token: AuthTokenDep,
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum items to return")] = 6,
) -> list[Note]:
    return await app.get_recent_notes(auth_token, limit)


@router.get(
    "/notes/tags",
    summary="List tags",
    description="Get the distinct tags used across the current user's notes.",
    operation_id="listTags",
    responses={
        200: {"description": "List of tags"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_tags(app: AppDep, auth_token: AuthTokenDep) -> list[str]:
    return await app.get_tags(auth_token)


@router.post(
    "/notes",
    summary="Create note",
    description="Create a new note owned by the current user. Title and content must not be blank.",
    operation_id="createNote",
    status_code=201,
    responses={
        201: {"description": "Note created successfully"},
        400: {"model": ErrorResponse, "description": "Blank title or content, or invalid tags"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_note(request: NoteFormData, app: AppDep, auth_token: AuthTokenDep) -> Note:
    return await app.create_note(auth_token, request)


@router.get(
    "/notes/{note_id}",
    summary="Get note",
    description="Get a single note of the current user.",
    operation_id="getNote",
    responses={
        200: {"description": "Note details"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def get_note(note_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> Note:
    return await app.get_note(auth_token, note_id)


@router.patch(
    "/notes/{note_id}",
    summary="Update note",
    description="Partially update a note. Only provided fields change; `updated_at` is always refreshed.",
    operation_id="updateNote",
    responses={
        200: {"description": "Note updated successfully"},
        400: {"model": ErrorResponse, "description": "Blank title or content, or invalid tags"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def update_note(note_id: UUID, request: NoteUpdate, app: AppDep, auth_token: AuthTokenDep) -> Note:
    return await app.update_note(auth_token, note_id, request)


@router.delete(
    "/notes/{note_id}",
    summary="Delete note",
    description="Delete a note permanently. Deleting a note that does not exist succeeds as well.",
    operation_id="deleteNote",
    status_code=204,
    responses={
        204: {"description": "Note deleted (or did not exist)"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def delete_note(note_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_note(auth_token, note_id)


@router.post(
    "/notes/{note_id}/favorite",
    summary="Toggle favorite",
    description="Flip the favorite flag of a note.",
    operation_id="toggleFavorite",
    responses={
        200: {"description": "Updated note"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def toggle_favorite(note_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> Note:
    return await app.toggle_favorite(auth_token, note_id)


@router.post(
    "/notes/{note_id}/summary",
    summary="Generate note summary",
    description=(
        "Summarize the note's content. The summary is returned, not saved; "
        "use `attachNoteSummary` to keep it. Falls back to a local extractive summary "
        "when the AI provider is unavailable."
    ),
    operation_id="generateNoteSummary",
    responses={
        200: {"description": "Generated summary"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
        422: {"model": ErrorResponse, "description": "Content too short to summarize"},
    },
)
async def generate_note_summary(note_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> SummaryResult:
    return await app.summarize_note(auth_token, note_id)


@router.put(
    "/notes/{note_id}/summary",
    summary="Attach note summary",
    description="Save a summary onto the note.",
    operation_id="attachNoteSummary",
    responses={
        200: {"description": "Updated note"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def attach_note_summary(
    note_id: UUID, request: AttachSummaryRequest, app: AppDep, auth_token: AuthTokenDep
) -> Note:
    return await app.attach_summary(auth_token, note_id, request.summary)
