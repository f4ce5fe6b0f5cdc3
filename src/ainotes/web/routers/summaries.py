from fastapi import APIRouter
from pydantic import BaseModel, Field

from ainotes.core.modules.summary.models import SummaryResult
from ainotes.web.deps import AppDep, AuthTokenDep
from ainotes.web.openapi import ErrorResponse

router = APIRouter(tags=["summaries"])


class SummarizeRequest(BaseModel):
    text: str = Field(..., description="Text to summarize")


@router.post(
    "/summaries",
    summary="Summarize text",
    description=(
        "Summarize arbitrary text, e.g. a note that is still being edited. "
        "The provider credential never leaves the server."
    ),
    operation_id="summarizeText",
    responses={
        200: {"description": "Generated summary"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        422: {"model": ErrorResponse, "description": "Text too short to summarize"},
    },
)
async def summarize_text(request: SummarizeRequest, app: AppDep, auth_token: AuthTokenDep) -> SummaryResult:
    return await app.summarize_text(auth_token, request.text)
