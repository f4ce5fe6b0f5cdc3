from enum import StrEnum

from pydantic import BaseModel, Field


class SummarySource(StrEnum):
    """Where a summary came from."""

    AI = "ai"  # Primary path: the configured provider
    LOCAL = "local"  # Extractive fallback


class SummaryState(StrEnum):
    """Lifecycle of a single summarize call."""

    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SummaryResult(BaseModel):
    """Generated summary, not yet attached to any note."""

    summary: str = Field(..., description="Summary text")
    source: SummarySource = Field(..., description="`ai` for provider output, `local` for the extractive fallback")
    model: str | None = Field(None, description="Provider model that produced the summary")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "summary": "The note lists the steps for the release and who owns each one.",
                    "source": "ai",
                    "model": "gpt-4.1-mini",
                }
            ]
        }
    }
