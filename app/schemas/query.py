"""Schemas for the query endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request body for POST /query. A missing or empty query is rejected by the handler (400), not by validation."""

    query: str | None = Field(None, description="Free-text search question.")


class SourceOut(BaseModel):
    """One citation backing the summary."""

    uri: str = Field(..., description="Web page the summary is grounded on.")
    title: str = Field(..., description="Title of the web page.")


class QueryResponse(BaseModel):
    """Response for POST /query."""

    summary: str = Field(..., description="Grounded summary, or a fixed notice when none could be generated.")
    sources: list[SourceOut] = Field(default_factory=list, description="Citations, one per URI, in first-seen order.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "summary": "Folic acid is generally recommended.",
                    "sources": [{"uri": "https://a.example", "title": "A"}],
                }
            ]
        }
    }


class ErrorBody(BaseModel):
    code: str = Field(..., description="One of unauthenticated, invalid-argument, upstream-error, internal.")
    message: str
    upstream_status: int | None = Field(None, description="HTTP status returned by the Gemini API (upstream-error only).")


class ErrorResponse(BaseModel):
    """Error body for POST /query."""

    error: ErrorBody


# --- Callable envelope (POST /callgemini) ---

class CallableRequest(BaseModel):
    """Callable-function request: the arguments travel under "data"."""

    data: QueryRequest | None = None


class CallableResponse(BaseModel):
    result: QueryResponse


class CallableErrorBody(BaseModel):
    status: str = Field(..., description="UNAUTHENTICATED, INVALID_ARGUMENT, UNAVAILABLE or INTERNAL.")
    message: str
    details: dict[str, Any] | None = None


class CallableErrorResponse(BaseModel):
    error: CallableErrorBody
