"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.handlers import CALLABLE_PATH, get_caller_identity, get_query_handler, handle_callable, handle_query
from app.core.auth import CallerIdentity
from app.schemas.query import (
    CallableErrorResponse,
    CallableRequest,
    CallableResponse,
    ErrorResponse,
    QueryRequest,
    QueryResponse,
)
from app.services.search_service import QueryHandler

router = APIRouter()

_ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in (400, 401, 500, 502)}
_CALLABLE_ERROR_RESPONSES = {status: {"model": CallableErrorResponse} for status in (400, 401, 500, 502)}


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Grounded summary backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Query ---

@router.post(
    "/query",
    response_model=QueryResponse,
    responses=_ERROR_RESPONSES,
    tags=["query"],
    summary="Summarize web search results for a question",
    description="Requires a bearer token. 400 on missing query, 401 without a verified caller, "
                "502 when Gemini returns an error status, 500 on any other failure.",
)
def post_query(
    body: QueryRequest,
    identity: CallerIdentity | None = Depends(get_caller_identity),
    handler: QueryHandler = Depends(get_query_handler),
) -> QueryResponse:
    return handle_query(handler, identity, body.query)


@router.post(
    CALLABLE_PATH,
    response_model=CallableResponse,
    responses=_CALLABLE_ERROR_RESPONSES,
    tags=["query"],
    summary="Callable-function form of /query",
    description='Body {"data": {"query": ...}}; answers {"result": {summary, sources}} or {"error": {status, message}}.',
)
def post_callgemini(
    body: CallableRequest,
    identity: CallerIdentity | None = Depends(get_caller_identity),
    handler: QueryHandler = Depends(get_query_handler),
) -> JSONResponse:
    query = body.data.query if body.data is not None else None
    return handle_callable(handler, identity, query)
