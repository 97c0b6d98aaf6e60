"""
API handlers: resolve the caller identity, call the search service, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging
from functools import lru_cache

from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.auth import CallerIdentity, IdentityVerifier, StaticTokenVerifier, bearer_token
from app.core.errors import CallableError, InvalidArgumentError, UnauthenticatedError
from app.core.secrets import EnvSecretProvider
from app.schemas.query import (
    CallableErrorBody,
    CallableErrorResponse,
    CallableResponse,
    ErrorBody,
    ErrorResponse,
    QueryResponse,
    SourceOut,
)
from app.services.search_service import QueryHandler, SearchResult

logger = logging.getLogger(__name__)

CALLABLE_PATH = "/callgemini"


# --- Dependencies (overridden in tests via app.dependency_overrides) ---

@lru_cache
def get_identity_verifier() -> IdentityVerifier:
    return StaticTokenVerifier.from_config()


@lru_cache
def get_query_handler() -> QueryHandler:
    return QueryHandler(EnvSecretProvider())


def get_caller_identity(
    authorization: str | None = Header(None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> CallerIdentity | None:
    """Verified caller, or None. Rejection is left to the query handler."""
    token = bearer_token(authorization)
    return verifier.verify(token) if token else None


# --- Marshalling ---

def to_query_response(result: SearchResult) -> QueryResponse:
    return QueryResponse(
        summary=result.summary,
        sources=[SourceOut(uri=s.uri, title=s.title) for s in result.sources],
    )


def error_response(exc: CallableError) -> JSONResponse:
    """{"error": {code, message[, upstream_status]}} as returned by POST /query."""
    body = ErrorResponse(error=ErrorBody(code=exc.code, message=exc.message, **(exc.details() or {})))
    return JSONResponse(status_code=exc.http_status, content=body.model_dump(exclude_none=True))


def callable_error_response(exc: CallableError) -> JSONResponse:
    """{"error": {status, message[, details]}} as returned by POST /callgemini."""
    body = CallableErrorResponse(
        error=CallableErrorBody(status=exc.status, message=exc.message, details=exc.details())
    )
    return JSONResponse(status_code=exc.http_status, content=body.model_dump(exclude_none=True))


def handle_query(handler: QueryHandler, identity: CallerIdentity | None, query: str | None) -> QueryResponse:
    """Run one query. CallableError propagates to the app-level exception handler."""
    return to_query_response(handler.handle(identity, query))


def handle_callable(handler: QueryHandler, identity: CallerIdentity | None, query: str | None) -> JSONResponse:
    """Run one query and answer in the callable envelope: {"result": ...} or {"error": ...}."""
    try:
        response = handle_query(handler, identity, query)
    except CallableError as e:
        return callable_error_response(e)
    return JSONResponse(content=CallableResponse(result=response).model_dump())


async def callable_error_handler(request: Request, exc: CallableError) -> JSONResponse:
    """Map a CallableError raised in a route to the /query error body."""
    logger.info("[api:error] %s %s -> %s", request.method, request.url.path, exc.code)
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    A body FastAPI could not parse (non-JSON, non-string query, non-object data)
    is answered like any other bad query: identity is checked first, so an
    anonymous caller gets unauthenticated and a verified one invalid-argument.
    Validation details are logged, not returned.
    """
    verifier_factory = request.app.dependency_overrides.get(get_identity_verifier, get_identity_verifier)
    identity = get_caller_identity(request.headers.get("authorization"), verifier_factory())
    error: CallableError = InvalidArgumentError() if identity is not None else UnauthenticatedError()
    logger.info("[api:request_validation] %s %s -> %s errors=%s",
                request.method, request.url.path, error.code, [e.get("type") for e in exc.errors()])
    if request.url.path == CALLABLE_PATH:
        return callable_error_response(error)
    return error_response(error)
