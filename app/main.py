# Run from project root: uvicorn app.main:app --reload

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.api.handlers import callable_error_handler, request_validation_handler
from app.api.routes import router
from app.core.config import LOG_LEVEL
from app.core.errors import CallableError

logging.basicConfig(level=LOG_LEVEL)


app = FastAPI(title="Grounded Summary Backend")
app.include_router(router)
app.add_exception_handler(CallableError, callable_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
