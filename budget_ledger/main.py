# budget_ledger/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from budget_ledger.core.config import settings
from budget_ledger.core.exceptions import (
    ConflictError,
    LedgerError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from budget_ledger.core.log import setup_logging
from budget_ledger.api.v1.api import api_router as api_router_v1

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json" # URL для OpenAPI схемы
)

app.include_router(api_router_v1, prefix=settings.API_V1_STR)

# Ошибки ядра -> HTTP-статусы. Предыдущее состояние не меняется: транзакция запроса откатывается в get_async_db
_STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
