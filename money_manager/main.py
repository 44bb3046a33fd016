"""
Money Manager API: FastAPI Application.

This is the entry point for the application.
All routers, middleware and error handlers are registered here.
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from money_manager.config import get_settings
from money_manager.logging_config import configure_logging
from money_manager.api.accounts import router as accounts_router
from money_manager.api.dashboard import router as dashboard_router
from money_manager.api.expense import router as expense_router
from money_manager.api.health import router as health_router
from money_manager.api.income import router as income_router
from money_manager.api.transactions import router as transactions_router

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Income, expense and account tracking with period reports",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    client = request.client.host if request.client else "-"
    logger.info("%s %s from %s", request.method, request.url.path, client)
    response = await call_next(request)
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


# --- Error handlers ---
# Every error body has the shape {"error": message}.

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# Register routers
app.include_router(health_router)
app.include_router(income_router)
app.include_router(expense_router)
app.include_router(transactions_router)
app.include_router(dashboard_router)
app.include_router(accounts_router)
