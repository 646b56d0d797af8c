"""
Paydesk - Payroll service for GrowthPoint Construction

The payroll engine itself (paydesk.engine) is pure; this application is the
adapter around it: roster and ledger storage, run generation, record
lifecycle and operational endpoints.
"""
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

import paydesk.models  # noqa: F401  (registers tables with Base)
from paydesk.core.config import settings
from paydesk.core.exceptions import AppException
from paydesk.core.init_system import init_system_data
from paydesk.core.logging import setup_logging
from paydesk.core.middleware import CorrelationIdMiddleware
from paydesk.core.schemas import ApiResponse, ErrorItem
from paydesk.database import SessionLocal, init_db
from paydesk.routers.api_router import api_router

# ============================================================================
# LOGGING SETUP
# ============================================================================
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed the demo crew before serving; nothing to tear down."""
    payroll = settings.payroll
    logger.info(
        f"{settings.app_name} v{settings.version} starting ({settings.environment}); "
        f"cutoff day {payroll.cutoff_day}, {payroll.periods_per_year} periods/year"
    )
    try:
        init_db()
        init_system_data()
    except Exception as e:
        logger.error(f"Startup aborted, database not usable: {e}")
        raise
    logger.info("Payroll store ready")

    yield

    logger.info("Payroll service stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Semi-monthly payroll: statutory deductions, overtime, loans and payslip records",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ============================================================================
# MIDDLEWARE STACK (last added runs first)
# ============================================================================
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH"],
    allow_headers=["*"],
    expose_headers=[settings.request_id_header, "X-Process-Time"],
)

# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================
def _error_response(status_code: int, *errors: ErrorItem) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ApiResponse.fail(*errors).to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and query parameters (422), one entry per field."""
    errors = [
        ErrorItem(msg=error["msg"], code="VALIDATION_ERROR", field=str(error["loc"][-1]) if error["loc"] else None)
        for error in exc.errors()
    ]
    logger.warning(f"Rejected {request.method} {request.url.path}: {[e.field for e in errors]}")
    return _error_response(422, *errors)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    logger.warning(f"{exc.error_code}: {exc.message}", extra={"code": exc.error_code})
    return _error_response(
        exc.status_code,
        ErrorItem(msg=exc.message, code=exc.error_code, details=exc.details)
    )


@app.exception_handler(StarletteHTTPException)
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error_response(exc.status_code, ErrorItem(msg=message))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled server error", extra={"path": request.url.path})
    return _error_response(500, ErrorItem(msg="An unexpected server error occurred.", code="INTERNAL_ERROR"))


app.include_router(api_router, prefix=settings.api_prefix)

# ============================================================================
# OPERATIONAL ENDPOINTS (at root level)
# ============================================================================
@app.get("/", tags=["Health"])
def root():
    return {
        "message": f"{settings.app_name} API",
        "version": settings.version,
        "currency": settings.payroll.currency,
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
def health_check():
    """Liveness probe."""
    return {
        "status": "up",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "environment": settings.environment,
    }


@app.get("/readiness", tags=["Health"])
def readiness_check():
    """Readiness probe: the payroll store must answer a trivial query."""
    try:
        with SessionLocal() as session:
            session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Payroll store unreachable: {e}")
        raise HTTPException(status_code=503, detail="Service not ready")
    return {"status": "ready", "components": {"database": "connected"}}


def run():
    """Serve the API with uvicorn (`paydesk-server` console script)."""
    import uvicorn

    uvicorn.run(
        "paydesk.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    run()
