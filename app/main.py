# app/main.py
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.errors import AppError, ErrorCategory

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Seminar registration service starting up...")
    if not settings.GOOGLE_SPREADSHEET_ID:
        logger.warning(
            "GOOGLE_SPREADSHEET_ID is not set; only tenant-prefixed routes will work"
        )
    if not settings.RESEND_API_KEY:
        logger.warning("RESEND_API_KEY is not set; confirmation emails will not be sent")
    yield
    logger.info("Seminar registration service shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="""
        Seminar registration for several hosting organizations.

        * **Seminars**: publish seminars with a Google Meet link and a per-seminar spreadsheet
        * **Bookings**: attendee registration, self-service edit and cancellation by reservation number
        * **Surveys**: pre- and post-seminar questionnaires
        * **Member domains**: company domains admitted to members-only seminars

        Admin endpoints require the `admin_token` cookie issued by `/auth/login`.
        Tenant sites are served under `/{tenant}/api/v1`.
        """,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,  # The admin session travels as a cookie
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{exc.category} on {request.method} {request.url.path}: {exc.message} {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "category": exc.category},
    )


@app.exception_handler(httpx.HTTPError)
async def upstream_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    logger.error(f"Upstream request failed on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"detail": "Upstream service unavailable", "category": ErrorCategory.EXTERNAL_SERVICE},
    )


app.include_router(api_router, prefix="/api/v1")
# Tenant sites
app.include_router(api_router, prefix="/{tenant}/api/v1", include_in_schema=False)


@app.get("/")
def read_root():
    return {"status": "Seminar registration service is running"}
