"""
FastAPI entrypoint for Jet Finances backend application.
"""
import logging
import time
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware
from starlette_csrf import CSRFMiddleware
from jet_finances.core.config import settings
from jet_finances.core.logging_config import configure_logging
from jet_finances.core.rate_limit import limiter
from jet_finances.core.security import CSRF_COOKIE_NAME, CSRF_EXEMPT_URLS, CSRF_HEADER_NAME, security_headers
from jet_finances.core.utils import format_error
from jet_finances.api.router import api_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Backend API for aircraft flight, invoice and expense records",
    version="1.0.0"
)

# Rate limiter used by the login route
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Double-submit CSRF cookie checked on every unsafe request except login
app.add_middleware(
    CSRFMiddleware,
    secret=settings.SESSION_SECRET,
    cookie_name=CSRF_COOKIE_NAME,
    header_name=CSRF_HEADER_NAME,
    cookie_secure=settings.SESSION_HTTPS_ONLY,
    cookie_samesite="lax",
    exempt_urls=CSRF_EXEMPT_URLS,
)

# Signed session cookie carrying the user id, role and access token
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=settings.SESSION_HTTPS_ONLY,
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Set browser security headers on every response."""
    response = await call_next(request)
    for name, value in security_headers().items():
        response.headers.setdefault(name, value)
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=format_error("Internal server error"))


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Jet Finances API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
