"""
Venue Backoffice - Main FastAPI Application
"""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from contextlib import asynccontextmanager
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

import logging

from venue_backoffice.config import settings
from venue_backoffice.exceptions import register_exception_handlers
from venue_backoffice.limiter import limiter
from venue_backoffice.api.v1 import (
    admin,
    admin_roles,
    admin_staff,
    auth,
    navigation,
    staff,
    vendor_roles,
    vendor_staff,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting up %s %s...", settings.APP_NAME, settings.APP_VERSION)
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Vendor back office: roles, staff and permission-gated access",
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# slowapi looks the limiter up on app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response: Response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(vendor_roles.router, prefix="/api/v1")
app.include_router(vendor_staff.router, prefix="/api/v1")
app.include_router(navigation.router, prefix="/api/v1/vendor")
app.include_router(admin.router, prefix="/api/v1/admin")
app.include_router(admin_roles.router, prefix="/api/v1/admin")
app.include_router(admin_staff.router, prefix="/api/v1/admin")
app.include_router(staff.router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.APP_VERSION}
