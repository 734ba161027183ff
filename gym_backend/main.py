"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from gym_backend.api.v1 import api_router
from gym_backend.config import settings
from gym_backend.core.rate_limit import limiter
from gym_backend.core.token_store import create_token_store
from gym_backend.database import SessionLocal, init_db
from gym_backend.services.member_code_generator import (
    MemberCodeError,
    MemberCodeGenerator,
    SqlMemberCodeStore,
    local_today,
)
from gym_backend.utils.logger import logger


def build_member_code_generator() -> MemberCodeGenerator:
    """Process-wide generator over the members table."""
    return MemberCodeGenerator(
        SqlMemberCodeStore(SessionLocal),
        clock=local_today(settings.member_code_timezone),
        max_retries=settings.member_code_max_retries,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    init_db()
    generator = build_member_code_generator()
    generator.initialize()
    app.state.member_code_generator = generator
    app.state.token_store = create_token_store()
    yield
    # Shutdown
    if app.state.token_store is not None:
        app.state.token_store.client.close()


app = FastAPI(
    title=settings.app_name,
    description="Multi-gym management API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(MemberCodeError)
async def member_code_exception_handler(request: Request, exc: MemberCodeError):
    """No member code could be allocated; the registration can be retried later."""
    logger.error(f"Member code allocation failed on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Prevent stack traces from leaking to clients in production."""
    if settings.debug:
        raise exc
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.environment,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gym_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
