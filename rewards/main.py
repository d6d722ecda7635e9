"""
Reward Network - FastAPI Application Entry Point

This module initializes the FastAPI application with middleware, routes,
exception handlers and lifecycle event handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rewards import __version__
from rewards.api.errors import register_exception_handlers
from rewards.api.v1 import accounts, health, restaurants
from rewards.api.v1 import rewards as rewards_router
from rewards.core.config import settings
from rewards.core.database import close_db, init_db
from rewards.core.logging_config import setup_logging
from rewards.middleware.logging import LoggingMiddleware
from rewards.middleware.request_id import RequestIDMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
        - Set up logging
        - Initialize database (create tables when enabled)

    Shutdown:
        - Close database connections
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json)
    await init_db()

    yield

    await close_db()


app = FastAPI(
    title=settings.project_name,
    version=__version__,
    description="Rewards restaurant dinings by crediting account beneficiaries",
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Middleware is executed in reverse order of registration
# (last registered = first executed)

# Logging middleware (runs inside RequestID to access request_id)
app.add_middleware(LoggingMiddleware)

# Request ID middleware (sets the correlation ID)
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router, prefix=settings.api_v1_prefix, tags=["health"])
app.include_router(rewards_router.router, prefix=settings.api_v1_prefix)
app.include_router(accounts.router, prefix=settings.api_v1_prefix)
app.include_router(restaurants.router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns basic API information.
    """
    return {
        "message": "Reward Network API",
        "version": __version__,
        "docs": "/docs",
    }


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("rewards.main:app", host="0.0.0.0", port=8000)
