"""
DentalDesk FastAPI Backend Application

Main application entry point for the dental practice records API.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime

from dentaldesk.core.config import settings
from dentaldesk.api import router
from dentaldesk.schemas.common import HealthCheck
from dentaldesk.services.data_store import DataStore
from dentaldesk.services.storage_service import build_storage

logging.basicConfig(
    level=getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="FastAPI backend for dental practice patients, appointments and analytics",
    version=settings.app_version,
    debug=settings.debug,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routes
app.include_router(router, prefix="/api")


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
        "api_v1": "/api/v1",
    }


@app.get("/health", response_model=HealthCheck, tags=["health"])
async def health_check():
    """Health check endpoint."""
    store = getattr(app.state, "store", None)
    return HealthCheck(
        status="healthy",
        version=settings.app_version,
        persisted=store.persisted if store else True,
        timestamp=datetime.now(),
    )


# Startup event
@app.on_event("startup")
async def startup_event():
    """Load the domain store unless one was provided."""
    if getattr(app.state, "store", None) is None:
        storage = build_storage(settings)
        app.state.store = DataStore(storage, seed_on_empty=settings.seed_on_empty).load()

    print(f"\n{'='*60}")
    print(f"🦷 {settings.app_name} v{settings.app_version}")
    print(f"{'='*60}")
    print(f"📡 Server running on http://{settings.host}:{settings.port}")
    print(f"📚 API Documentation: http://{settings.host}:{settings.port}/docs")
    print(f"💾 Storage backend: {settings.storage_backend}")
    print(f"{'='*60}\n")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Flush collections on application shutdown."""
    store = getattr(app.state, "store", None)
    if store is not None:
        store.close()
    print("\n👋 Shutting down DentalDesk Backend...\n")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dentaldesk.main:app", host=settings.host, port=settings.port, reload=settings.debug
    )
