"""
FastAPI entrypoint for the Globetrotter backend application.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.exceptions import (
    EntityNotFoundError, LocalOnlyOperationError, RemoteStoreError,
    TripAccessError, TripValidationError
)
from app.core.utils import format_error
from app.api.router import api_router
from app.db.init_db import seed_reference_data
from app.db.session import SessionLocal, init_db
from app.services.autosave import DebouncedWriter
from app.services.local_store import LocalStore, storage_from_path

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.AUTO_CREATE_TABLES:
        init_db()
        db = SessionLocal()
        try:
            seed_reference_data(db)
        finally:
            db.close()

    local_store = LocalStore(storage_from_path(settings.LOCAL_STORE_PATH), settings.LOCAL_STORE_NAMESPACE)
    local_store.initialize()
    app.state.local_store = local_store
    app.state.writer = DebouncedWriter(local_store.save_sections, settings.AUTOSAVE_DEBOUNCE_SECONDS)
    logger.info(f"{settings.APP_NAME} started")

    yield

    flushed = app.state.writer.flush_all()
    if flushed:
        logger.info(f"Flushed {flushed} pending itinerary edits on shutdown")


app = FastAPI(
    title="Globetrotter API",
    description="Backend API for multi-city trip planning",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TripValidationError)
async def validation_error_handler(request: Request, exc: TripValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=format_error(str(exc)))


@app.exception_handler(TripAccessError)
async def access_error_handler(request: Request, exc: TripAccessError):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content=format_error(str(exc)))


@app.exception_handler(EntityNotFoundError)
async def not_found_handler(request: Request, exc: EntityNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=format_error(str(exc), {"entity": exc.entity, "id": exc.entity_id}),
    )


@app.exception_handler(LocalOnlyOperationError)
async def local_only_handler(request: Request, exc: LocalOnlyOperationError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=format_error(str(exc)))


@app.exception_handler(RemoteStoreError)
async def remote_store_handler(request: Request, exc: RemoteStoreError):
    logger.error(f"Remote store unavailable on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=format_error("Remote store unavailable, please try again"),
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Globetrotter API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
