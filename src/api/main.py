"""
Pothole Reporter - REST API

FastAPI application for submitting and listing citizen pothole reports.

Run with: uvicorn src.api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional, List

from fastapi import FastAPI, Depends, Request, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, AliasChoices

from src.core.config import Settings, get_settings
from src.core.exceptions import ReportError
from src.core.logging import setup_logging
from src.reports.document import ReportDocument
from src.reports.service import ReportCreationService
from src.storage.backend import connect
from src.storage.base import StorageBackend

API_VERSION = "0.1.0"

logger = logging.getLogger(__name__)

# Pipeline error -> HTTP status
ERROR_STATUS_CODES = {
    "validation_failed": 422,
    "not_connected": 503,
    "upload_failed": 502,
    "persist_failed": 502,
}


# ============================================================================
# Pydantic Models
# ============================================================================

class LocationPayload(BaseModel):
    """GPS coordinates captured by the device."""
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class ReportCreateRequest(BaseModel):
    """Request to create a pothole report."""
    description: Optional[str] = None
    location: Optional[LocationPayload] = None
    photo_local_ref: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("photo_local_ref", "photoUri"),
    )


class ReportResponse(BaseModel):
    """Stored pothole report."""
    report_id: int
    description: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    photo_url: Optional[str] = None
    photo_local_ref: Optional[str] = None
    status: str
    timestamp: str
    user_id: str
    app_id: str

    @classmethod
    def from_document(cls, document: ReportDocument) -> "ReportResponse":
        return cls(
            report_id=document.report_id,
            description=document.description,
            latitude=document.latitude,
            longitude=document.longitude,
            photo_url=document.photo_ref if document.photo_is_remote else None,
            photo_local_ref=None if document.photo_is_remote else document.photo_ref,
            status=document.status,
            timestamp=document.timestamp.isoformat(),
            user_id=document.user_id,
            app_id=document.app_id,
        )


class ReportListResponse(BaseModel):
    """List of pothole reports."""
    count: int
    reports: List[ReportResponse]


class HealthResponse(BaseModel):
    """API health check response."""
    status: str
    version: str
    timestamp: str
    storage_mode: str
    app_id: str


# ============================================================================
# App Factory
# ============================================================================

def get_service(request: Request) -> ReportCreationService:
    """Report service built at startup."""
    return request.app.state.report_service


def create_app(
    settings: Optional[Settings] = None,
    backend: Optional[StorageBackend] = None,
) -> FastAPI:
    """
    Build the API application.

    Storage is connected on startup unless a backend is passed in.

    Args:
        settings: Settings to use (defaults to the cached settings)
        backend: Already connected storage backend
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage = backend or connect(settings)
        app.state.report_service = ReportCreationService.from_settings(storage, settings)
        yield

    app = FastAPI(
        title="Pothole Reporter",
        description="Citizen road-hazard reports with photo and GPS location",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ReportError)
    async def report_error_handler(request: Request, exc: ReportError):
        return JSONResponse(
            status_code=ERROR_STATUS_CODES.get(exc.kind, 500),
            content={"detail": exc.message, "error": exc.kind},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=ERROR_STATUS_CODES["validation_failed"],
            content={
                "detail": f"{field}: {message}" if field else message,
                "error": "validation_failed",
            },
        )

    # ========================================================================
    # System Routes
    # ========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health(service: ReportCreationService = Depends(get_service)):
        """API health check."""
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            timestamp=datetime.now(timezone.utc).isoformat(),
            storage_mode=service.backend.mode,
            app_id=service.app_id,
        )

    # ========================================================================
    # Report Routes
    # ========================================================================

    @app.post("/api/v1/reports", response_model=ReportResponse, status_code=201, tags=["Reports"])
    def create_report(
        request: ReportCreateRequest,
        service: ReportCreationService = Depends(get_service),
    ):
        """
        Submit a pothole report.

        The description must be at least 10 characters long and the report
        needs a GPS location and a photo. When photos are uploaded to a blob
        store, this route takes no photo reference: send the photo itself to
        /api/v1/reports/with-photo.
        """
        photo_local_ref = request.photo_local_ref
        if service.backend.uploads_photos and photo_local_ref:
            logger.warning("Ignoring client photo reference, photos must be uploaded")
            photo_local_ref = None

        document = service.create_report({
            "description": request.description,
            "location": request.location.model_dump() if request.location else None,
            "photo_local_ref": photo_local_ref,
        })
        return ReportResponse.from_document(document)

    @app.post(
        "/api/v1/reports/with-photo",
        response_model=ReportResponse,
        status_code=201,
        tags=["Reports"],
    )
    async def create_report_with_photo(
        description: Optional[str] = Form(None),
        latitude: Optional[float] = Form(None),
        longitude: Optional[float] = Form(None),
        photo: Optional[UploadFile] = File(None),
        service: ReportCreationService = Depends(get_service),
    ):
        """
        Submit a pothole report with the photo attached.

        The photo bytes are uploaded to the blob store as-is. In local mode
        the upload's filename is kept as the photo reference.
        """
        photo_data = await photo.read() if photo is not None else b""

        location = None
        if latitude is not None or longitude is not None:
            location = {"latitude": latitude, "longitude": longitude}

        raw = {
            "description": description,
            "location": location,
            "photo_local_ref": (photo.filename or "photo.jpg") if photo_data else None,
        }
        document = await run_in_threadpool(
            service.create_report, raw, photo_bytes=photo_data or None
        )
        return ReportResponse.from_document(document)

    @app.get("/api/v1/reports", response_model=ReportListResponse, tags=["Reports"])
    def list_reports(service: ReportCreationService = Depends(get_service)):
        """List all reports, oldest first."""
        documents = service.list_all()
        return ReportListResponse(
            count=len(documents),
            reports=[ReportResponse.from_document(d) for d in documents],
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("src.api.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
