import logging
from typing import Any
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import settings
from storefront.api.products import router as products_router
from storefront.api.media import gallery_router, videos_router
from storefront.api.pages import router as pages_router
from storefront.schemas.catalog import UploadConfig

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Read-only storefront catalog API",
    version="0.1.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(products_router, prefix="/api")
app.include_router(gallery_router, prefix="/api")
app.include_router(videos_router, prefix="/api")
app.include_router(pages_router)


@app.get("/health")
async def health_check() -> dict[str, Any]:
    return {
        "status": "healthy",
        "version": "0.1.0",
        "environment": settings.environment,
        "project_id": settings.firebase_project_id,
    }


@app.get("/api/upload-config", response_model=UploadConfig)
async def upload_config() -> UploadConfig:
    """Cloudinary settings consumed by the admin upload widget."""
    return UploadConfig(
        cloud_name=settings.cloudinary_cloud_name,
        upload_preset=settings.cloudinary_upload_preset,
    )
