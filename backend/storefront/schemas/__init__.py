from storefront.schemas.catalog import (
    CatalogRecord,
    ProductResponse,
    GalleryImageResponse,
    VideoResponse,
    UploadConfig,
)

__all__ = [
    "CatalogRecord",
    "ProductResponse",
    "GalleryImageResponse",
    "VideoResponse",
    "UploadConfig",
]
