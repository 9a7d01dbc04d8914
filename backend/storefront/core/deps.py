# backend/storefront/core/deps.py
from fastapi import Depends, HTTPException, status

from storefront.core.config import Settings, get_settings
from storefront.services.catalog.render import load_catalog
from storefront.services.firestore.client import FirestoreClient
from storefront.services.firestore.collections import (
    GalleryCollection,
    ProductCollection,
    VideoCollection,
)


def get_firestore_client(config: Settings = Depends(get_settings)) -> FirestoreClient:
    return FirestoreClient(config)


# The read API never holds an admin session, so collections get no auth context
# and any write through them fails with Unauthorized.
def get_products(client: FirestoreClient = Depends(get_firestore_client)) -> ProductCollection:
    return ProductCollection(client)


def get_gallery(client: FirestoreClient = Depends(get_firestore_client)) -> GalleryCollection:
    return GalleryCollection(client)


def get_videos(client: FirestoreClient = Depends(get_firestore_client)) -> VideoCollection:
    return VideoCollection(client)


def get_catalog(config: Settings = Depends(get_settings)) -> dict[str, list[dict]]:
    """Static catalog data keyed by category."""
    try:
        return load_catalog(config.catalog_file)
    except FileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog data not available",
        )
