# backend/storefront/api/media.py
from fastapi import APIRouter, Depends

from storefront.core.deps import get_gallery, get_videos
from storefront.schemas.catalog import GalleryImageResponse, VideoResponse
from storefront.services.firestore.collections import GalleryCollection, VideoCollection

gallery_router = APIRouter(prefix="/gallery", tags=["gallery"])
videos_router = APIRouter(prefix="/videos", tags=["videos"])


@gallery_router.get("/", response_model=list[GalleryImageResponse])
async def list_gallery_images(gallery: GalleryCollection = Depends(get_gallery)):
    return await gallery.list_all()


@videos_router.get("/", response_model=list[VideoResponse])
async def list_videos(videos: VideoCollection = Depends(get_videos)):
    return await videos.list_all()
