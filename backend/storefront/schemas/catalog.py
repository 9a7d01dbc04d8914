from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Catalog records are open typed-field documents, so any entity field may hold
# a string, number, boolean or array.
FieldValue = str | int | float | bool | list[Any] | None


class CatalogRecord(BaseModel):
    """A decoded catalog document. Unknown fields are passed through."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    created_at: FieldValue = Field(default=None, alias="createdAt")
    updated_at: FieldValue = Field(default=None, alias="updatedAt")


class ProductResponse(CatalogRecord):
    name: FieldValue = None
    category: FieldValue = None
    description: FieldValue = None
    finish: FieldValue = None
    size: FieldValue = None
    image: FieldValue = None
    image_alt: FieldValue = Field(default=None, alias="imageAlt")


class GalleryImageResponse(CatalogRecord):
    url: FieldValue = None
    title: FieldValue = None


class VideoResponse(CatalogRecord):
    url: FieldValue = None
    title: FieldValue = None


class UploadConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cloud_name: str = Field(alias="cloudName")
    upload_preset: str = Field(alias="uploadPreset")
