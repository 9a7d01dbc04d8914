"""CRUD verbs for the catalog collections (products, gallery, videos)."""
import logging
import re
from datetime import datetime, timezone
from typing import Any, Mapping

from storefront.core.exceptions import DecodeMismatch, RemoteFailure
from storefront.services.auth.session import AuthContext, require_authenticated
from storefront.services.firestore.client import FirestoreClient
from storefront.services.firestore.codec import decode, encode
from storefront.utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

PRODUCTS = "products"
GALLERY = "gallery"
VIDEOS = "videos"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SIMPLE_FIELD = re.compile(r"[A-Za-z_][A-Za-z_0-9]*")


def field_path(key: str) -> str:
    """Quote a field name for use in an update mask."""
    if _SIMPLE_FIELD.fullmatch(key):
        return key
    escaped = key.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def created_at_key(record: Mapping[str, Any]) -> datetime:
    """Sort key for ``createdAt``; missing or unparseable values sort as oldest."""
    value = record.get("createdAt")
    if not isinstance(value, str) or not value:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class CatalogCollection:
    """
    One Firestore collection of catalog records.

    Reads never raise: failures are logged and turned into ``[]`` / ``None``.
    Writes require a valid admin session and re-raise failures after logging.
    """

    def __init__(self, client: FirestoreClient, name: str, auth: AuthContext | None = None):
        self.client = client
        self.name = name
        self.auth = auth

    async def list_all(self) -> list[dict[str, Any]]:
        """All records, newest ``createdAt`` first."""
        try:
            documents = await self.client.list_documents(self.name)
            records = [decode(doc) for doc in documents]
        except (RemoteFailure, DecodeMismatch) as e:
            logger.error(f"Error listing {self.name}: {e}")
            return []

        records = [r for r in records if r is not None]
        return sorted(records, key=created_at_key, reverse=True)

    async def get(self, doc_id: str) -> dict[str, Any] | None:
        try:
            result = await self.client.request("GET", f"/{self.name}/{doc_id}")
            return decode(result)
        except (RemoteFailure, DecodeMismatch) as e:
            logger.error(f"Error getting {self.name}/{doc_id}: {e}")
            return None

    async def create(self, record: Mapping[str, Any]) -> dict[str, Any] | None:
        """Create a record, stamping ``createdAt`` and ``updatedAt``."""
        require_authenticated(self.auth)

        timestamp = utc_now_iso()
        payload = {k: v for k, v in record.items() if k != "id"}
        payload["createdAt"] = timestamp
        payload["updatedAt"] = timestamp

        try:
            result = await self.client.request("POST", f"/{self.name}", encode(payload))
            created = decode(result)
        except (RemoteFailure, DecodeMismatch) as e:
            logger.error(f"Error adding to {self.name}: {e}")
            raise

        logger.info(f"Created {self.name}/{created['id'] if created else '?'}")
        return created

    async def update(self, doc_id: str, record: Mapping[str, Any]) -> dict[str, Any] | None:
        """Patch only the supplied fields, stamping ``updatedAt``."""
        require_authenticated(self.auth)

        payload = {k: v for k, v in record.items() if k != "id"}
        payload["updatedAt"] = utc_now_iso()
        body = encode(payload)
        # Without a mask Firestore replaces the whole document
        mask = [("updateMask.fieldPaths", field_path(key)) for key in body["fields"]]

        try:
            result = await self.client.request(
                "PATCH", f"/{self.name}/{doc_id}", body, params=mask
            )
            updated = decode(result)
        except (RemoteFailure, DecodeMismatch) as e:
            logger.error(f"Error updating {self.name}/{doc_id}: {e}")
            raise

        logger.info(f"Updated {self.name}/{doc_id}")
        return updated

    async def delete(self, doc_id: str) -> bool:
        require_authenticated(self.auth)

        try:
            await self.client.request("DELETE", f"/{self.name}/{doc_id}")
        except RemoteFailure as e:
            logger.error(f"Error deleting {self.name}/{doc_id}: {e}")
            raise

        logger.info(f"Deleted {self.name}/{doc_id}")
        return True


class ProductCollection(CatalogCollection):
    def __init__(self, client: FirestoreClient, auth: AuthContext | None = None):
        super().__init__(client, PRODUCTS, auth)

    async def list_by_category(self, category: str) -> list[dict[str, Any]]:
        products = await self.list_all()
        return [p for p in products if p.get("category") == category]


class GalleryCollection(CatalogCollection):
    def __init__(self, client: FirestoreClient, auth: AuthContext | None = None):
        super().__init__(client, GALLERY, auth)


class VideoCollection(CatalogCollection):
    def __init__(self, client: FirestoreClient, auth: AuthContext | None = None):
        super().__init__(client, VIDEOS, auth)
