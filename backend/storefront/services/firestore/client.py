"""Firestore REST API client."""
import logging
from typing import Any

import httpx

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import RemoteFailure

logger = logging.getLogger(__name__)


class FirestoreClient:
    """Thin request helper over the Firestore ``documents`` REST endpoint."""

    BODY_METHODS = {"POST", "PATCH"}

    def __init__(self, config: Settings | None = None):
        """
        Initialize the client.

        Args:
            config: Settings carrying the project id, base URL and timeout
                (falls back to the module settings)
        """
        self.config = config or default_settings
        if not self.config.firebase_project_id:
            raise ValueError("FIREBASE_PROJECT_ID not configured")

    @property
    def project_id(self) -> str:
        return self.config.firebase_project_id

    @property
    def base_url(self) -> str:
        return self.config.firestore_documents_url

    async def request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | list[tuple[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """
        Make one request against the documents endpoint.

        Args:
            method: HTTP verb (GET, POST, PATCH, DELETE)
            path: Path below ``/documents``, e.g. ``/products/abc``
            data: JSON body, only sent for POST and PATCH
            params: Query parameters

        Returns:
            Decoded JSON response ({} for an empty body)

        Raises:
            RemoteFailure: on a non-success status or a transport error
        """
        method = method.upper()
        url = f"{self.base_url}{path}"
        body = data if data is not None and method in self.BODY_METHODS else None

        try:
            async with httpx.AsyncClient(timeout=self.config.firestore_timeout_seconds) as client:
                response = await client.request(method, url, json=body, params=params)
                response.raise_for_status()
                if not response.content:
                    return {}
                return response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise RemoteFailure(
                f"HTTP {status_code}: {e.response.reason_phrase} ({method} {path})",
                status_code=status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise RemoteFailure(f"Timeout during {method} {path}: {e}") from e
        except httpx.RequestError as e:
            raise RemoteFailure(f"Request error during {method} {path}: {e}") from e
        except ValueError as e:
            raise RemoteFailure(f"Invalid JSON response from {method} {path}: {e}") from e

    async def list_documents(self, collection: str, page_size: int = 300) -> list[dict[str, Any]]:
        """Fetch every document of a collection, following page tokens."""
        documents: list[dict[str, Any]] = []
        page_token = None

        while True:
            params: dict[str, Any] = {"pageSize": page_size}
            if page_token:
                params["pageToken"] = page_token

            result = await self.request("GET", f"/{collection}", params=params)
            documents.extend(result.get("documents", []))

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Fetched {len(documents)} documents from {collection}")
        return documents
