# backend/tests/test_firestore_client.py
import json

import httpx
import pytest
import respx

from storefront.core.config import Settings
from storefront.core.exceptions import RemoteFailure
from storefront.services.firestore.client import FirestoreClient

BASE = "https://firestore.googleapis.com/v1/projects/test-project/databases/(default)/documents"


def make_client() -> FirestoreClient:
    return FirestoreClient(Settings(firebase_project_id="test-project"))


def test_client_requires_project_id():
    with pytest.raises(ValueError, match="FIREBASE_PROJECT_ID not configured"):
        FirestoreClient(Settings(firebase_project_id=""))


def test_base_url_uses_project_id():
    assert make_client().base_url == BASE


@pytest.mark.asyncio
@respx.mock
async def test_request_get_returns_json():
    respx.get(f"{BASE}/products/p1").mock(
        return_value=httpx.Response(200, json={"name": "x/products/p1", "fields": {}})
    )

    result = await make_client().request("GET", "/products/p1")

    assert result["name"] == "x/products/p1"


@pytest.mark.asyncio
@respx.mock
async def test_request_post_sends_json_body():
    route = respx.post(f"{BASE}/products").mock(
        return_value=httpx.Response(200, json={"name": "x/products/new"})
    )
    body = {"fields": {"name": {"stringValue": "Mirror"}}}

    await make_client().request("POST", "/products", body)

    sent = route.calls.last.request
    assert sent.headers["content-type"] == "application/json"
    assert json.loads(sent.content) == body


@pytest.mark.asyncio
@respx.mock
async def test_request_get_ignores_body():
    route = respx.get(f"{BASE}/products").mock(return_value=httpx.Response(200, json={}))

    await make_client().request("GET", "/products", {"fields": {}})

    assert route.calls.last.request.content == b""


@pytest.mark.asyncio
@respx.mock
async def test_request_delete_with_empty_body_returns_empty_dict():
    respx.delete(f"{BASE}/videos/v1").mock(return_value=httpx.Response(200))

    assert await make_client().request("DELETE", "/videos/v1") == {}


@pytest.mark.asyncio
@respx.mock
async def test_request_http_error_raises_remote_failure():
    respx.get(f"{BASE}/products/missing").mock(return_value=httpx.Response(404, json={}))

    with pytest.raises(RemoteFailure) as exc_info:
        await make_client().request("GET", "/products/missing")

    assert exc_info.value.status_code == 404
    assert "HTTP 404" in str(exc_info.value)


@pytest.mark.asyncio
@respx.mock
async def test_request_transport_error_raises_remote_failure():
    respx.get(f"{BASE}/products").mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(RemoteFailure) as exc_info:
        await make_client().request("GET", "/products")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
@respx.mock
async def test_request_timeout_raises_remote_failure():
    respx.get(f"{BASE}/products").mock(side_effect=httpx.ReadTimeout("too slow"))

    with pytest.raises(RemoteFailure, match="Timeout"):
        await make_client().request("GET", "/products")


@pytest.mark.asyncio
@respx.mock
async def test_list_documents_follows_page_tokens():
    route = respx.get(f"{BASE}/products").mock(
        side_effect=[
            httpx.Response(200, json={"documents": [{"name": "a"}], "nextPageToken": "t2"}),
            httpx.Response(200, json={"documents": [{"name": "b"}]}),
        ]
    )

    documents = await make_client().list_documents("products")

    assert [d["name"] for d in documents] == ["a", "b"]
    assert route.call_count == 2
    assert route.calls[1].request.url.params["pageToken"] == "t2"


@pytest.mark.asyncio
@respx.mock
async def test_list_documents_empty_collection():
    respx.get(f"{BASE}/gallery").mock(return_value=httpx.Response(200, json={}))

    assert await make_client().list_documents("gallery") == []
