# backend/tests/test_api_catalog.py
"""Tests for the read-only storefront endpoints."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.api.products import router as products_router
from storefront.cli import parse_fields
from storefront.core.deps import get_catalog, get_gallery, get_products, get_videos
from storefront.main import app
from storefront.services.firestore.codec import decode, encode

PRODUCT = {
    "id": "p1",
    "name": "Frameless Screen",
    "category": "shower-screens",
    "image": "images/p1.jpg",
    "imageAlt": "images/p1-alt.jpg",
    "createdAt": "2024-06-01T00:00:00.000Z",
    "stock": 3,
}


@pytest.fixture
def products():
    collection = MagicMock()
    collection.list_all = AsyncMock(return_value=[PRODUCT])
    collection.list_by_category = AsyncMock(return_value=[])
    collection.get = AsyncMock(return_value=None)
    return collection


@pytest.fixture
def client(products):
    """Test client with Firestore-backed dependencies replaced."""
    gallery = MagicMock()
    gallery.list_all = AsyncMock(return_value=[{"id": "g1", "url": "https://img/1.jpg"}])
    videos = MagicMock()
    videos.list_all = AsyncMock(return_value=[])

    app.dependency_overrides[get_products] = lambda: products
    app.dependency_overrides[get_gallery] = lambda: gallery
    app.dependency_overrides[get_videos] = lambda: videos
    app.dependency_overrides[get_catalog] = lambda: {
        "mirrors": [{"id": 1, "name": "Round <Mirror>", "details": {"finish": "Chrome"}}],
    }
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_router_exists():
    """Test that the products router exists and has correct config."""
    assert products_router.prefix == "/products"
    assert "products" in products_router.tags


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_products_uses_aliases_and_passes_extra_fields(client: TestClient, products):
    response = client.get("/api/products/")

    assert response.status_code == 200
    body = response.json()
    assert body[0]["id"] == "p1"
    assert body[0]["imageAlt"] == "images/p1-alt.jpg"
    assert body[0]["stock"] == 3
    products.list_by_category.assert_not_called()


def test_list_products_filters_by_category(client: TestClient, products):
    response = client.get("/api/products/", params={"category": "mirrors"})

    assert response.status_code == 200
    assert response.json() == []
    products.list_by_category.assert_awaited_once_with("mirrors")


def test_get_product_not_found(client: TestClient):
    response = client.get("/api/products/missing")

    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"


def test_get_product(client: TestClient, products):
    products.get = AsyncMock(return_value=PRODUCT)

    response = client.get("/api/products/p1")

    assert response.status_code == 200
    assert response.json()["name"] == "Frameless Screen"


def test_list_gallery_and_videos(client: TestClient):
    assert client.get("/api/gallery/").json()[0]["url"] == "https://img/1.jpg"
    assert client.get("/api/videos/").json() == []


def test_upload_config(client: TestClient):
    body = client.get("/api/upload-config").json()

    assert set(body) == {"cloudName", "uploadPreset"}


def test_catalog_fragment_escapes_markup(client: TestClient):
    response = client.get("/catalog/mirrors")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Round &lt;Mirror&gt;" in response.text
    assert "product-single.html?id=1&amp;cat=mirrors" in response.text


def test_catalog_fragment_unknown_category(client: TestClient):
    response = client.get("/catalog/doors")

    assert response.status_code == 404


def test_write_methods_are_not_exposed(client: TestClient):
    response = client.post("/api/products/", json={"name": "Mirror"})

    assert response.status_code == 405


def test_list_products_accepts_non_string_field_values(client: TestClient, products):
    record = decode({
        "name": "projects/x/documents/products/p2",
        **encode(parse_fields(["name=Mirror", "size=1200", "category=mirrors", "featured=true"])),
    })
    products.list_all = AsyncMock(return_value=[record, {"name": "No id"}])

    response = client.get("/api/products/")

    assert response.status_code == 200
    body = response.json()
    assert body[0]["size"] == 1200
    assert body[0]["featured"] is True
    assert body[1]["id"] is None
