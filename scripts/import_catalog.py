#!/usr/bin/env python3
"""Import the static catalog JSON into the Firestore products collection.

Requires an admin session: run `storefront-admin login <username>` first.
"""
import asyncio
import logging
import sys

from storefront.core.config import settings
from storefront.core.exceptions import RemoteFailure, Unauthorized
from storefront.services.auth.session import SessionManager
from storefront.services.auth.store import FileSessionStore
from storefront.services.auth.users import UserDirectory
from storefront.services.catalog.render import load_catalog
from storefront.services.firestore.client import FirestoreClient
from storefront.services.firestore.collections import ProductCollection


def to_product(item: dict, category: str) -> dict:
    """Flatten a static catalog item into a product record."""
    details = item.get("details") or {}
    return {
        "name": item.get("name"),
        "description": item.get("description"),
        "category": category,
        "finish": details.get("finish"),
        "size": details.get("size"),
        "image": item.get("image"),
        "imageAlt": item.get("imageAlt"),
        "legacyId": item.get("id"),
    }


async def import_products(products: ProductCollection, catalog: dict) -> tuple[int, int]:
    """Create every catalog item whose (category, name) is not yet stored.

    Returns (imported, skipped). Unauthorized propagates and stops the run.
    """
    existing = {(p.get("category"), p.get("name")) for p in await products.list_all()}
    print(f"Products collection has {len(existing)} existing products")

    imported = 0
    skipped = 0

    for category, items in catalog.items():
        for item in items:
            record = to_product(item, category)
            if (category, record["name"]) in existing:
                skipped += 1
                continue
            try:
                await products.create(record)
            except RemoteFailure as e:
                print(f"Error importing {category}/{item.get('id')}: {e}")
                continue
            existing.add((category, record["name"]))
            imported += 1

    return imported, skipped


async def import_catalog() -> int:
    client = FirestoreClient(settings)
    session = SessionManager(
        UserDirectory(client), FileSessionStore(settings.session_file), settings
    )
    if not session.restore():
        print("Not logged in. Run `storefront-admin login <username>` first.")
        return 1

    catalog = load_catalog(settings.catalog_file)
    print(f"Loaded {sum(len(v) for v in catalog.values())} items in {len(catalog)} categories")

    try:
        imported, skipped = await import_products(ProductCollection(client, session), catalog)
    except Unauthorized as e:
        print(f"Stopping: {e}")
        return 1

    session.refresh_session()
    print(f"\nImport complete: {imported} imported, {skipped} skipped (already exist)")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    sys.exit(asyncio.run(import_catalog()))
