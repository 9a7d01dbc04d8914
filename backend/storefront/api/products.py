# backend/storefront/api/products.py
from fastapi import APIRouter, Depends, HTTPException, Query, status

from storefront.core.deps import get_products
from storefront.schemas.catalog import ProductResponse
from storefront.services.firestore.collections import ProductCollection

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=list[ProductResponse])
async def list_products(
    category: str | None = Query(default=None),
    products: ProductCollection = Depends(get_products),
):
    """List products, newest first, optionally filtered by category."""
    if category:
        return await products.list_by_category(category)
    return await products.list_all()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    products: ProductCollection = Depends(get_products),
):
    """Get a single product."""
    product = await products.get(product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product
