# backend/storefront/api/pages.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from storefront.core.deps import get_catalog
from storefront.core.exceptions import NotFound
from storefront.services.catalog.render import render_category

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/{category}", response_class=HTMLResponse)
async def category_fragment(
    category: str,
    catalog: dict = Depends(get_catalog),
) -> HTMLResponse:
    """Product cards for one category of the static catalog."""
    try:
        markup = render_category(catalog, category)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTMLResponse(content=markup)
