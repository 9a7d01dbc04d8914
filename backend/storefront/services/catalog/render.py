"""Render the static, category-keyed catalog into product card markup."""
import json
import logging
from html import escape
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlencode

from storefront.core.exceptions import NotFound

logger = logging.getLogger(__name__)

ITEM_TEMPLATE = """\
<div class="col-lg-4 col-md-6">
  <div class="de-room">
    <div class="d-image">
      <div class="d-label">{label}</div>
      <div class="d-details">
        <span><img src="{asset_prefix}images/ui/user.svg"> {finish}</span>
        <span><img src="{asset_prefix}images/ui/floorplan.svg"> {size}</span>
      </div>
      <a href="{link}">
        <img src="{asset_prefix}{image}" class="img-fluid" alt="">
        <img src="{asset_prefix}{image_alt}" class="d-img-hover img-fluid" alt="">
      </a>
    </div>
    <div class="d-text">
      <h3>{name}</h3>
      <p>{description}</p>
      <a href="{link}" class="btn-line">
        <span>View Product</span>
      </a>
    </div>
  </div>
</div>
"""


def load_catalog(path: str | Path) -> dict[str, list[dict[str, Any]]]:
    """Load the category-keyed catalog JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Catalog file {path} must contain an object keyed by category")
    return data


def product_link(item: Mapping[str, Any], category: str) -> str:
    return "product-single.html?" + urlencode({"id": item.get("id", ""), "cat": category})


def render_item(
    item: Mapping[str, Any],
    category: str,
    asset_prefix: str = "../",
    label: str = "New Product",
) -> str:
    """Render one product card. Every interpolated value is HTML-escaped."""
    details = item.get("details") or {}

    def text(value: Any) -> str:
        return escape("" if value is None else str(value))

    return ITEM_TEMPLATE.format(
        label=text(label),
        asset_prefix=text(asset_prefix),
        finish=text(details.get("finish")),
        size=text(details.get("size")),
        link=text(product_link(item, category)),
        image=text(item.get("image")),
        image_alt=text(item.get("imageAlt")),
        name=text(item.get("name")),
        description=text(item.get("description")),
    )


def render_category(
    catalog: Mapping[str, list[Mapping[str, Any]]],
    category: str,
    asset_prefix: str = "../",
) -> str:
    """
    Render every item of a category.

    Raises:
        NotFound: if the catalog has no such category
    """
    if category not in catalog:
        raise NotFound(f"Unknown catalog category: {category}")

    items = catalog[category] or []
    logger.debug(f"Rendering {len(items)} items for category {category}")
    return "".join(render_item(item, category, asset_prefix) for item in items)
