"""Static catalog rendering."""
from storefront.services.catalog.render import load_catalog, render_category, render_item

__all__ = ["load_catalog", "render_category", "render_item"]
