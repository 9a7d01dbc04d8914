#!/usr/bin/env python3
"""Render one category of the static catalog to an HTML fragment."""
import argparse
import sys

from storefront.core.config import settings
from storefront.core.exceptions import NotFound
from storefront.services.catalog.render import load_catalog, render_category


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("category", help="Catalog category, e.g. shower-screens")
    parser.add_argument("--catalog", default=settings.catalog_file, help="Catalog JSON file")
    parser.add_argument("--asset-prefix", default="../", help="Prefix for image paths")
    parser.add_argument("--output", "-o", help="Write to this file instead of stdout")
    args = parser.parse_args()

    catalog = load_catalog(args.catalog)
    try:
        markup = render_category(catalog, args.category, asset_prefix=args.asset_prefix)
    except NotFound as e:
        print(str(e), file=sys.stderr)
        print(f"Available categories: {', '.join(sorted(catalog))}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(markup)
        print(f"Wrote {len(catalog[args.category])} items to {args.output}")
    else:
        sys.stdout.write(markup)
    return 0


if __name__ == "__main__":
    sys.exit(main())
