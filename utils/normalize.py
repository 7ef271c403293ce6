"""Pure functions that reshape raw REST payloads into smaller summaries.

Nothing here touches the network or keeps state, so the same input always
produces the same output.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable

INTERNAL_META_PREFIX = "_"

PRODUCT_FIELDS = (
    "id", "name", "slug", "permalink", "type", "status", "sku",
    "price", "regular_price", "sale_price", "price_html", "on_sale",
    "description", "short_description",
    "weight", "dimensions",
    "stock_status", "stock_quantity", "manage_stock",
    "categories", "tags", "images", "attributes", "variations",
    "custom_meta", "meta_data_all", "acf",
    "average_rating", "rating_count", "total_sales",
    "related_ids", "upsell_ids", "cross_sell_ids",
    "date_created", "date_modified",
)

VARIATION_FIELDS = (
    "id", "sku", "price", "regular_price", "sale_price", "on_sale",
    "stock_status", "stock_quantity", "weight", "dimensions",
    "attributes", "image", "custom_meta", "meta_data_all",
)

IMAGE_FIELDS = ("id", "src", "name", "alt")


def partition_meta(meta_data: Any) -> dict[str, Any]:
    """Collapse a WooCommerce `meta_data` list into a key -> value map.

    Keys starting with the internal prefix are left out. Later duplicates
    overwrite earlier ones. Anything that is not a list yields an empty map.
    """
    custom: dict[str, Any] = {}
    if not isinstance(meta_data, list):
        return custom
    for entry in meta_data:
        if not isinstance(entry, dict):
            continue
        key = entry.get("key")
        if isinstance(key, str) and key and not key.startswith(INTERNAL_META_PREFIX):
            custom[key] = entry.get("value")
    return custom


def project(raw: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Pick `fields` from `raw`; absent fields come back as None."""
    return {field: raw.get(field) for field in fields}


def unwrap_rendered(value: Any) -> Any:
    """WordPress wraps title/content/excerpt as {"rendered": ...}; return the inner value."""
    if isinstance(value, dict) and "rendered" in value:
        return value["rendered"]
    return value


def map_items(response: Any, transform: Callable[[Any], Any]) -> Any:
    """Apply `transform` to each element of a list response; pass anything else through."""
    if isinstance(response, list):
        return [transform(item) for item in response]
    return response


def count_items(items: Any) -> int:
    return len(items) if isinstance(items, list) else 0


def _format_images(images: Any) -> Any:
    if not isinstance(images, list):
        return images
    return [project(img, IMAGE_FIELDS) if isinstance(img, dict) else img for img in images]


def format_product_summary(product: Any) -> Any:
    if not isinstance(product, dict):
        return product
    meta_data = product.get("meta_data")
    source = dict(product)
    source["images"] = _format_images(product.get("images"))
    source["custom_meta"] = partition_meta(meta_data)
    source["meta_data_all"] = meta_data
    # WooCommerce only includes this when ACF exposes fields over REST
    source["acf"] = product.get("acf") or None
    return project(source, PRODUCT_FIELDS)


def format_variation_summary(variation: Any) -> Any:
    if not isinstance(variation, dict):
        return variation
    meta_data = variation.get("meta_data")
    source = dict(variation)
    source["custom_meta"] = partition_meta(meta_data)
    source["meta_data_all"] = meta_data
    return project(source, VARIATION_FIELDS)


def format_rendered(raw: dict[str, Any], fields: Iterable[str], rendered: Iterable[str] = ()) -> dict[str, Any]:
    """Project `fields` and unwrap the ones listed in `rendered`."""
    summary = project(raw, fields)
    for field in rendered:
        if field in summary:
            summary[field] = unwrap_rendered(summary[field])
    return summary


def summarize_registry(raw: Any, fields: Iterable[str]) -> Any:
    """Reduce a {slug: object} registry (post types, taxonomies) to `fields` per entry."""
    if not isinstance(raw, dict):
        return raw
    fields = tuple(fields)
    return {slug: project(obj, fields) if isinstance(obj, dict) else obj for slug, obj in raw.items()}
