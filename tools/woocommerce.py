from typing import Annotated, Any, Literal, Optional

from pydantic import Field

from core.log_sink import log_to_file  # type: ignore
from utils import compact, make_wordpress_request, tool_handler  # type: ignore
from utils.normalize import count_items, format_product_summary, format_variation_summary, map_items  # type: ignore

PRODUCTS_PATH = "wc/v3/products"

AUTH_HINT = (
    "Authentication failed. WooCommerce REST API may require separate consumer key/secret. "
    "Set WOO_CONSUMER_KEY and WOO_CONSUMER_SECRET environment variables, "
    "or ensure your WordPress user has shop_manager/admin role."
)
LIST_HINTS = {
    401: AUTH_HINT,
    403: AUTH_HINT,
    404: "WooCommerce REST API not found. Ensure WooCommerce plugin is installed and activated.",
}
PRODUCT_HINTS = {
    401: AUTH_HINT,
    403: AUTH_HINT,
    404: "Product not found or WooCommerce REST API not available.",
}

PerPage = Annotated[Optional[int], Field(ge=1, le=100, description="Items per page (default 10, max 100)")]
Page = Annotated[Optional[int], Field(ge=1, description="Page number (default 1)")]


@tool_handler("listing WooCommerce products", LIST_HINTS)
async def list_woo_products(
    page: Page = None,
    per_page: PerPage = None,
    search: Annotated[Optional[str], Field(description="Search by product name or description")] = None,
    sku: Annotated[Optional[str], Field(description="Filter by exact SKU")] = None,
    slug: Annotated[Optional[str], Field(description="Filter by product slug")] = None,
    status: Annotated[Optional[str], Field(description="Product status: publish, draft, pending, private")] = None,
    category: Annotated[Optional[str], Field(description="Filter by category ID (comma-separated for multiple)")] = None,
    tag: Annotated[Optional[str], Field(description="Filter by tag ID (comma-separated for multiple)")] = None,
    type: Annotated[Optional[Literal["simple", "grouped", "external", "variable"]], Field(description="Product type filter")] = None,
    featured: Annotated[Optional[bool], Field(description="Filter featured products only")] = None,
    on_sale: Annotated[Optional[bool], Field(description="Filter on-sale products only")] = None,
    min_price: Annotated[Optional[str], Field(description="Minimum price filter")] = None,
    max_price: Annotated[Optional[str], Field(description="Maximum price filter")] = None,
    stock_status: Annotated[Optional[Literal["instock", "outofstock", "onbackorder"]], Field(description="Stock status filter")] = None,
    orderby: Annotated[Optional[str], Field(description="Sort by: date, id, title, slug, price, popularity, rating")] = None,
    order: Annotated[Optional[Literal["asc", "desc"]], Field(description="Sort order")] = None,
) -> Any:
    """List WooCommerce products, one ProductSummary per item."""
    params = compact({
        "page": page,
        "per_page": per_page,
        "search": search,
        "sku": sku,
        "slug": slug,
        "status": status,
        "category": category,
        "tag": tag,
        "type": type,
        "featured": featured,
        "on_sale": on_sale,
        "min_price": min_price,
        "max_price": max_price,
        "stock_status": stock_status,
        "orderby": orderby,
        "order": order,
    })
    log_to_file(f"Listing WooCommerce products with params: {params}")
    response = await make_wordpress_request("GET", PRODUCTS_PATH, params)
    return map_items(response, format_product_summary)


@tool_handler("getting WooCommerce product", PRODUCT_HINTS)
async def get_woo_product(id: Annotated[int, Field(description="Product ID")]) -> Any:
    log_to_file(f"Getting WooCommerce product ID: {id}")
    response = await make_wordpress_request("GET", f"{PRODUCTS_PATH}/{id}")
    return format_product_summary(response)


@tool_handler("getting product variations", PRODUCT_HINTS)
async def get_woo_product_variations(
    product_id: Annotated[int, Field(description="Parent product ID")],
    page: Page = None,
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Items per page (default 10)")] = None,
) -> Any:
    log_to_file(f"Getting variations for product ID: {product_id}")
    params = compact({"page": page, "per_page": per_page})
    response = await make_wordpress_request("GET", f"{PRODUCTS_PATH}/{product_id}/variations", params)
    variations = map_items(response, format_variation_summary)
    return {
        "product_id": product_id,
        "variations_count": count_items(variations),
        "variations": variations,
    }


@tool_handler("searching WooCommerce products", LIST_HINTS)
async def search_woo_products(
    search: Annotated[str, Field(description="Search term (matches name, SKU, description)")],
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Items per page (default 10)")] = None,
) -> Any:
    log_to_file(f'Searching WooCommerce products: "{search}"')
    params = {"search": search, "per_page": per_page or 10}
    response = await make_wordpress_request("GET", PRODUCTS_PATH, params)
    products = map_items(response, format_product_summary)
    return {
        "search_term": search,
        "results_count": count_items(products),
        "products": products,
    }


def get_tools() -> dict[str, Any]:
    return {
        "list_woo_products": {
            "func": list_woo_products,
            "title": "List WooCommerce products",
            "description": "List WooCommerce products with full product data including pricing (regular/sale price), SKU, stock status, meta_data (contains ACF custom fields like ingredients, volume, how_to_use), categories, tags, images, and attributes. Uses /wc/v3/products endpoint.",
        },
        "get_woo_product": {
            "func": get_woo_product,
            "title": "Get WooCommerce product",
            "description": "Get a single WooCommerce product by ID with ALL details: pricing, full description, SKU, stock, weight, dimensions, all meta_data (ACF fields), images, attributes, variations, ratings, and related products. Uses /wc/v3/products/{id} endpoint.",
        },
        "get_woo_product_variations": {
            "func": get_woo_product_variations,
            "title": "Get product variations",
            "description": "Get all variations for a variable WooCommerce product. Each variation includes its own price, SKU, stock status, attributes (size, color), weight, dimensions, and meta_data.",
        },
        "search_woo_products": {
            "func": search_woo_products,
            "title": "Search WooCommerce products",
            "description": "Search WooCommerce products by name, SKU, or description. Returns full product data with pricing, meta_data (ACF custom fields), stock, and all details.",
        },
    }
