from typing import Annotated, Any, Literal, Optional

from pydantic import Field

from core.log_sink import log_to_file  # type: ignore
from utils import compact, make_wordpress_request, rest_base, tool_handler  # type: ignore
from utils.normalize import format_rendered, map_items, summarize_registry  # type: ignore

SUMMARY_FIELDS = ("id", "title", "slug", "status", "type", "link", "date", "modified", "author")
DETAIL_FIELDS = SUMMARY_FIELDS + (
    "excerpt", "content", "featured_media", "parent", "categories", "tags", "meta", "acf",
)
RENDERED_FIELDS = ("title", "excerpt", "content")
TYPE_FIELDS = ("name", "rest_base", "hierarchical")

PERMISSION_HINT = (
    "Permission denied. Ensure the WordPress user has an author/editor role "
    "(or higher) and that the application password is valid."
)
HINTS = {
    401: PERMISSION_HINT,
    403: PERMISSION_HINT,
    404: "Content not found. Check the ID, and that the content type is registered with show_in_rest.",
}

ContentType = Annotated[str, Field(description="Content type slug: 'post', 'page' or a custom post type REST base")]
ContentId = Annotated[int, Field(description="Content ID")]
Status = Literal["publish", "future", "draft", "pending", "private"]


def format_summary(item: Any) -> Any:
    if not isinstance(item, dict):
        return item
    return format_rendered(item, SUMMARY_FIELDS, RENDERED_FIELDS)


def format_detail(item: Any) -> Any:
    if not isinstance(item, dict):
        return item
    return format_rendered(item, DETAIL_FIELDS, RENDERED_FIELDS)


@tool_handler("listing content types", HINTS)
async def list_content_types() -> Any:
    log_to_file("Listing content types")
    response = await make_wordpress_request("GET", "wp/v2/types")
    return summarize_registry(response, TYPE_FIELDS)


@tool_handler("listing content", HINTS)
async def list_content(
    content_type: ContentType,
    page: Annotated[Optional[int], Field(ge=1, description="Page number (default 1)")] = None,
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Items per page (default 10, max 100)")] = None,
    search: Annotated[Optional[str], Field(description="Search term")] = None,
    status: Annotated[Optional[str], Field(description="Status filter, e.g. publish, draft (comma-separated for multiple)")] = None,
    author: Annotated[Optional[int], Field(description="Author user ID")] = None,
    orderby: Annotated[Optional[str], Field(description="Sort by: date, id, title, slug, modified")] = None,
    order: Annotated[Optional[Literal["asc", "desc"]], Field(description="Sort order")] = None,
    categories: Annotated[Optional[str], Field(description="Category IDs (comma-separated)")] = None,
    tags: Annotated[Optional[str], Field(description="Tag IDs (comma-separated)")] = None,
) -> Any:
    params = compact({
        "page": page,
        "per_page": per_page,
        "search": search,
        "status": status,
        "author": author,
        "orderby": orderby,
        "order": order,
        "categories": categories,
        "tags": tags,
    })
    log_to_file(f"Listing {content_type} with params: {params}")
    response = await make_wordpress_request("GET", f"wp/v2/{rest_base(content_type)}", params)
    return map_items(response, format_summary)


@tool_handler("getting content", HINTS)
async def get_content(content_type: ContentType, id: ContentId) -> Any:
    log_to_file(f"Getting {content_type} ID: {id}")
    response = await make_wordpress_request("GET", f"wp/v2/{rest_base(content_type)}/{id}")
    return format_detail(response)


@tool_handler("creating content", HINTS)
async def create_content(
    content_type: ContentType,
    title: Annotated[str, Field(description="Title")],
    content: Annotated[Optional[str], Field(description="Body (HTML or block markup)")] = None,
    status: Annotated[Optional[Status], Field(description="Status (WordPress default: draft)")] = None,
    excerpt: Annotated[Optional[str], Field(description="Excerpt")] = None,
    slug: Annotated[Optional[str], Field(description="URL slug")] = None,
    parent: Annotated[Optional[int], Field(description="Parent ID for hierarchical types")] = None,
    meta: Annotated[Optional[dict[str, Any]], Field(description="Registered meta fields as key-value pairs")] = None,
) -> Any:
    body = compact({
        "title": title,
        "content": content,
        "status": status,
        "excerpt": excerpt,
        "slug": slug,
        "parent": parent,
        "meta": meta,
    })
    log_to_file(f"Creating {content_type}: {title}")
    response = await make_wordpress_request("POST", f"wp/v2/{rest_base(content_type)}", body)
    return format_detail(response)


@tool_handler("updating content", HINTS)
async def update_content(
    content_type: ContentType,
    id: ContentId,
    title: Annotated[Optional[str], Field(description="New title")] = None,
    content: Annotated[Optional[str], Field(description="New body")] = None,
    status: Annotated[Optional[Status], Field(description="New status")] = None,
    excerpt: Annotated[Optional[str], Field(description="New excerpt")] = None,
    slug: Annotated[Optional[str], Field(description="New slug")] = None,
    meta: Annotated[Optional[dict[str, Any]], Field(description="Registered meta fields to change")] = None,
) -> Any:
    body = compact({
        "title": title,
        "content": content,
        "status": status,
        "excerpt": excerpt,
        "slug": slug,
        "meta": meta,
    })
    log_to_file(f"Updating {content_type} ID: {id} fields: {sorted(body)}")
    response = await make_wordpress_request("POST", f"wp/v2/{rest_base(content_type)}/{id}", body)
    return format_detail(response)


@tool_handler("deleting content", HINTS)
async def delete_content(
    content_type: ContentType,
    id: ContentId,
    force: Annotated[Optional[bool], Field(description="Bypass trash and delete permanently")] = None,
) -> Any:
    log_to_file(f"Deleting {content_type} ID: {id} (force={force})")
    response = await make_wordpress_request("DELETE", f"wp/v2/{rest_base(content_type)}/{id}", compact({"force": force}))
    # force=true answers {"deleted": true, "previous": {...}}; trashing returns the item
    if isinstance(response, dict) and "previous" in response:
        return {"deleted": response.get("deleted"), "previous": format_detail(response["previous"])}
    return format_detail(response)


def get_tools() -> dict[str, Any]:
    return {
        "list_content_types": {"func": list_content_types, "title": "List content types", "description": "List registered post types (slug, name, REST base) available through the REST API."},
        "list_content": {"func": list_content, "title": "List content", "description": "List posts, pages or custom post type items with optional filters. Returns id, title, slug, status, link and dates for each item."},
        "get_content": {"func": get_content, "title": "Get content", "description": "Get a single post, page or custom post type item by ID, including rendered content, excerpt, meta and ACF fields when exposed."},
        "create_content": {"func": create_content, "title": "Create content", "description": "Create a post, page or custom post type item."},
        "update_content": {"func": update_content, "title": "Update content", "description": "Update fields of an existing post, page or custom post type item. Only the provided fields are sent."},
        "delete_content": {"func": delete_content, "title": "Delete content", "description": "Move an item to the trash, or delete it permanently with force=true."},
    }
