from typing import Annotated, Any, Literal, Optional

from pydantic import Field

from core.log_sink import log_to_file  # type: ignore
from utils import compact, make_wordpress_request, tool_handler  # type: ignore
from utils.normalize import format_rendered, map_items  # type: ignore

MEDIA_FIELDS = ("id", "title", "slug", "media_type", "mime_type", "source_url", "alt_text", "date")
MEDIA_DETAIL_FIELDS = MEDIA_FIELDS + ("caption", "description", "media_details", "post")
RENDERED_FIELDS = ("title", "caption", "description")

PERMISSION_HINT = "Permission denied. Managing media requires the upload_files capability (author or higher)."
HINTS = {
    401: PERMISSION_HINT,
    403: PERMISSION_HINT,
    404: "Media item not found.",
}

MediaId = Annotated[int, Field(description="Attachment ID")]


def format_media(item: Any) -> Any:
    if not isinstance(item, dict):
        return item
    return format_rendered(item, MEDIA_FIELDS, RENDERED_FIELDS)


def format_media_detail(item: Any) -> Any:
    if not isinstance(item, dict):
        return item
    return format_rendered(item, MEDIA_DETAIL_FIELDS, RENDERED_FIELDS)


@tool_handler("listing media", HINTS)
async def list_media(
    page: Annotated[Optional[int], Field(ge=1, description="Page number (default 1)")] = None,
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Items per page (default 10, max 100)")] = None,
    search: Annotated[Optional[str], Field(description="Search term")] = None,
    media_type: Annotated[
        Optional[Literal["image", "video", "text", "application", "audio"]],
        Field(description="Media type filter"),
    ] = None,
    mime_type: Annotated[Optional[str], Field(description="MIME type filter, e.g. image/png")] = None,
    parent: Annotated[Optional[int], Field(description="Only media attached to this post ID")] = None,
) -> Any:
    params = compact({
        "page": page,
        "per_page": per_page,
        "search": search,
        "media_type": media_type,
        "mime_type": mime_type,
        "parent": parent,
    })
    log_to_file(f"Listing media with params: {params}")
    response = await make_wordpress_request("GET", "wp/v2/media", params)
    return map_items(response, format_media)


@tool_handler("getting media", HINTS)
async def get_media(id: MediaId) -> Any:
    log_to_file(f"Getting media ID: {id}")
    response = await make_wordpress_request("GET", f"wp/v2/media/{id}")
    return format_media_detail(response)


@tool_handler("updating media", HINTS)
async def update_media(
    id: MediaId,
    title: Annotated[Optional[str], Field(description="New title")] = None,
    alt_text: Annotated[Optional[str], Field(description="New alternative text")] = None,
    caption: Annotated[Optional[str], Field(description="New caption")] = None,
    description: Annotated[Optional[str], Field(description="New description")] = None,
) -> Any:
    body = compact({"title": title, "alt_text": alt_text, "caption": caption, "description": description})
    log_to_file(f"Updating media ID: {id}")
    response = await make_wordpress_request("POST", f"wp/v2/media/{id}", body)
    return format_media_detail(response)


@tool_handler("deleting media", HINTS)
async def delete_media(id: MediaId) -> Any:
    log_to_file(f"Deleting media ID: {id}")
    # attachments do not support trashing
    response = await make_wordpress_request("DELETE", f"wp/v2/media/{id}", {"force": True})
    if isinstance(response, dict) and "previous" in response:
        return {"deleted": response.get("deleted"), "previous": format_media(response["previous"])}
    return response


def get_tools() -> dict[str, Any]:
    return {
        "list_media": {"func": list_media, "title": "List media", "description": "List media library items with optional type and search filters."},
        "get_media": {"func": get_media, "title": "Get media", "description": "Get a media item by ID including caption, description and size details."},
        "update_media": {"func": update_media, "title": "Update media", "description": "Update a media item's title, alt text, caption or description."},
        "delete_media": {"func": delete_media, "title": "Delete media", "description": "Permanently delete a media item."},
    }
