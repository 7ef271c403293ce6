"""Advanced Custom Fields tools.

Two integration styles exist in the wild and they are not interchangeable,
so exactly one serves the tool names below, picked by `acf.backend`:

- ``rest`` (default): the standard /wp/v2/ content endpoints with the
  ``acf`` blob that ACF adds when a field group has "Show in REST API" on.
- ``acf_v3``: the dedicated /acf/v3/ namespace from the "ACF to REST API"
  plugin, which updates with PUT.

`get_acf_options` always uses /acf/v3/options; options pages have no route
in the standard API.
"""
from typing import Annotated, Any, Optional

from pydantic import Field

from core.config import get_config  # type: ignore
from core.errors import ConfigurationError, MissingFieldError  # type: ignore
from core.log_sink import log_to_file  # type: ignore
from utils import make_wordpress_request, rest_base, tool_handler  # type: ignore
from utils.envelope import MISSING_FIELD  # type: ignore
from utils.normalize import count_items, map_items, unwrap_rendered  # type: ignore

DEFAULT_BACKEND = "rest"

MISSING_ACF_HINT = (
    "The response has no 'acf' field. In ACF, open the field group settings and enable "
    "'Show in REST API' (ACF 5.11+), or set acf.backend to 'acf_v3' if the ACF to REST API plugin is installed."
)

GET_HINTS = {
    404: (
        "ACF REST API endpoint not found. Possible causes:\n"
        "1. ACF plugin is not installed or activated\n"
        "2. ACF REST API is not enabled (ACF → Settings → Enable REST API)\n"
        "3. The content type or ID does not exist"
    ),
    401: "Authentication/permission error. Ensure the WordPress user has permission to read ACF fields.",
    403: "Authentication/permission error. Ensure the WordPress user has permission to read ACF fields.",
    MISSING_FIELD: MISSING_ACF_HINT,
}
UPDATE_HINTS = {
    404: "ACF REST API endpoint not found. Ensure ACF plugin is installed and REST API is enabled.",
    401: "Permission denied. Ensure the WordPress user has edit permissions for this content.",
    403: "Permission denied. Ensure the WordPress user has edit permissions for this content.",
    MISSING_FIELD: MISSING_ACF_HINT,
}
LIST_HINTS = {
    404: "Content type not found. Check the slug and that it is registered with show_in_rest.",
    401: "Authentication/permission error. Ensure the WordPress user has permission to read ACF fields.",
    403: "Authentication/permission error. Ensure the WordPress user has permission to read ACF fields.",
    MISSING_FIELD: MISSING_ACF_HINT,
}
OPTIONS_HINTS = {
    404: (
        "ACF Options page REST endpoint not found. Ensure:\n"
        "1. ACF Pro is installed (Options pages require ACF Pro)\n"
        "2. Options page has been registered\n"
        "3. ACF REST API is enabled"
    ),
}


class RestAcfBackend:
    """ACF values read from and written to the standard /wp/v2/ endpoints."""

    name = "rest"
    update_method = "POST"
    list_fields = "id,title,slug,acf"

    def item_path(self, content_type: str, content_id: int) -> str:
        return f"wp/v2/{rest_base(content_type)}/{content_id}"

    def collection_path(self, content_type: str) -> str:
        return f"wp/v2/{rest_base(content_type)}"

    def list_params(self, page: int, per_page: int) -> dict[str, Any]:
        return {"per_page": per_page, "page": page, "_fields": self.list_fields}

    def extract(self, response: Any) -> Any:
        if not isinstance(response, dict) or "acf" not in response:
            raise MissingFieldError("acf", response)
        return response["acf"]

    def format_item(self, item: Any) -> Any:
        if not isinstance(item, dict):
            return item
        return {
            "id": item.get("id"),
            "title": unwrap_rendered(item.get("title")),
            "slug": item.get("slug"),
            "acf": item.get("acf"),
        }


class AcfV3Backend:
    """ACF values served by the /acf/v3/ namespace."""

    name = "acf_v3"
    update_method = "PUT"

    def item_path(self, content_type: str, content_id: int) -> str:
        return f"acf/v3/{rest_base(content_type)}/{content_id}"

    def collection_path(self, content_type: str) -> str:
        return f"acf/v3/{rest_base(content_type)}"

    def list_params(self, page: int, per_page: int) -> dict[str, Any]:
        return {"per_page": per_page, "page": page}

    def extract(self, response: Any) -> Any:
        if isinstance(response, dict) and response.get("acf"):
            return response["acf"]
        return response

    def format_item(self, item: Any) -> Any:
        if not isinstance(item, dict):
            return item
        return {"id": item.get("id"), "acf": item.get("acf") or item}


BACKENDS = {backend.name: backend for backend in (RestAcfBackend(), AcfV3Backend())}


def get_backend(name: Optional[str] = None):
    if name is None:
        name = ((get_config() or {}).get("acf") or {}).get("backend") or DEFAULT_BACKEND
    try:
        return BACKENDS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown acf.backend '{name}'; expected one of: {', '.join(sorted(BACKENDS))}"
        ) from None


ContentType = Annotated[str, Field(description="Content type slug (e.g., 'post', 'page', 'product', 'documentation')")]


@tool_handler("getting ACF fields", GET_HINTS)
async def get_acf_fields(
    content_type: ContentType,
    id: Annotated[int, Field(description="Content ID to get ACF fields for")],
) -> Any:
    backend = get_backend()
    log_to_file(f"Getting ACF fields for {content_type} ID: {id} ({backend.name})")
    response = await make_wordpress_request("GET", backend.item_path(content_type, id))
    return {
        "content_type": content_type,
        "content_id": id,
        "acf_fields": backend.extract(response),
    }


@tool_handler("updating ACF fields", UPDATE_HINTS)
async def update_acf_fields(
    content_type: ContentType,
    id: Annotated[int, Field(description="Content ID to update ACF fields for")],
    fields: Annotated[
        dict[str, Any],
        Field(description="ACF field values as key-value pairs (e.g., { ingredients: 'Water, Glycerin...', volume: '100ml', price_krw: 35000 })"),
    ],
) -> Any:
    backend = get_backend()
    log_to_file(f"Updating ACF fields for {content_type} ID: {id} ({backend.name})")
    log_to_file(f"Fields: {fields}")
    response = await make_wordpress_request(backend.update_method, backend.item_path(content_type, id), {"acf": fields})
    return {
        "content_type": content_type,
        "content_id": id,
        "updated": True,
        "acf_fields": backend.extract(response),
    }


@tool_handler("getting ACF options", OPTIONS_HINTS)
async def get_acf_options(
    field_name: Annotated[
        Optional[str],
        Field(description="Specific ACF options field name to retrieve. If omitted, returns all options page fields."),
    ] = None,
) -> Any:
    endpoint = f"acf/v3/options/{field_name}" if field_name else "acf/v3/options"
    log_to_file(f"Getting ACF options: {endpoint}")
    response = await make_wordpress_request("GET", endpoint)
    options = response.get("acf") if isinstance(response, dict) and response.get("acf") else response
    return {
        "field_name": field_name or "(all options)",
        "options": options,
    }


@tool_handler("listing ACF content fields", LIST_HINTS)
async def list_acf_content_fields(
    content_type: ContentType,
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Number of items to fetch (default 10)")] = None,
    page: Annotated[Optional[int], Field(ge=1, description="Page number (default 1)")] = None,
) -> Any:
    backend = get_backend()
    page = page or 1
    per_page = per_page or 10
    log_to_file(f"Listing ACF fields for {content_type} (page {page}, per_page {per_page})")
    response = await make_wordpress_request("GET", backend.collection_path(content_type), backend.list_params(page, per_page))
    items = map_items(response, backend.format_item)
    return {
        "content_type": content_type,
        "page": page,
        "per_page": per_page,
        "items_count": count_items(items),
        "items": items,
    }


def get_tools() -> dict[str, Any]:
    return {
        "get_acf_fields": {
            "func": get_acf_fields,
            "title": "Get ACF fields",
            "description": "Get all ACF (Advanced Custom Fields) field values for a specific post, page, or custom post type. Returns fields like ingredients, volume, how_to_use, price_krw, etc.",
        },
        "update_acf_fields": {
            "func": update_acf_fields,
            "title": "Update ACF fields",
            "description": "Update ACF field values for a specific post, page, or custom post type. Pass field names and values as key-value pairs.",
        },
        "get_acf_options": {
            "func": get_acf_options,
            "title": "Get ACF options",
            "description": "Get ACF Options page field values. Options pages store global settings (e.g., site-wide pricing rules). Uses /acf/v3/options/{field_name} or /acf/v3/options for all fields.",
        },
        "list_acf_content_fields": {
            "func": list_acf_content_fields,
            "title": "List ACF content fields",
            "description": "List ACF field values for multiple items of a content type at once. Useful for bulk scanning all products' ACF fields (ingredients, volume, etc.). Returns ACF data for each item.",
        },
    }
