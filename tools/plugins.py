from typing import Annotated, Any, Literal, Optional

from pydantic import Field

from core.log_sink import log_to_file  # type: ignore
from utils import compact, make_wordpress_request, tool_handler  # type: ignore
from utils.normalize import format_rendered, map_items  # type: ignore

PLUGIN_FIELDS = ("plugin", "name", "status", "version", "author", "description", "network_only", "requires_wp", "requires_php")

PERMISSION_HINT = "Permission denied. Managing plugins requires the activate_plugins capability (administrator)."
HINTS = {
    401: PERMISSION_HINT,
    403: PERMISSION_HINT,
    404: "Plugin not found. Use the plugin file without .php, e.g. 'akismet/akismet', and check it is installed.",
}

PluginName = Annotated[str, Field(description="Plugin identifier: '<folder>/<main file without .php>', e.g. 'akismet/akismet'")]


def format_plugin(plugin: Any) -> Any:
    if not isinstance(plugin, dict):
        return plugin
    return format_rendered(plugin, PLUGIN_FIELDS, ("description",))


@tool_handler("listing plugins", HINTS)
async def list_plugins(
    status: Annotated[Optional[Literal["active", "inactive"]], Field(description="Only active or inactive plugins")] = None,
    search: Annotated[Optional[str], Field(description="Search term")] = None,
) -> Any:
    params = compact({"status": status, "search": search})
    log_to_file(f"Listing plugins with params: {params}")
    response = await make_wordpress_request("GET", "wp/v2/plugins", params)
    return map_items(response, format_plugin)


@tool_handler("getting plugin", HINTS)
async def get_plugin(plugin: PluginName) -> Any:
    log_to_file(f"Getting plugin: {plugin}")
    response = await make_wordpress_request("GET", f"wp/v2/plugins/{plugin}")
    return format_plugin(response)


async def _set_status(plugin: str, status: str) -> Any:
    log_to_file(f"Setting plugin {plugin} status to {status}")
    response = await make_wordpress_request("POST", f"wp/v2/plugins/{plugin}", {"status": status})
    return format_plugin(response)


@tool_handler("activating plugin", HINTS)
async def activate_plugin(plugin: PluginName) -> Any:
    return await _set_status(plugin, "active")


@tool_handler("deactivating plugin", HINTS)
async def deactivate_plugin(plugin: PluginName) -> Any:
    return await _set_status(plugin, "inactive")


def get_tools() -> dict[str, Any]:
    return {
        "list_plugins": {"func": list_plugins, "title": "List plugins", "description": "List installed plugins with their status and version."},
        "get_plugin": {"func": get_plugin, "title": "Get plugin", "description": "Get details for one installed plugin."},
        "activate_plugin": {"func": activate_plugin, "title": "Activate plugin", "description": "Activate an installed plugin."},
        "deactivate_plugin": {"func": deactivate_plugin, "title": "Deactivate plugin", "description": "Deactivate an active plugin."},
    }
