"""Search and describe plugins in the public WordPress.org plugin directory.

These tools read api.wordpress.org rather than the configured site, so no
site credentials are sent.
"""
from typing import Annotated, Any, Optional

from pydantic import Field

from core.log_sink import log_to_file  # type: ignore
from utils import make_external_request, tool_handler  # type: ignore
from utils.normalize import count_items, map_items, project  # type: ignore

REPOSITORY_URL = "https://api.wordpress.org/plugins/info/1.2/"

SEARCH_FIELDS = (
    "name", "slug", "version", "author", "rating", "num_ratings", "active_installs",
    "requires", "tested", "requires_php", "last_updated", "short_description", "homepage",
)
INFO_FIELDS = (
    "name", "slug", "version", "author", "author_profile", "rating", "num_ratings", "active_installs",
    "downloaded", "requires", "tested", "requires_php", "last_updated", "added", "homepage",
    "download_link", "tags", "versions",
)

HINTS = {
    404: "Plugin not found in the WordPress.org directory. Check the slug, e.g. 'woocommerce' or 'advanced-custom-fields'.",
}


def format_listing(plugin: Any) -> Any:
    if not isinstance(plugin, dict):
        return plugin
    return project(plugin, SEARCH_FIELDS)


def format_info(plugin: Any) -> Any:
    if not isinstance(plugin, dict):
        return plugin
    info = project(plugin, INFO_FIELDS)
    # release history keyed by version; only the version list is useful here
    if isinstance(info["versions"], dict):
        info["versions"] = list(info["versions"])
    sections = plugin.get("sections")
    info["description"] = sections.get("description") if isinstance(sections, dict) else None
    return info


@tool_handler("searching plugin repository", HINTS)
async def search_plugin_repository(
    search: Annotated[str, Field(min_length=1, description="Search term, e.g. 'seo' or 'custom fields'")],
    page: Annotated[Optional[int], Field(ge=1, description="Page number (default 1)")] = None,
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Results per page (default 10, max 100)")] = None,
) -> Any:
    page = page or 1
    per_page = per_page or 10
    params = {
        "action": "query_plugins",
        "request[search]": search,
        "request[page]": page,
        "request[per_page]": per_page,
    }
    log_to_file(f'Searching plugin repository: "{search}" (page {page}, per_page {per_page})')
    response = await make_external_request(REPOSITORY_URL, params)
    if not isinstance(response, dict):
        return response
    info = response.get("info") if isinstance(response.get("info"), dict) else {}
    plugins = map_items(response.get("plugins"), format_listing)
    return {
        "search_term": search,
        "page": info.get("page", page),
        "pages": info.get("pages"),
        "total_results": info.get("results"),
        "results_count": count_items(plugins),
        "plugins": plugins,
    }


@tool_handler("getting plugin repository info", HINTS)
async def get_plugin_repository_info(
    slug: Annotated[str, Field(min_length=1, description="Plugin slug in the WordPress.org directory, e.g. 'akismet'")],
) -> Any:
    log_to_file(f"Getting plugin repository info: {slug}")
    params = {"action": "plugin_information", "request[slug]": slug}
    response = await make_external_request(REPOSITORY_URL, params)
    return format_info(response)


def get_tools() -> dict[str, Any]:
    return {
        "search_plugin_repository": {
            "func": search_plugin_repository,
            "title": "Search plugin repository",
            "description": "Search the WordPress.org plugin directory. Returns name, slug, version, rating, active installs and compatibility (requires/tested/requires_php) for each match.",
        },
        "get_plugin_repository_info": {
            "func": get_plugin_repository_info,
            "title": "Get plugin repository info",
            "description": "Get WordPress.org directory details for one plugin by slug: latest version, compatibility, ratings, download link, tags, released versions and description.",
        },
    }
