from typing import Annotated, Any, Literal, Optional

from pydantic import Field

from core.log_sink import log_to_file  # type: ignore
from utils import compact, make_wordpress_request, taxonomy_base, tool_handler  # type: ignore
from utils.normalize import map_items, project, summarize_registry  # type: ignore

TERM_FIELDS = ("id", "name", "slug", "count", "parent", "description", "taxonomy", "link")
TAXONOMY_FIELDS = ("name", "rest_base", "types", "hierarchical")

PERMISSION_HINT = "Permission denied. Managing terms requires the manage_categories capability (editor or administrator)."
HINTS = {
    401: PERMISSION_HINT,
    403: PERMISSION_HINT,
    404: "Taxonomy or term not found. Check the taxonomy is registered with show_in_rest.",
}

Taxonomy = Annotated[str, Field(description="Taxonomy slug: 'category', 'post_tag' or a custom taxonomy REST base")]
TermId = Annotated[int, Field(description="Term ID")]


def format_term(term: Any) -> Any:
    if not isinstance(term, dict):
        return term
    return project(term, TERM_FIELDS)


@tool_handler("listing taxonomies", HINTS)
async def list_taxonomies(
    type: Annotated[Optional[str], Field(description="Only taxonomies attached to this post type")] = None,
) -> Any:
    log_to_file(f"Listing taxonomies (type={type})")
    response = await make_wordpress_request("GET", "wp/v2/taxonomies", compact({"type": type}))
    return summarize_registry(response, TAXONOMY_FIELDS)


@tool_handler("listing terms", HINTS)
async def list_terms(
    taxonomy: Taxonomy,
    page: Annotated[Optional[int], Field(ge=1, description="Page number (default 1)")] = None,
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Items per page (default 10, max 100)")] = None,
    search: Annotated[Optional[str], Field(description="Search term")] = None,
    parent: Annotated[Optional[int], Field(description="Parent term ID (hierarchical taxonomies)")] = None,
    post: Annotated[Optional[int], Field(description="Only terms assigned to this post")] = None,
    hide_empty: Annotated[Optional[bool], Field(description="Hide terms not assigned to any content")] = None,
    orderby: Annotated[Optional[str], Field(description="Sort by: id, name, slug, count")] = None,
    order: Annotated[Optional[Literal["asc", "desc"]], Field(description="Sort order")] = None,
) -> Any:
    params = compact({
        "page": page,
        "per_page": per_page,
        "search": search,
        "parent": parent,
        "post": post,
        "hide_empty": hide_empty,
        "orderby": orderby,
        "order": order,
    })
    log_to_file(f"Listing {taxonomy} terms with params: {params}")
    response = await make_wordpress_request("GET", f"wp/v2/{taxonomy_base(taxonomy)}", params)
    return map_items(response, format_term)


@tool_handler("getting term", HINTS)
async def get_term(taxonomy: Taxonomy, id: TermId) -> Any:
    log_to_file(f"Getting {taxonomy} term ID: {id}")
    response = await make_wordpress_request("GET", f"wp/v2/{taxonomy_base(taxonomy)}/{id}")
    return format_term(response)


@tool_handler("creating term", HINTS)
async def create_term(
    taxonomy: Taxonomy,
    name: Annotated[str, Field(description="Term name")],
    slug: Annotated[Optional[str], Field(description="Term slug")] = None,
    description: Annotated[Optional[str], Field(description="Term description")] = None,
    parent: Annotated[Optional[int], Field(description="Parent term ID")] = None,
) -> Any:
    body = compact({"name": name, "slug": slug, "description": description, "parent": parent})
    log_to_file(f"Creating {taxonomy} term: {name}")
    response = await make_wordpress_request("POST", f"wp/v2/{taxonomy_base(taxonomy)}", body)
    return format_term(response)


@tool_handler("updating term", HINTS)
async def update_term(
    taxonomy: Taxonomy,
    id: TermId,
    name: Annotated[Optional[str], Field(description="New name")] = None,
    slug: Annotated[Optional[str], Field(description="New slug")] = None,
    description: Annotated[Optional[str], Field(description="New description")] = None,
    parent: Annotated[Optional[int], Field(description="New parent term ID")] = None,
) -> Any:
    body = compact({"name": name, "slug": slug, "description": description, "parent": parent})
    log_to_file(f"Updating {taxonomy} term ID: {id}")
    response = await make_wordpress_request("POST", f"wp/v2/{taxonomy_base(taxonomy)}/{id}", body)
    return format_term(response)


@tool_handler("deleting term", HINTS)
async def delete_term(taxonomy: Taxonomy, id: TermId) -> Any:
    log_to_file(f"Deleting {taxonomy} term ID: {id}")
    # terms cannot be trashed
    response = await make_wordpress_request("DELETE", f"wp/v2/{taxonomy_base(taxonomy)}/{id}", {"force": True})
    if isinstance(response, dict) and "previous" in response:
        return {"deleted": response.get("deleted"), "previous": format_term(response["previous"])}
    return response


def get_tools() -> dict[str, Any]:
    return {
        "list_taxonomies": {"func": list_taxonomies, "title": "List taxonomies", "description": "List registered taxonomies (slug, name, REST base, attached post types)."},
        "list_terms": {"func": list_terms, "title": "List terms", "description": "List terms of a taxonomy (categories, tags or custom taxonomies) with optional filters."},
        "get_term": {"func": get_term, "title": "Get term", "description": "Get a single taxonomy term by ID."},
        "create_term": {"func": create_term, "title": "Create term", "description": "Create a term in a taxonomy."},
        "update_term": {"func": update_term, "title": "Update term", "description": "Update a term's name, slug, description or parent."},
        "delete_term": {"func": delete_term, "title": "Delete term", "description": "Permanently delete a term."},
    }
