from typing import Annotated, Any, Literal, Optional

from pydantic import Field

from core.log_sink import log_to_file  # type: ignore
from utils import compact, make_wordpress_request, tool_handler  # type: ignore
from utils.normalize import map_items, project  # type: ignore

USER_FIELDS = ("id", "name", "slug", "link", "description", "roles")
# only returned with context=edit
ACCOUNT_FIELDS = USER_FIELDS + ("username", "email", "registered_date", "capabilities")

READ_HINT = "Permission denied. Listing users with roles requires the list_users capability (administrator)."
HINTS = {
    401: READ_HINT,
    403: READ_HINT,
    404: "User not found.",
}
WRITE_HINTS = {
    401: "Permission denied. Creating or deleting users requires the create_users/delete_users capability (administrator).",
    403: "Permission denied. Creating or deleting users requires the create_users/delete_users capability (administrator).",
    404: "User not found.",
}
ME_HINTS = {
    401: "Not authenticated. Set WORDPRESS_USERNAME and WORDPRESS_PASSWORD (an application password) for the site.",
}


def format_user(user: Any, fields=USER_FIELDS) -> Any:
    if not isinstance(user, dict):
        return user
    return project(user, fields)


@tool_handler("listing users", HINTS)
async def list_users(
    page: Annotated[Optional[int], Field(ge=1, description="Page number (default 1)")] = None,
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Items per page (default 10, max 100)")] = None,
    search: Annotated[Optional[str], Field(description="Search term")] = None,
    roles: Annotated[Optional[str], Field(description="Role slugs (comma-separated), e.g. administrator,editor")] = None,
    orderby: Annotated[Optional[str], Field(description="Sort by: id, name, registered_date, email")] = None,
    order: Annotated[Optional[Literal["asc", "desc"]], Field(description="Sort order")] = None,
) -> Any:
    params = compact({
        "page": page,
        "per_page": per_page,
        "search": search,
        "roles": roles,
        "orderby": orderby,
        "order": order,
    })
    log_to_file(f"Listing users with params: {params}")
    response = await make_wordpress_request("GET", "wp/v2/users", params)
    return map_items(response, format_user)


@tool_handler("getting user", HINTS)
async def get_user(id: Annotated[int, Field(description="User ID")]) -> Any:
    log_to_file(f"Getting user ID: {id}")
    response = await make_wordpress_request("GET", f"wp/v2/users/{id}")
    return format_user(response)


@tool_handler("getting current user", ME_HINTS)
async def get_current_user() -> Any:
    log_to_file("Getting current user")
    response = await make_wordpress_request("GET", "wp/v2/users/me", {"context": "edit"})
    return format_user(response, ACCOUNT_FIELDS)


@tool_handler("creating user", WRITE_HINTS)
async def create_user(
    username: Annotated[str, Field(description="Login name")],
    email: Annotated[str, Field(description="Email address")],
    password: Annotated[str, Field(description="Password")],
    name: Annotated[Optional[str], Field(description="Display name")] = None,
    roles: Annotated[Optional[list[str]], Field(description="Roles to assign, e.g. ['editor']")] = None,
) -> Any:
    body = compact({"username": username, "email": email, "password": password, "name": name, "roles": roles})
    log_to_file(f"Creating user: {username}")
    response = await make_wordpress_request("POST", "wp/v2/users", body)
    return format_user(response, ACCOUNT_FIELDS)


@tool_handler("deleting user", WRITE_HINTS)
async def delete_user(
    id: Annotated[int, Field(description="User ID")],
    reassign: Annotated[int, Field(description="User ID that receives the deleted user's content")],
) -> Any:
    log_to_file(f"Deleting user ID: {id} (reassign to {reassign})")
    # users cannot be trashed, and WordPress insists on reassign
    response = await make_wordpress_request("DELETE", f"wp/v2/users/{id}", {"force": True, "reassign": reassign})
    if isinstance(response, dict) and "previous" in response:
        return {"deleted": response.get("deleted"), "previous": format_user(response["previous"])}
    return response


def get_tools() -> dict[str, Any]:
    return {
        "list_users": {"func": list_users, "title": "List users", "description": "List WordPress users with optional search and role filters."},
        "get_user": {"func": get_user, "title": "Get user", "description": "Get a single user by ID."},
        "get_current_user": {"func": get_current_user, "title": "Get current user", "description": "Get the account the server is authenticated as, including roles and capabilities."},
        "create_user": {"func": create_user, "title": "Create user", "description": "Create a WordPress user."},
        "delete_user": {"func": delete_user, "title": "Delete user", "description": "Delete a user permanently, reassigning their content to another user."},
    }
