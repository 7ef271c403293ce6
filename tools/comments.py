from typing import Annotated, Any, Literal, Optional

from pydantic import Field

from core.log_sink import log_to_file  # type: ignore
from utils import compact, make_wordpress_request, tool_handler  # type: ignore
from utils.normalize import format_rendered, map_items  # type: ignore

COMMENT_FIELDS = ("id", "post", "parent", "author", "author_name", "date", "status", "content", "link")

PERMISSION_HINT = "Permission denied. Managing comments requires the moderate_comments capability (editor or administrator)."
HINTS = {
    401: PERMISSION_HINT,
    403: PERMISSION_HINT,
    404: "Comment or post not found.",
}

CommentId = Annotated[int, Field(description="Comment ID")]


def format_comment(comment: Any) -> Any:
    if not isinstance(comment, dict):
        return comment
    return format_rendered(comment, COMMENT_FIELDS, ("content",))


@tool_handler("listing comments", HINTS)
async def list_comments(
    post: Annotated[Optional[int], Field(description="Only comments on this post ID")] = None,
    status: Annotated[Optional[str], Field(description="Comment status: approve, hold, spam, trash")] = None,
    page: Annotated[Optional[int], Field(ge=1, description="Page number (default 1)")] = None,
    per_page: Annotated[Optional[int], Field(ge=1, le=100, description="Items per page (default 10, max 100)")] = None,
    search: Annotated[Optional[str], Field(description="Search term")] = None,
    author: Annotated[Optional[int], Field(description="Author user ID")] = None,
    order: Annotated[Optional[Literal["asc", "desc"]], Field(description="Sort order")] = None,
) -> Any:
    params = compact({
        "post": post,
        "status": status,
        "page": page,
        "per_page": per_page,
        "search": search,
        "author": author,
        "order": order,
    })
    log_to_file(f"Listing comments with params: {params}")
    response = await make_wordpress_request("GET", "wp/v2/comments", params)
    return map_items(response, format_comment)


@tool_handler("getting comment", HINTS)
async def get_comment(id: CommentId) -> Any:
    log_to_file(f"Getting comment ID: {id}")
    response = await make_wordpress_request("GET", f"wp/v2/comments/{id}")
    return format_comment(response)


@tool_handler("creating comment", HINTS)
async def create_comment(
    post: Annotated[int, Field(description="Post ID to comment on")],
    content: Annotated[str, Field(description="Comment text")],
    author_name: Annotated[Optional[str], Field(description="Display name for the author")] = None,
    author_email: Annotated[Optional[str], Field(description="Author email")] = None,
    parent: Annotated[Optional[int], Field(description="Parent comment ID for replies")] = None,
) -> Any:
    body = compact({
        "post": post,
        "content": content,
        "author_name": author_name,
        "author_email": author_email,
        "parent": parent,
    })
    log_to_file(f"Creating comment on post ID: {post}")
    response = await make_wordpress_request("POST", "wp/v2/comments", body)
    return format_comment(response)


@tool_handler("updating comment", HINTS)
async def update_comment(
    id: CommentId,
    content: Annotated[Optional[str], Field(description="New comment text")] = None,
    status: Annotated[Optional[Literal["approved", "hold", "spam", "trash"]], Field(description="New status")] = None,
) -> Any:
    body = compact({"content": content, "status": status})
    log_to_file(f"Updating comment ID: {id}")
    response = await make_wordpress_request("POST", f"wp/v2/comments/{id}", body)
    return format_comment(response)


@tool_handler("deleting comment", HINTS)
async def delete_comment(
    id: CommentId,
    force: Annotated[Optional[bool], Field(description="Bypass trash and delete permanently")] = None,
) -> Any:
    log_to_file(f"Deleting comment ID: {id} (force={force})")
    response = await make_wordpress_request("DELETE", f"wp/v2/comments/{id}", compact({"force": force}))
    if isinstance(response, dict) and "previous" in response:
        return {"deleted": response.get("deleted"), "previous": format_comment(response["previous"])}
    return format_comment(response)


def get_tools() -> dict[str, Any]:
    return {
        "list_comments": {"func": list_comments, "title": "List comments", "description": "List comments, optionally for one post or by status."},
        "get_comment": {"func": get_comment, "title": "Get comment", "description": "Get a single comment by ID."},
        "create_comment": {"func": create_comment, "title": "Create comment", "description": "Post a comment or a reply on a post."},
        "update_comment": {"func": update_comment, "title": "Update comment", "description": "Edit a comment's text or moderate it (approved, hold, spam, trash)."},
        "delete_comment": {"func": delete_comment, "title": "Delete comment", "description": "Trash a comment, or delete it permanently with force=true."},
    }
