import re
from typing import Annotated, Any

from pydantic import Field

from core.errors import ValidationError  # type: ignore
from core.log_sink import log_to_file  # type: ignore
from utils import make_wordpress_request, tool_handler  # type: ignore
from utils.normalize import count_items  # type: ignore

QUERY_PATH = "mcp/v1/query"
READ_ONLY_STATEMENTS = ("SELECT", "SHOW", "DESCRIBE", "DESC", "EXPLAIN")

HINTS = {
    401: "Permission denied. The query endpoint is restricted to administrators.",
    403: "Permission denied. The query endpoint is restricted to administrators.",
    404: "Query endpoint not found. Install and activate the companion plugin that registers /wp-json/mcp/v1/query.",
}

_LEADING_COMMENTS = re.compile(r"^\s*(?:(?:--[^\n]*\n|#[^\n]*\n|/\*.*?\*/)\s*)*", re.DOTALL)
_QUOTED = re.compile(r"""'(?:[^'\\]|\\.|'')*'|"(?:[^"\\]|\\.|"")*"|`[^`]*`""", re.DOTALL)


def check_read_only(query: str) -> str:
    """Return the statement without a trailing semicolon, or raise ValidationError."""
    statement = _LEADING_COMMENTS.sub("", query).strip().rstrip(";").strip()
    if not statement:
        raise ValidationError("query", "query is empty")
    if ";" in _QUOTED.sub("", statement):
        raise ValidationError("query", "only a single statement is allowed")
    keyword = statement.split(None, 1)[0].upper()
    if keyword not in READ_ONLY_STATEMENTS:
        raise ValidationError(
            "query",
            f"only read-only statements are allowed ({', '.join(READ_ONLY_STATEMENTS)}), got {keyword}",
        )
    return statement


@tool_handler("executing SQL query", HINTS)
async def execute_sql_query(
    query: Annotated[str, Field(description="A single read-only SQL statement (SELECT, SHOW, DESCRIBE, EXPLAIN). Use the site's table prefix, e.g. wp_posts.")],
) -> Any:
    statement = check_read_only(query)
    log_to_file(f"Executing SQL query: {statement}")
    response = await make_wordpress_request("POST", QUERY_PATH, {"query": statement})
    rows = response.get("results", response) if isinstance(response, dict) else response
    return {
        "query": statement,
        "row_count": count_items(rows),
        "rows": rows,
    }


def get_tools() -> dict[str, Any]:
    return {
        "execute_sql_query": {
            "func": execute_sql_query,
            "title": "Execute SQL query",
            "description": "Run a read-only SQL query (SELECT, SHOW, DESCRIBE, EXPLAIN) against the WordPress database through the query endpoint and return the rows.",
        },
    }
