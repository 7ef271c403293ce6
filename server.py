from core.config import get_config
from core.logging_config import setup_logging
from mcp.server.fastmcp import FastMCP
from tools import collect_tools
import sys

_cfg = get_config() or {}
_log_cfg = _cfg.get("logging") or {}

# Set up logging using core.logging_config
logger = setup_logging(_log_cfg.get("logs_dir"), _log_cfg.get("log_file", "server.log"))

logger.info("MCP server bootstrap starting.")

INSTRUCTIONS = (
    "Tools for a WordPress site: content, taxonomies, users, comments, plugins, media, "
    "WordPress.org plugin directory search, "
    "read-only SQL, WooCommerce products and ACF fields. Every tool returns a toolResult "
    "envelope; when isError is true the text explains what failed and how to fix it."
)

try:
    mcp = FastMCP("wordpress", instructions=INSTRUCTIONS)
except Exception:
    logger.exception("Failed to create FastMCP instance")
    raise

###################################################### MCP Tools ######################################################

logger.info("\n\n~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~\n")
logger.info("Loading MCP tools...")

all_tools, tool_handlers = collect_tools()
registered_tool_names: list[str] = []
for descriptor in all_tools:
    tool_name = descriptor["name"]
    try:
        mcp.add_tool(
            tool_handlers[tool_name],
            name=tool_name,
            title=descriptor["title"],
            description=descriptor["description"],
        )
        registered_tool_names.append(tool_name)
        logger.info(f"Added tool via add_tool: {tool_name} (title={descriptor['title']})")
    except Exception:
        logger.exception(f"Failed to register tool {tool_name}")
logger.info(f"Total tools registered: {len(registered_tool_names)} , tool names: {registered_tool_names}")

###################################################### Startup ######################################################

if __name__ == "__main__":
    logger.info("Starting MCP server...")
    try:
        mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/server.log for details.", file=sys.stderr)
        sys.exit(-1)
