"""MCP server for dotted-globe.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .tools.data import register_data_tools
from .tools.generate import register_generate_tools
from .tools.selection import register_selection_tools
from .tools.config import register_config_tools
from .tools.export import register_export_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "dotted-globe",
    instructions=(
        "Turn country boundary polygons into a classified dotted globe "
        "(land, border and sea points) and densify a selected country"
    ),
)

# Register all tool groups
register_data_tools(mcp)
register_generate_tools(mcp)
register_selection_tools(mcp)
register_config_tools(mcp)
register_export_tools(mcp)
register_status_tools(mcp)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
