"""Status tools: get_status, list_countries."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the current globe state.

        Shows the loaded dataset, point counts by kind, the current selection,
        configuration and palette.
        """
        return json.dumps(state.summary(), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_countries() -> str:
        """List country ids and names in dataset order (the overlap tie-break order)."""
        return json.dumps([{"id": c.id, "name": c.name} for c in state.index], indent=2)
