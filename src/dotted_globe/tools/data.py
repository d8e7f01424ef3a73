"""Data acquisition tools: load_boundaries, cancel_boundary_load."""

import asyncio
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state, DEFAULT_BOUNDARIES_URL
from ..core.boundaries import fetch_boundaries, load_boundaries_file
from ..core.polygon_index import PolygonIndex, build_polygon_index

logger = logging.getLogger(__name__)


async def _load_index(url: Optional[str], path: Optional[str]) -> Optional[PolygonIndex]:
    """Fetch or read boundary data and build the index; None if loading failed."""
    if path:
        data = await asyncio.to_thread(load_boundaries_file, path)
    else:
        data = await fetch_boundaries(url)
    if data is None:
        return None
    return await asyncio.to_thread(build_polygon_index, data)


def register_data_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True, openWorldHint=True))
    async def load_boundaries(url: str | None = None, path: str | None = None) -> str:
        """Load country boundary polygons (GeoJSON) and rebuild the country index.

        Starting a new load cancels any load still in flight. Loading replaces
        the dataset and clears generated points, selection and cached views.
        **Next:** generate_points.

        Args:
            url: GeoJSON FeatureCollection URL. Default: a public world dataset.
            path: Local GeoJSON file to read instead of fetching.
        """
        if url and path:
            return "Error: Provide either url or path, not both."

        previous = state.load_task
        if previous is not None and not previous.done():
            logger.debug("Cancelling in-flight boundary load")
            previous.cancel()

        source = path or url or DEFAULT_BOUNDARIES_URL
        task = asyncio.create_task(_load_index(None if path else source, path))
        state.load_task = task
        try:
            index = await task
        except asyncio.CancelledError:
            if state.load_task is not task:
                logger.debug("Boundary load from %s was cancelled", source)
                return f"Load from {source} cancelled; the dataset was not changed."
            raise
        finally:
            if state.load_task is task:
                state.load_task = None

        if index is None:
            state.set_dataset(PolygonIndex(), source)
            return (
                f"Error: Could not load boundaries from {source} (check server logs). "
                "The dataset is now empty: every point classifies as sea and no country can be selected."
            )

        state.set_dataset(index, source)
        return f"Boundaries loaded from {source}: {len(index)} countries."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def cancel_boundary_load() -> str:
        """Cancel a boundary load that is still in flight.

        The current dataset is left unchanged.
        """
        task = state.load_task
        if task is None or task.done():
            return "No boundary load in progress."
        state.load_task = None
        task.cancel()
        return "Boundary load cancelled."
