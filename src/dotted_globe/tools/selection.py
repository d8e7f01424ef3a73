"""Selection tools: click_globe, select_country, reset_selection, get_country_view."""

import asyncio
import json
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state, Selection
from ..models import Coordinate
from ..core.classifier import PointClassifier
from ..core.densify import SelectionDensifier
from ..core.models import SelectionResult
from ._prereqs import require_state

logger = logging.getLogger(__name__)


async def change_selection(new_id: Optional[str]) -> Optional[SelectionResult]:
    """Apply a selection change; None if a newer change superseded this one.

    The point set is computed off the event loop from a snapshot and
    committed only if no other selection or dataset change happened since.
    """
    epoch = state.next_selection_epoch()
    version = state.dataset_version
    previous_id = state.selection.selected_id
    densifier = SelectionDensifier(
        state.index,
        density_factor=state.config.density_factor,
        densify=state.config.densify_selection,
    )
    result = await asyncio.to_thread(
        densifier.apply, list(state.points), new_id, previous_id, state.palette.model_copy(),
    )
    if epoch != state.selection_epoch or version != state.dataset_version:
        logger.debug("Selection of %s superseded, discarding result", new_id)
        return None

    state.points = result.points
    state.selection = Selection(selected_id=result.selected_id, previous_id=previous_id)
    return result


def _describe(result: SelectionResult) -> str:
    parts = []
    if result.restored_id:
        parts.append(f"restored {result.restored_id}")
    if result.selected_id:
        parts.append(f"{result.added_count} highlighted points ({result.grid_rows}x{result.grid_rows} grid)")
        view = state.views.estimate(state.index.get(result.selected_id))
        if view is not None:
            parts.append(
                f"center lat={view.lat:.4f}, lon={view.lon:.4f}, view distance {view.distance:.2f}"
            )
    detail = f" ({'; '.join(parts)})" if parts else ""
    return f"Selected: {result.selected_id or 'none'}{detail}"


def register_selection_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    async def click_globe(lat: float, lon: float) -> str:
        """Select the country under a clicked coordinate.

        A click outside every country clears the selection and restores
        the previously selected country's points.
        **Requires:** generate_points.
        **Next:** export_points, or get_country_view for camera placement.

        Args:
            lat: Latitude of the click (degrees).
            lon: Longitude of the click (degrees).
        """
        try:
            require_state(state, points=True)
            point = Coordinate(lat=lat, lon=lon)
        except (ValueError, ValidationError) as e:
            return f"Error: {e}"

        country_id = PointClassifier(state.index).classify(point.lon, point.lat)
        result = await change_selection(country_id)
        if result is None:
            return "Selection superseded by a newer request."
        return _describe(result)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    async def select_country(country_id: str) -> str:
        """Select a country by id and densify its points.

        **Requires:** generate_points.

        Args:
            country_id: Country id as listed by get_status / the dataset (e.g. 'FRA').
        """
        try:
            require_state(state, boundaries=True, points=True)
        except ValueError as e:
            return f"Error: {e}"
        if country_id not in state.index:
            return f"Error: Unknown country id '{country_id}'."

        result = await change_selection(country_id)
        if result is None:
            return "Selection superseded by a newer request."
        return _describe(result)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    async def reset_selection() -> str:
        """Clear the selection and restore the selected country's default styling."""
        try:
            require_state(state, points=True)
        except ValueError as e:
            return f"Error: {e}"

        result = await change_selection(None)
        if result is None:
            return "Selection superseded by a newer request."
        return _describe(result)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_country_view(country_id: str) -> str:
        """Return a country's approximate center and recommended view distance.

        Values are computed once per country and cached for the dataset's lifetime.

        Args:
            country_id: Country id.
        """
        try:
            require_state(state, boundaries=True)
        except ValueError as e:
            return f"Error: {e}"
        country = state.index.get(country_id)
        if country is None:
            return f"Error: Unknown country id '{country_id}'."

        view = state.views.estimate(country)
        if view is None:
            return f"Error: Country '{country_id}' has no usable vertices."
        return json.dumps(view.model_dump(), indent=2)
