"""Configuration tools: set_globe_config, set_palette."""

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from ..state import state, GlobeConfig, Palette, Selection
from ..core.presentation import restyle

# Changing any of these invalidates the base point set
SAMPLING_FIELDS = ("sample_count", "border_buffer_deg", "emit_sea", "detect_borders")


def register_config_tools(mcp: FastMCP):

    @mcp.tool()
    def set_globe_config(
        sample_count: int | None = None,
        border_buffer_deg: float | None = None,
        density_factor: float | None = None,
        emit_sea: bool | None = None,
        detect_borders: bool | None = None,
        densify_selection: bool | None = None,
    ) -> str:
        """Set point sampling and selection parameters.

        All values are validated together; if any is invalid nothing changes.
        **Next:** generate_points (required after changing sampling settings).

        Args:
            sample_count: Points on the full sphere (default 12000).
            border_buffer_deg: Neighbor probe offset in degrees (default 0.3).
            density_factor: Points per steradian when densifying a selection (default 50000).
            emit_sea: Keep sea points in the output (default true).
            detect_borders: Flag land points near another country (default true).
            densify_selection: Regenerate a dense grid for the selected country (default true).
        """
        updates = {
            name: value for name, value in [
                ("sample_count", sample_count), ("border_buffer_deg", border_buffer_deg),
                ("density_factor", density_factor), ("emit_sea", emit_sea),
                ("detect_borders", detect_borders), ("densify_selection", densify_selection),
            ]
            if value is not None
        }
        current = state.config
        try:
            new_config = GlobeConfig.model_validate({**current.model_dump(), **updates})
        except ValidationError as e:
            return f"Error: {e}"

        changed = [name for name in updates if getattr(current, name) != getattr(new_config, name)]
        state.config = new_config

        if any(name in SAMPLING_FIELDS for name in changed) and state.points_generated:
            # Base points no longer match the configuration
            state.points = []
            state.points_generated = False
            state.selection = Selection()
            state.next_selection_epoch()

        return f"Globe config: {new_config.model_dump()}"

    @mcp.tool()
    def set_palette(
        land: str | None = None,
        border: str | None = None,
        sea: str | None = None,
        selected: str | None = None,
    ) -> str:
        """Set point colors (hex #RRGGBB). Existing points are restyled immediately.

        All colors are validated together; if any is invalid nothing changes.

        Args:
            land/border/sea/selected: Hex color strings.
        """
        updates = {
            name: value for name, value in [
                ("land", land), ("border", border), ("sea", sea), ("selected", selected),
            ]
            if value is not None
        }
        try:
            palette = Palette.model_validate({**state.palette.as_dict(), **updates})
        except ValidationError as e:
            return f"Error: {e}"
        state.palette = palette

        selected_id = state.selection.selected_id
        state.points = [
            restyle(pt, selected_id is not None and pt.country_id == selected_id, palette)
            for pt in state.points
        ]
        return f"Palette: {palette.as_dict()}"
