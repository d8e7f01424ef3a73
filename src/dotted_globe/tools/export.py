"""Export tools: export_points, convert_cities."""

import logging
import os
from pathlib import Path
from mcp.server.fastmcp import FastMCP

from ..state import state
from ..exporters.points import export_points as do_export_points
from ..core.cities import convert_cities as do_convert_cities, write_city_collection
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def register_export_tools(mcp: FastMCP):

    @mcp.tool()
    def export_points(output_path: str, include_sea: bool = True) -> str:
        """Export the classified points as JSON records for a globe renderer.

        Records carry lat, lng, size, altitude, color, countryId (not for sea)
        and neighborCountryId (border points only).
        **Requires:** generate_points.

        Args:
            output_path: Where to save the .json file (absolute path)
            include_sea: Include sea points (default true).
        """
        try:
            require_state(state, points=True)
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        try:
            result = do_export_points(state.points, output_path, include_sea=include_sea)
        except ValueError as e:
            return f"Error: {e}"
        logger.info("Exported %d points to %s", result["points"], output_path)
        return f"Points exported to {output_path} ({result['points']} points: {result['counts']})"

    @mcp.tool()
    def convert_cities(csv_path: str, output_path: str, country: str = "United States") -> str:
        """Convert a city CSV into a GeoJSON FeatureCollection of points for one country.

        Standalone helper; does not touch the globe state. The CSV needs
        city, country, lat, lng and population columns. Rows with non-numeric
        coordinates or another country are dropped.

        Args:
            csv_path: Input CSV (absolute path).
            output_path: Where to save the .json file (absolute path).
            country: Country name to keep (default 'United States').
        """
        try:
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"
        if not os.path.exists(csv_path):
            return f"Error: CSV file not found at {csv_path}"

        try:
            features = do_convert_cities(csv_path, country=country)
        except ValueError as e:
            return f"Error: {e}"
        path = write_city_collection(features, output_path)
        return f"Saved {len(features)} {country} cities to {path}"
