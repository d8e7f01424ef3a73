"""Generation tool: generate_points."""

import asyncio
import logging

import numpy as np
from mcp.server.fastmcp import FastMCP, Context

from ..state import state, Selection
from ..core.pipeline import assemble_points, classify_samples, detect_borders
from ..core.sampler import fibonacci_lattice

logger = logging.getLogger(__name__)


def register_generate_tools(mcp: FastMCP):

    @mcp.tool()
    async def generate_points(ctx: Context) -> str:
        """Sample the globe and classify every point as land, border or sea.

        Works with an empty dataset too (every point is then sea).
        **Prior:** load_boundaries.
        **Next:** click_globe or select_country, then export_points.

        Re-run this after changing sampling settings with set_globe_config.
        Reports progress after each stage (sample, classify, borders, assemble).
        """
        version = state.dataset_version
        index = state.index
        config = state.config.model_copy()
        palette = state.palette.model_copy()
        total = 4

        lons, lats = await asyncio.to_thread(fibonacci_lattice, config.sample_count)
        await ctx.report_progress(1, total)

        owners, classifier = await asyncio.to_thread(classify_samples, index, lons, lats)
        await ctx.report_progress(2, total)

        if config.detect_borders:
            neighbors = await asyncio.to_thread(
                detect_borders, classifier, lons, lats, owners, config.border_buffer_deg,
            )
        else:
            neighbors = np.full(owners.shape, None, dtype=object)
        await ctx.report_progress(3, total)

        result = await asyncio.to_thread(
            assemble_points, lons, lats, owners, neighbors, palette, config.emit_sea,
        )
        await ctx.report_progress(4, total)

        if state.dataset_version != version:
            logger.debug("Dropping classification pass for stale dataset version %d", version)
            return "Classification discarded: boundary data changed while it ran. Re-run generate_points."

        state.points = result.points
        state.points_generated = True
        state.selection = Selection()
        state.next_selection_epoch()

        skipped = sorted(classifier.failed)
        message = (
            f"Points generated: {config.sample_count} samples -> "
            f"{result.land_count} land, {result.border_count} border, {result.sea_count} sea "
            f"({len(result.points)} points kept)"
        )
        if skipped:
            message += f". Skipped malformed countries: {', '.join(skipped)}"
        return message
