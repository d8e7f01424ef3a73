"""Tests for click_globe, select_country, reset_selection and get_country_view."""
import asyncio
import json
import math
import pytest


@pytest.fixture
def selection_tools(capture_tools):
    from dotted_globe.tools.selection import register_selection_tools
    return capture_tools(register_selection_tools)


@pytest.fixture
def globe(two_squares):
    """State with two squares loaded and a coarse point set generated."""
    from dotted_globe.state import state
    from dotted_globe.core.pipeline import build_classified_set
    from dotted_globe.core.polygon_index import build_polygon_index

    state.set_dataset(build_polygon_index(two_squares), "test")
    state.config.sample_count = 2000
    state.config.density_factor = 500
    result = build_classified_set(state.index, state.config, state.palette)
    state.points = result.points
    state.points_generated = True
    return state


def _expected_rows(state, country_id):
    return math.isqrt(math.floor(state.index.area(country_id) * state.config.density_factor))


@pytest.mark.anyio
async def test_click_selects_country(selection_tools, globe):
    rows = _expected_rows(globe, "A")
    result = await selection_tools["click_globe"](lat=0.0, lon=-30.0)

    assert result.startswith("Selected: A (")
    assert f"{rows * rows} highlighted points ({rows}x{rows} grid)" in result
    assert "view distance 1.80" in result
    assert globe.selection.selected_id == "A"
    highlighted = [p for p in globe.points if p.color == globe.palette.selected]
    assert len(highlighted) == rows * rows
    assert all(p.country_id == "A" for p in highlighted)


@pytest.mark.anyio
async def test_click_on_sea_clears_selection(selection_tools, globe):
    await selection_tools["click_globe"](lat=0.0, lon=-30.0)
    result = await selection_tools["click_globe"](lat=0.0, lon=15.0)

    assert result == "Selected: none (restored A)"
    assert globe.selection.selected_id is None
    assert globe.selection.previous_id == "A"
    assert not any(p.color == globe.palette.selected for p in globe.points)


@pytest.mark.anyio
async def test_switch_country_restores_previous(selection_tools, globe):
    await selection_tools["select_country"](country_id="A")
    result = await selection_tools["select_country"](country_id="B")

    assert result.startswith("Selected: B (restored A;")
    a_points = [p for p in globe.points if p.country_id == "A"]
    assert a_points
    assert all(p.color == globe.palette.land for p in a_points)
    assert all(p.color == globe.palette.selected for p in globe.points if p.country_id == "B")


@pytest.mark.anyio
async def test_click_invalid_coordinate(selection_tools, globe):
    result = await selection_tools["click_globe"](lat=100.0, lon=0.0)
    assert result.startswith("Error:")
    assert globe.selection.selected_id is None


@pytest.mark.anyio
async def test_click_requires_points(selection_tools):
    result = await selection_tools["click_globe"](lat=0.0, lon=0.0)
    assert result.startswith("Error:")
    assert "generate_points" in result


@pytest.mark.anyio
async def test_select_unknown_country(selection_tools, globe):
    result = await selection_tools["select_country"](country_id="ZZZ")
    assert result == "Error: Unknown country id 'ZZZ'."


@pytest.mark.anyio
async def test_reset_selection(selection_tools, globe):
    await selection_tools["select_country"](country_id="B")
    result = await selection_tools["reset_selection"]()
    assert result == "Selected: none (restored B)"
    assert globe.selection.selected_id is None


@pytest.mark.anyio
async def test_newer_selection_wins(selection_tools, globe):
    first, second = await asyncio.gather(
        selection_tools["select_country"](country_id="A"),
        selection_tools["select_country"](country_id="B"),
    )
    assert first == "Selection superseded by a newer request."
    assert second.startswith("Selected: B")
    assert globe.selection.selected_id == "B"
    assert not any(p.color == globe.palette.selected for p in globe.points if p.country_id == "A")


def test_get_country_view(selection_tools, globe):
    view = json.loads(selection_tools["get_country_view"](country_id="A"))
    # Vertex mean of the closed ring, closing vertex included
    assert view["lon"] == pytest.approx(-36.0)
    assert view["lat"] == pytest.approx(-6.0)
    assert view["distance"] == pytest.approx(1.8)
    assert "A" in globe.views


def test_get_country_view_unknown(selection_tools, globe):
    assert selection_tools["get_country_view"](country_id="ZZZ").startswith("Error:")


def test_get_country_view_requires_boundaries(selection_tools):
    result = selection_tools["get_country_view"](country_id="A")
    assert "load_boundaries" in result
