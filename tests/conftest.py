"""Shared fixtures: synthetic boundary datasets and session-state reset."""
import pytest
from unittest.mock import MagicMock


def square_ring(west, south, east, north):
    return [[west, south], [east, south], [east, north], [west, north], [west, south]]


def polygon_feature(country_id, *rings, name=None):
    return {
        "type": "Feature",
        "id": country_id,
        "properties": {"NAME": name or country_id},
        "geometry": {"type": "Polygon", "coordinates": list(rings)},
    }


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_state():
    """Give every test a fresh session state (same object, new contents)."""
    from dotted_globe.state import state, SessionState
    fresh = SessionState()
    for name in SessionState.model_fields:
        setattr(state, name, getattr(fresh, name))
    yield state


@pytest.fixture
def two_squares():
    """Two separated squares: A over [-60, 0] x [-30, 30], B over [30, 90] x [-30, 30]."""
    return {
        "type": "FeatureCollection",
        "features": [
            polygon_feature("A", square_ring(-60, -30, 0, 30)),
            polygon_feature("B", square_ring(30, -30, 90, 30)),
        ],
    }


@pytest.fixture
def adjacent_squares():
    """A [0, 10] x [0, 10], B east of it, C north of it."""
    return {
        "type": "FeatureCollection",
        "features": [
            polygon_feature("A", square_ring(0, 0, 10, 10)),
            polygon_feature("B", square_ring(10, 0, 20, 10)),
            polygon_feature("C", square_ring(0, 10, 10, 20)),
        ],
    }


@pytest.fixture
def capture_tools():
    """Return a function that registers a tool group and returns {name: fn}."""
    def _capture(register):
        tools = {}
        mock_mcp = MagicMock()

        def capture(*args, **kwargs):
            def decorator(fn):
                tools[fn.__name__] = fn
                return fn
            return decorator
        mock_mcp.tool = capture
        register(mock_mcp)
        return tools
    return _capture
