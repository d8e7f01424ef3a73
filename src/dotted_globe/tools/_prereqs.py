"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, boundaries: bool = False, points: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, boundaries=True, points=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if boundaries and not state.boundaries_loaded:
        raise ValueError(
            "Load country boundaries first with load_boundaries."
        )
    if points and not state.points_generated:
        raise ValueError(
            "Generate the globe points first with generate_points."
        )
