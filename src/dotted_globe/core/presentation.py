"""Point presentation: size, altitude and color per classification."""

from ..models import PointKind, SamplePoint
from ..state import Palette
from .models import PointStyle

# (size, altitude) per kind; selected points share one style
LAND_SHAPE = (0.2, 0.001)
BORDER_SHAPE = (0.2, 0.0012)
SEA_SHAPE = (0.05, 0.0007)
SELECTED_SHAPE = (0.05, 0.001)


def style_for(kind: PointKind, selected: bool, palette: Palette) -> PointStyle:
    """Presentation attributes for a point; depends only on its kind and selection."""
    if kind == "sea":
        size, altitude = SEA_SHAPE
        return PointStyle(size=size, altitude=altitude, color=palette.sea)
    if selected:
        size, altitude = SELECTED_SHAPE
        return PointStyle(size=size, altitude=altitude, color=palette.selected)
    if kind == "border":
        size, altitude = BORDER_SHAPE
        return PointStyle(size=size, altitude=altitude, color=palette.border)
    size, altitude = LAND_SHAPE
    return PointStyle(size=size, altitude=altitude, color=palette.land)


def make_point(lon: float, lat: float, kind: PointKind, palette: Palette,
               country_id: str | None = None, neighbor_id: str | None = None,
               selected: bool = False) -> SamplePoint:
    style = style_for(kind, selected, palette)
    return SamplePoint(
        lat=lat, lon=lon, kind=kind,
        country_id=country_id, neighbor_id=neighbor_id,
        size=style.size, altitude=style.altitude, color=style.color,
    )


def restyle(point: SamplePoint, selected: bool, palette: Palette) -> SamplePoint:
    """Return a copy of point with its presentation recomputed."""
    style = style_for(point.kind, selected, palette)
    if (point.size, point.altitude, point.color) == (style.size, style.altitude, style.color):
        return point
    return point.model_copy(update={
        "size": style.size, "altitude": style.altitude, "color": style.color,
    })
