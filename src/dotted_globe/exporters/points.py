"""Point-record JSON export for the globe renderer."""

import json

from ..models import SamplePoint


def export_points(points: list[SamplePoint], output_path: str, include_sea: bool = True) -> dict:
    """Write points as a JSON array of renderer records.

    Each record has lat, lng, size, altitude and color; land and border
    records add countryId, border records add neighborCountryId.
    """
    records = [p.to_record() for p in points if include_sea or p.kind != "sea"]
    if not records:
        raise ValueError("No points to export")

    with open(output_path, "w") as f:
        json.dump(records, f)

    counts = {"land": 0, "border": 0, "sea": 0}
    for p in points:
        if include_sea or p.kind != "sea":
            counts[p.kind] += 1
    return {"success": True, "filepath": output_path, "points": len(records), "counts": counts}
