"""Country boundary loading from a GeoJSON URL or file."""

import json
import logging
from pathlib import Path
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "dotted-globe/1.0"


def _check_collection(data) -> Optional[dict]:
    if isinstance(data, list):
        return {"type": "FeatureCollection", "features": data}
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        return None
    return data


async def fetch_boundaries(url: str, timeout: float = 30.0) -> Optional[dict]:
    """Fetch a GeoJSON FeatureCollection of country boundaries.

    Returns None on any HTTP, transport or decoding failure. Task
    cancellation is not handled here and propagates to the caller.
    """
    async with httpx.AsyncClient(timeout=timeout, headers={"User-Agent": USER_AGENT}) as client:
        try:
            response = await client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            logger.error("Boundary request to %s timed out: %s", url, exc)
            return None
        except httpx.HTTPStatusError as exc:
            logger.error("Boundary request to %s returned HTTP %s", url, exc.response.status_code)
            return None
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to load boundaries from %s: %s", url, exc)
            return None

    collection = _check_collection(data)
    if collection is None:
        logger.error("Response from %s is not a GeoJSON FeatureCollection", url)
    return collection


def load_boundaries_file(path: str) -> Optional[dict]:
    """Read a GeoJSON FeatureCollection from disk; None if unreadable."""
    file_path = Path(path)
    try:
        with open(file_path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read boundaries from %s: %s", file_path, exc)
        return None

    collection = _check_collection(data)
    if collection is None:
        logger.error("%s is not a GeoJSON FeatureCollection", file_path)
    return collection
