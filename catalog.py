"""
Near-earth object lookups against NASA's NeoWs API.

The catalog only supplies candidate diameter / velocity values; the
simulation never depends on it being reachable.
"""

import logging

import requests

import config
from models import ImpactParameters

logger = logging.getLogger(__name__)

DEFAULT_VELOCITY_KM_S = 20.0


def fetch_neo(neo_id, api_key=None, timeout=None):
    """
    Retrieve a near earth object by its NASA NEO reference ID.

    Returns the NEO dictionary, or None on a non-200 response or network
    error.
    """
    url = f"{config.NASA_BASE_URL}/neo/{neo_id}"
    try:
        resp = requests.get(
            url,
            params={"api_key": api_key or config.NASA_API_KEY},
            timeout=timeout or config.NASA_TIMEOUT_S,
        )
    except requests.RequestException as e:
        logger.warning("Error contacting NASA API for NEO %s: %s", neo_id, e)
        return None
    if resp.status_code != 200:
        logger.warning("NASA API returned %s for NEO %s", resp.status_code, neo_id)
        return None
    return resp.json()


def _to_float(value):
    try:
        if value is None or value == "":
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def neo_diameter_m(neo):
    """Mean of the estimated min/max diameter in meters (0.0 if unknown)."""
    diameters = (neo.get("estimated_diameter") or {}).get("meters") or {}
    d_min = _to_float(diameters.get("estimated_diameter_min")) or 0.0
    d_max = _to_float(diameters.get("estimated_diameter_max")) or 0.0
    if d_min and d_max:
        return (d_min + d_max) / 2.0
    return max(d_min, d_max)


def neo_velocity_km_s(neo):
    """Relative velocity of the first listed close approach, in km/s."""
    approaches = neo.get("close_approach_data") or []
    if not approaches:
        return DEFAULT_VELOCITY_KM_S
    velocity = (approaches[0].get("relative_velocity") or {}).get("kilometers_per_second")
    return _to_float(velocity) or DEFAULT_VELOCITY_KM_S


def neo_to_parameters(neo, density_kg_m3=3000.0, angle_deg=45.0):
    return ImpactParameters(
        diameter_m=neo_diameter_m(neo),
        velocity_km_s=neo_velocity_km_s(neo),
        density_kg_m3=density_kg_m3,
        angle_deg=angle_deg,
    )
