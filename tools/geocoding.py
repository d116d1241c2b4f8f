"""
tools/geocoding.py

Resolve a free-text place name to coordinates using Open-Meteo geocoding (free, no key required).
Only the top match is requested; a single attempt is made.
"""

import logging

import requests

from pulse.errors import NotFoundError, UpstreamError, ValidationError
from pulse.models import Location
from util.config import DEFAULT_HTTP_TIMEOUT
from util.http import get_json


logger = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"


def geocode_city(name, timeout=DEFAULT_HTTP_TIMEOUT):
    """Return the `Location` of the first match for `name`.

    Raises NotFoundError when the service has no match and UpstreamError when it fails.
    """
    name = (name or "").strip()
    if not name:
        raise ValidationError("City is required.")
    try:
        data = get_json(GEOCODING_URL, params={"name": name, "count": 1}, timeout=timeout)
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Geocoding request for %r failed: %s", name, exc)
        raise UpstreamError("Geocoding API failed") from exc

    results = (data or {}).get("results") or []
    if not results:
        raise NotFoundError(f'Could not find location for "{name}".')
    top = results[0]
    try:
        return Location(
            latitude=float(top["latitude"]),
            longitude=float(top["longitude"]),
            name=top.get("name"),
            country=top.get("country"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamError("Geocoding API returned a malformed result") from exc
