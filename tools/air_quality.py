"""
tools/air_quality.py

Current US AQI from the Open-Meteo air-quality API (free, no key required).

A null `us_aqi` is a valid "unavailable" reading, not an error.
"""

import requests

from pulse.errors import UpstreamError
from pulse.models import AQI_UNAVAILABLE, AirQualityReading
from util.config import DEFAULT_HTTP_TIMEOUT
from util.http import get_json


AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"


def fetch_air_quality(location, timeout=DEFAULT_HTTP_TIMEOUT):
    """Fetch an `AirQualityReading` for the given `Location`."""
    try:
        data = get_json(
            AIR_QUALITY_URL,
            params={
                "latitude": location.latitude,
                "longitude": location.longitude,
                "current": "us_aqi",
                "timezone": "auto",
            },
            timeout=timeout,
        )
    except (requests.RequestException, ValueError) as exc:
        raise UpstreamError("Air Quality API failed") from exc

    try:
        value = data["current"]["us_aqi"]
    except (KeyError, TypeError) as exc:
        raise UpstreamError("Air Quality API returned an unexpected payload") from exc
    if value is None:
        return AirQualityReading(aqi=AQI_UNAVAILABLE)
    try:
        return AirQualityReading(aqi=int(round(value)))
    except (TypeError, ValueError, OverflowError) as exc:
        raise UpstreamError(f"Air Quality API returned a non-numeric AQI: {value!r}") from exc
