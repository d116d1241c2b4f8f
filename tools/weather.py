"""
tools/weather.py

Current weather and UV utilities using the Open-Meteo forecast API (free, no key required).

Functions:
- fetch_weather(location): current temperature and humidity plus today's maximum UV index,
  in the location's local timezone.
"""

import logging

import requests

from pulse.errors import UpstreamError
from pulse.models import WeatherReading
from util.config import DEFAULT_HTTP_TIMEOUT
from util.http import get_json


logger = logging.getLogger(__name__)

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


def fetch_weather(location, timeout=DEFAULT_HTTP_TIMEOUT):
    """Fetch a `WeatherReading` for the given `Location`."""
    try:
        data = get_json(
            FORECAST_URL,
            params={
                "latitude": location.latitude,
                "longitude": location.longitude,
                "current": "temperature_2m,relative_humidity_2m",
                "daily": "uv_index_max",
                "timezone": "auto",
                "forecast_days": 1,
            },
            timeout=timeout,
        )
    except (requests.RequestException, ValueError) as exc:
        raise UpstreamError("Weather API failed") from exc

    # No presence checks: a payload without these fields is a failed fetch.
    try:
        return WeatherReading(
            temperature_c=data["current"]["temperature_2m"],
            humidity_pct=data["current"]["relative_humidity_2m"],
            uv_index_max=data["daily"]["uv_index_max"][0],
        )
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamError("Weather API returned an unexpected payload") from exc
