"""
pulse/aggregator.py

Fan-out / fan-in for one pulse lookup:
geocode (required) -> weather + air quality in parallel (each optional) -> merge -> optional summary.

Functions:
- settle_all(*calls): run callables concurrently and wait for every one, success or failure.
- aggregate(city, summary_provider=None, timeout=DEFAULT_HTTP_TIMEOUT): build a PulseResult for a city.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable

from pulse.errors import AllSourcesFailedError, ValidationError
from pulse.models import PulseResult
from tools.air_quality import fetch_air_quality
from tools.geocoding import geocode_city
from tools.weather import fetch_weather
from util.config import DEFAULT_HTTP_TIMEOUT


logger = logging.getLogger(__name__)


@dataclass
class Settled:
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def settle_all(*calls: Callable[[], Any]) -> list[Settled]:
    """Run every call concurrently; one failing never cancels or fails the others."""
    with ThreadPoolExecutor(max_workers=max(len(calls), 1)) as pool:
        futures = [pool.submit(call) for call in calls]
        outcomes = []
        for fut in futures:
            try:
                outcomes.append(Settled(value=fut.result()))
            except Exception as exc:
                outcomes.append(Settled(error=exc))
    return outcomes


def aggregate(city, summary_provider=None, timeout=DEFAULT_HTTP_TIMEOUT) -> PulseResult:
    """Look up weather and air quality for `city`, tolerating one failed source.

    Raises ValidationError/NotFoundError/UpstreamError from geocoding before any data
    fetch, and AllSourcesFailedError when neither weather nor air quality is available.
    """
    city = (city or "").strip()
    if not city:
        raise ValidationError("City is required.")

    location = geocode_city(city, timeout=timeout)

    weather_out, aqi_out = settle_all(
        lambda: fetch_weather(location, timeout=timeout),
        lambda: fetch_air_quality(location, timeout=timeout),
    )
    if not weather_out.ok:
        logger.warning("Weather fetch failed for %s: %s", city, weather_out.error)
    if not aqi_out.ok:
        logger.warning("Air quality fetch failed for %s: %s", city, aqi_out.error)

    weather = weather_out.value if weather_out.ok else None
    aqi = aqi_out.value if aqi_out.ok else None
    if weather is None and aqi is None:
        raise AllSourcesFailedError("All data sources (Open-Meteo) failed.")

    result = PulseResult(weather=weather, aqi=aqi, location=location)
    if summary_provider is not None:
        result.summary = summary_provider.fetch(weather, aqi)
    return result
