"""
pulse/models.py

Per-query data model. Nothing here outlives a single lookup.

Classes:
- Location: coordinates of the first geocoding match (plus its display name).
- WeatherReading: current temperature/humidity and the day's peak UV index.
- AirQualityReading: current US AQI, or the "N/A" sentinel when upstream has no value.
- PulseResult: what the presentation layer renders; converts to and from the wire payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


AQI_UNAVAILABLE = "N/A"


@dataclass
class Location:
    latitude: float
    longitude: float
    name: str | None = None
    country: str | None = None

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.name, self.country) if p]
        return ", ".join(parts) if parts else f"{self.latitude:.2f}, {self.longitude:.2f}"


@dataclass
class WeatherReading:
    temperature_c: float
    humidity_pct: float
    uv_index_max: float


@dataclass
class AirQualityReading:
    aqi: Union[int, str]

    @property
    def is_available(self) -> bool:
        return self.aqi != AQI_UNAVAILABLE


@dataclass
class PulseResult:
    weather: WeatherReading | None = None
    aqi: AirQualityReading | None = None
    summary: str | None = None
    location: Location | None = None

    def to_payload(self) -> dict[str, Any]:
        """Wire shape returned by the pulse endpoint."""
        weather = None
        if self.weather is not None:
            weather = {
                "temp": self.weather.temperature_c,
                "humidity": self.weather.humidity_pct,
                "uv": self.weather.uv_index_max,
            }
        aqi = {"aqi": self.aqi.aqi} if self.aqi is not None else None
        return {"weather": weather, "aqi": aqi, "summary": self.summary}

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "PulseResult":
        w = data.get("weather")
        a = data.get("aqi")
        weather = None
        if w:
            weather = WeatherReading(
                temperature_c=w.get("temp"),
                humidity_pct=w.get("humidity"),
                uv_index_max=w.get("uv"),
            )
        aqi = AirQualityReading(aqi=a.get("aqi")) if a else None
        return cls(weather=weather, aqi=aqi, summary=data.get("summary"))
