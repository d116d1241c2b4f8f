"""
scripts/eval_cities.py

Batch smoke check against the live Open-Meteo services.

For each city it runs the aggregator and checks:
- at least one of weather / AQI came back
- AQI is an integer or the "N/A" sentinel
- the rendered raw-data list matches the readings
- unknown places fail with NotFoundError

Usage:
  python3 scripts/eval_cities.py [city ...]

Summaries use the same env as runtime (GEMINI_API_KEY, GEMINI_OFFLINE, PULSE_AI_ENABLED).
"""

from __future__ import annotations

import os
import sys
from typing import Any


# Allow imports from project root
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from pulse.aggregator import aggregate
from pulse.errors import NotFoundError, PulseError
from pulse.models import AQI_UNAVAILABLE
from pulse.summary import provider_from_settings
from pulse.view import data_lines
from util.config import configure_logging, get_settings


DEFAULT_CITIES = ["Paris", "Tokyo", "Delhi", "Reykjavik", "Lagos"]
UNKNOWN_CITY = "Nonexistentville"


def check_city(city: str, settings) -> dict[str, Any]:
    row: dict[str, Any] = {"scenario": city}
    try:
        result = aggregate(city, summary_provider=provider_from_settings(settings), timeout=settings.http_timeout)
    except PulseError as exc:
        row["lookup"] = False
        row["error"] = exc.message
        return row
    row["lookup"] = True
    row["has_data"] = result.weather is not None or result.aqi is not None
    row["aqi_shape"] = result.aqi is None or result.aqi.aqi == AQI_UNAVAILABLE or isinstance(result.aqi.aqi, int)
    expected = (3 if result.weather else 0) + (1 if result.aqi else 0)
    row["data_lines"] = len(data_lines(result)) == expected
    row["summary"] = bool(result.summary)
    return row


def check_unknown(settings) -> dict[str, Any]:
    try:
        aggregate(UNKNOWN_CITY, timeout=settings.http_timeout)
    except NotFoundError:
        return {"scenario": UNKNOWN_CITY, "not_found": True}
    except PulseError:
        pass
    return {"scenario": UNKNOWN_CITY, "not_found": False}


def main():
    settings = get_settings()
    configure_logging(settings)
    cities = sys.argv[1:] or DEFAULT_CITIES
    results = [check_city(c, settings) for c in cities]
    results.append(check_unknown(settings))

    ok = True
    for row in results:
        scenario = row.pop("scenario")
        error = row.pop("error", None)
        flags = [f"{k}={'OK' if v else 'FAIL'}" for k, v in row.items()]
        line = f"{scenario}: " + ", ".join(flags)
        if error:
            line += f" ({error})"
        print(line)
        ok = ok and all(bool(v) for v in row.values())
    if not ok:
        sys.exit(2)


if __name__ == "__main__":
    main()
