"""
pulse/prompts.py

Prompt template for the citizen-facing environmental summary.
"""

from pulse.models import AQI_UNAVAILABLE


SUMMARY_TEMPLATE = (
    'Act as an environmental health analyst for "PlanetPulse."\n'
    "Given this live data, write a 2-sentence summary for a citizen.\n"
    "- Air Quality (AQI): {aqi} (Lower is better. >100 is unhealthy)\n"
    "- Temperature: {temp} °C\n"
    "- UV Index: {uv} (Higher is more harmful)"
)


def _or_na(value):
    return AQI_UNAVAILABLE if value is None else value


def build_summary_prompt(weather, aqi):
    """Fill the template; any missing reading is shown as N/A."""
    return SUMMARY_TEMPLATE.format(
        aqi=_or_na(aqi.aqi if aqi is not None else None),
        temp=_or_na(weather.temperature_c if weather is not None else None),
        uv=_or_na(weather.uv_index_max if weather is not None else None),
    )
