"""
pulse/view.py

Presentation layer for a pulse lookup.

Pure helpers:
- aqi_tier(value): classify a US AQI into one of six bands (label + display color).
- gauge_sweep_degrees(value): foreground arc sweep, clamped at 300 -> 180 degrees.
- render_gauge_svg(value): semicircular gauge as an inline SVG.
- data_lines(result): the raw-data list ("Temperature: 18 °C", ...).

View controller:
- Panels: everything the page shows (input, spinner, raw data, gauge, summary).
- PulseView: runs one search at a time through Idle -> Loading -> Success|Error -> Idle
  and always restores input/spinner on the way out.
- render_html(panels) / render_text(panels): browser and terminal surfaces.
"""

from __future__ import annotations

import html
import logging
import math
import threading
from dataclasses import dataclass, field
from enum import Enum

from pulse.errors import PulseError
from pulse.models import AQI_UNAVAILABLE
from pulse.summary import PLACEHOLDER_TEXT


logger = logging.getLogger(__name__)

GAUGE_MAX = 300
GAUGE_SIZE = 250
GAUGE_CENTER = 125
GAUGE_RADIUS = 80
GAUGE_STROKE = 25
TRACK_COLOR = "#eee"
LABEL_COLOR = "#555"

BUTTON_IDLE = "Check Pulse"
BUTTON_BUSY = "Checking..."
EMPTY_INPUT_NOTICE = "Please enter a city name."
MISSING_SUMMARY_TEXT = "AI analysis could not be generated."


@dataclass(frozen=True)
class AqiTier:
    label: str
    color: str
    upper: float


AQI_TIERS = (
    AqiTier("Good", "#00e400", 50),
    AqiTier("Moderate", "#ffff00", 100),
    AqiTier("Unhealthy (Sensitive Groups)", "#ff7e00", 150),
    AqiTier("Unhealthy", "#ff0000", 200),
    AqiTier("Very Unhealthy", "#8f3f97", 300),
    AqiTier("Hazardous", "#7e0023", math.inf),
)


def aqi_tier(value) -> AqiTier:
    """Return the band containing `value`; upper bounds are inclusive."""
    if value < 0:
        raise ValueError(f"AQI cannot be negative: {value}")
    for tier in AQI_TIERS:
        if value <= tier.upper:
            return tier
    return AQI_TIERS[-1]


def gauge_sweep_degrees(value) -> float:
    clamped = min(max(value, 0), GAUGE_MAX)
    return clamped / GAUGE_MAX * 180.0


def _arc_point(degrees_from_left: float) -> tuple[float, float]:
    # Canvas convention: the track starts at pi (left) and runs clockwise over the top.
    theta = math.pi + math.radians(degrees_from_left)
    x = GAUGE_CENTER + GAUGE_RADIUS * math.cos(theta)
    y = GAUGE_CENTER + GAUGE_RADIUS * math.sin(theta)
    return round(x, 2), round(y, 2)


def _arc_path(sweep: float) -> str:
    sx, sy = _arc_point(0)
    ex, ey = _arc_point(sweep)
    return f"M {sx} {sy} A {GAUGE_RADIUS} {GAUGE_RADIUS} 0 0 1 {ex} {ey}"


def render_gauge_svg(value: int) -> str:
    tier = aqi_tier(value)
    sweep = gauge_sweep_degrees(value)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{GAUGE_SIZE}" height="{GAUGE_SIZE}" '
        f'viewBox="0 0 {GAUGE_SIZE} {GAUGE_SIZE}" class="health-gauge">'
        f'<path d="{_arc_path(180)}" fill="none" stroke="{TRACK_COLOR}" stroke-width="{GAUGE_STROKE}"/>'
        f'<path d="{_arc_path(sweep)}" fill="none" stroke="{tier.color}" '
        f'stroke-width="{GAUGE_STROKE}" stroke-linecap="round"/>'
        f'<text x="{GAUGE_CENTER}" y="120" text-anchor="middle" fill="{tier.color}" '
        f'font-family="Poppins" font-weight="bold" font-size="40">{value}</text>'
        f'<text x="{GAUGE_CENTER}" y="150" text-anchor="middle" fill="{LABEL_COLOR}" '
        f'font-family="Poppins" font-size="16">{html.escape(tier.label)}</text>'
        "</svg>"
    )


def _fmt(value) -> str:
    if value is None:
        return AQI_UNAVAILABLE
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:g}"
    return str(value)


def data_lines(result) -> list[str]:
    lines = []
    if result.weather is not None:
        lines.append(f"Temperature: {_fmt(result.weather.temperature_c)} °C")
        lines.append(f"Humidity: {_fmt(result.weather.humidity_pct)} %")
        lines.append(f"Max UV Index: {_fmt(result.weather.uv_index_max)}")
    if result.aqi is not None:
        lines.append(f"US AQI: {_fmt(result.aqi.aqi)}")
    return lines


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Panels:
    city: str = ""
    input_enabled: bool = True
    button_text: str = BUTTON_IDLE
    spinner_visible: bool = False
    notice: str | None = None
    location_label: str | None = None
    data_items: list[str] = field(default_factory=list)
    raw_data_visible: bool = False
    gauge_value: int | None = None
    gauge_tier: AqiTier | None = None
    gauge_svg: str | None = None
    gauge_visible: bool = False
    summary_text: str = ""
    summary_placeholder: bool = False
    summary_visible: bool = False


class PulseView:
    """View controller for the pulse page.

    `fetch_pulse(city)` returns a PulseResult (locally aggregated or from the server).
    When `summary_provider` is given and the result carries no summary, the provider
    fills it in; an unavailable provider shows its placeholder instead.
    """

    def __init__(self, fetch_pulse, summary_provider=None, on_change=None):
        self.fetch_pulse = fetch_pulse
        self.summary_provider = summary_provider
        self.on_change = on_change
        self.panels = Panels()
        self.state = ViewState.IDLE
        self.transitions: list[ViewState] = []
        self._busy = threading.Lock()

    def _set_state(self, state: ViewState) -> None:
        self.state = state
        self.transitions.append(state)
        if self.on_change:
            self.on_change(state, self.panels)

    def search(self, city) -> bool:
        """Run one lookup. Returns False when the input is empty or a lookup is already running."""
        city = (city or "").strip()
        if not city:
            self.panels.notice = EMPTY_INPUT_NOTICE
            return False
        if not self._busy.acquire(blocking=False):
            logger.info("Ignoring search for %r while another lookup is in flight", city)
            return False
        try:
            self.clear()
            self.panels.city = city
            self.show_loading()
            try:
                result = self.fetch_pulse(city)
                self._attach_summary(result)
                self.render(result)
                self._set_state(ViewState.SUCCESS)
            except Exception as exc:
                message = exc.message if isinstance(exc, PulseError) else str(exc)
                logger.error("Pulse lookup for %r failed: %s", city, message)
                self.render_error(message)
                self._set_state(ViewState.ERROR)
            finally:
                self.hide_loading()
                self._set_state(ViewState.IDLE)
        finally:
            self._busy.release()
        return True

    def _attach_summary(self, result) -> None:
        provider = self.summary_provider
        if provider is None or result.summary is not None:
            return
        if provider.available:
            result.summary = provider.fetch(result.weather, result.aqi)
        else:
            result.summary = PLACEHOLDER_TEXT
            self.panels.summary_placeholder = True

    def clear(self) -> None:
        p = self.panels
        p.notice = None
        p.location_label = None
        p.data_items = []
        p.raw_data_visible = False
        p.gauge_value = None
        p.gauge_tier = None
        p.gauge_svg = None
        p.gauge_visible = False
        p.summary_text = ""
        p.summary_placeholder = False
        p.summary_visible = False

    def show_loading(self) -> None:
        self.panels.input_enabled = False
        self.panels.button_text = BUTTON_BUSY
        self.panels.spinner_visible = True
        self._set_state(ViewState.LOADING)

    def hide_loading(self) -> None:
        self.panels.input_enabled = True
        self.panels.button_text = BUTTON_IDLE
        self.panels.spinner_visible = False

    def render(self, result) -> None:
        p = self.panels
        if result.location is not None:
            p.location_label = result.location.display_name
        p.data_items = data_lines(result)
        p.raw_data_visible = True

        if result.aqi is not None and result.aqi.is_available:
            value = int(result.aqi.aqi)
            p.gauge_value = value
            p.gauge_tier = aqi_tier(value)
            p.gauge_svg = render_gauge_svg(value)
            p.gauge_visible = True

        p.summary_text = result.summary or MISSING_SUMMARY_TEXT
        p.summary_visible = True

    def render_error(self, message: str) -> None:
        self.panels.data_items = [f"Error: {message}"]
        self.panels.raw_data_visible = True


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>PlanetPulse</title>
<style>
body {{ font-family: Poppins, sans-serif; max-width: 640px; margin: 2rem auto; color: #333; }}
.card {{ border: 1px solid #ddd; border-radius: 12px; padding: 1rem 1.25rem; margin-top: 1rem; }}
.data-label {{ font-weight: 600; }}
.placeholder {{ color: #888; font-style: italic; }}
.notice {{ color: #b00; }}
</style>
</head>
<body>
<h1>PlanetPulse</h1>
<form method="get" action="/">
<input id="city-input" name="city" value="{city}" placeholder="Enter a city"{disabled}>
<button id="search-button" type="submit"{disabled}>{button}</button>
</form>
{body}
</body>
</html>
"""


def _labelled(item: str) -> str:
    label, sep, rest = item.partition(":")
    if not sep or label == "Error":
        return html.escape(item)
    return f'<span class="data-label">{html.escape(label)}:</span>{html.escape(rest)}'


def render_html(panels: Panels) -> str:
    parts = []
    if panels.notice:
        parts.append(f'<p class="notice">{html.escape(panels.notice)}</p>')
    if panels.spinner_visible:
        parts.append('<div id="loading-spinner">Loading...</div>')
    if panels.location_label:
        parts.append(f"<h2>{html.escape(panels.location_label)}</h2>")
    if panels.gauge_visible and panels.gauge_svg:
        parts.append(f'<div id="gauge-container" class="card">{panels.gauge_svg}</div>')
    if panels.summary_visible:
        css = ' class="placeholder"' if panels.summary_placeholder else ""
        parts.append(
            f'<div id="ai-summary" class="card"><h3>AI Summary</h3>'
            f'<p id="summary-text"{css}>{html.escape(panels.summary_text)}</p></div>'
        )
    if panels.raw_data_visible:
        items = "".join(f"<li>{_labelled(i)}</li>" for i in panels.data_items)
        parts.append(f'<div id="raw-data" class="card"><h3>Raw Data</h3><ul id="data-list">{items}</ul></div>')
    return PAGE_TEMPLATE.format(
        city=html.escape(panels.city, quote=True),
        disabled="" if panels.input_enabled else " disabled",
        button=html.escape(panels.button_text),
        body="\n".join(parts),
    )


def _text_gauge(value: int, tier: AqiTier, width: int = 30) -> str:
    filled = round(gauge_sweep_degrees(value) / 180.0 * width)
    return f"[{'#' * filled}{'.' * (width - filled)}] {value} {tier.label}"


def render_text(panels: Panels) -> str:
    lines = []
    if panels.notice:
        lines.append(panels.notice)
    if panels.location_label:
        lines.append(f"== {panels.location_label} ==")
    if panels.gauge_visible and panels.gauge_value is not None and panels.gauge_tier is not None:
        lines.append(_text_gauge(panels.gauge_value, panels.gauge_tier))
    if panels.raw_data_visible:
        lines.extend(f"  {item}" for item in panels.data_items)
    if panels.summary_visible:
        lines.append(f"AI: {panels.summary_text}")
    return "\n".join(lines)
