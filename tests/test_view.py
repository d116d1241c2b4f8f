import threading

import pytest

from pulse.aggregator import aggregate
from pulse.errors import AllSourcesFailedError
from pulse.models import AirQualityReading, Location, PulseResult, WeatherReading
from pulse.summary import GeminiSummaryProvider, PlaceholderSummaryProvider
from pulse.view import (
    AQI_TIERS,
    BUTTON_BUSY,
    BUTTON_IDLE,
    EMPTY_INPUT_NOTICE,
    MISSING_SUMMARY_TEXT,
    PulseView,
    ViewState,
    aqi_tier,
    data_lines,
    gauge_sweep_degrees,
    render_gauge_svg,
    render_html,
    render_text,
)


@pytest.mark.parametrize(
    "value,label",
    [
        (0, "Good"),
        (50, "Good"),
        (51, "Moderate"),
        (100, "Moderate"),
        (101, "Unhealthy (Sensitive Groups)"),
        (150, "Unhealthy (Sensitive Groups)"),
        (151, "Unhealthy"),
        (200, "Unhealthy"),
        (201, "Very Unhealthy"),
        (300, "Very Unhealthy"),
        (301, "Hazardous"),
        (999, "Hazardous"),
    ],
)
def test_tier_boundaries(value, label):
    assert aqi_tier(value).label == label


def test_tiers_cover_every_value_in_order():
    labels = [t.label for t in AQI_TIERS]
    previous = 0
    for v in range(0, 700):
        idx = labels.index(aqi_tier(v).label)
        assert idx >= previous
        previous = idx
    assert previous == len(AQI_TIERS) - 1


def test_negative_aqi_is_rejected():
    with pytest.raises(ValueError):
        aqi_tier(-1)


def test_gauge_sweep_is_monotonic_and_clamped():
    sweeps = [gauge_sweep_degrees(v) for v in range(0, 400)]
    assert sweeps == sorted(sweeps)
    assert gauge_sweep_degrees(0) == 0
    assert gauge_sweep_degrees(150) == 90
    assert gauge_sweep_degrees(300) == 180
    assert gauge_sweep_degrees(5000) == 180


def test_gauge_svg_uses_tier_color_and_label():
    svg = render_gauge_svg(42)
    assert "#00e400" in svg
    assert ">42<" in svg
    assert ">Good<" in svg
    assert svg.count("<path") == 2


def test_gauge_beyond_scale_shows_true_value():
    svg = render_gauge_svg(420)
    assert ">420<" in svg
    assert "#7e0023" in svg


def test_data_lines_only_for_present_readings():
    result = PulseResult(aqi=AirQualityReading(aqi="N/A"))
    assert data_lines(result) == ["US AQI: N/A"]


def test_missing_weather_values_render_as_na():
    result = PulseResult(weather=WeatherReading(temperature_c=None, humidity_pct=60, uv_index_max=None))
    assert data_lines(result) == ["Temperature: N/A °C", "Humidity: 60 %", "Max UV Index: N/A"]


def paris_result(summary=None):
    return PulseResult(
        weather=WeatherReading(temperature_c=18, humidity_pct=60, uv_index_max=4),
        aqi=AirQualityReading(aqi=42),
        summary=summary,
        location=Location(48.85, 2.35, "Paris", "France"),
    )


def test_end_to_end_paris_render(paris, settings):
    view = PulseView(lambda c: aggregate(c), summary_provider=GeminiSummaryProvider(settings))
    assert view.search("Paris")

    p = view.panels
    assert p.data_items == [
        "Temperature: 18 °C",
        "Humidity: 60 %",
        "Max UV Index: 4",
        "US AQI: 42",
    ]
    assert p.gauge_visible
    assert p.gauge_tier.label == "Good"
    assert p.gauge_tier.color == "#00e400"
    assert p.summary_text == "Air is clean. Enjoy the sun with sunscreen."
    assert view.transitions == [ViewState.LOADING, ViewState.SUCCESS, ViewState.IDLE]
    assert p.input_enabled and not p.spinner_visible and p.button_text == BUTTON_IDLE


def test_loading_disables_input_and_clears_previous_results():
    snapshots = []

    def on_change(state, panels):
        if state == ViewState.LOADING:
            snapshots.append((panels.input_enabled, panels.button_text, panels.spinner_visible, list(panels.data_items), panels.gauge_visible))

    view = PulseView(lambda c: paris_result("ok"), on_change=on_change)
    view.search("Paris")
    view.search("Paris")
    assert snapshots[1] == (False, BUTTON_BUSY, True, [], False)


def test_failure_renders_error_line_and_restores_input():
    def boom(city):
        raise AllSourcesFailedError("All data sources (Open-Meteo) failed.")

    view = PulseView(boom)
    view.search("Paris")
    p = view.panels
    assert p.data_items == ["Error: All data sources (Open-Meteo) failed."]
    assert p.raw_data_visible
    assert not p.summary_visible and not p.gauge_visible
    assert p.input_enabled and not p.spinner_visible
    assert view.transitions == [ViewState.LOADING, ViewState.ERROR, ViewState.IDLE]


def test_empty_input_shows_notice_without_loading():
    view = PulseView(lambda c: pytest.fail("must not fetch"))
    assert not view.search("   ")
    assert view.panels.notice == EMPTY_INPUT_NOTICE
    assert view.transitions == []


def test_unavailable_aqi_hides_gauge_and_missing_summary_uses_default():
    result = PulseResult(
        weather=WeatherReading(temperature_c=21.5, humidity_pct=40, uv_index_max=7.25),
        aqi=AirQualityReading(aqi="N/A"),
    )
    view = PulseView(lambda c: result)
    view.search("Somewhere")
    assert not view.panels.gauge_visible
    assert view.panels.summary_text == MISSING_SUMMARY_TEXT
    assert "Temperature: 21.5 °C" in view.panels.data_items


def test_placeholder_provider_marks_summary_card():
    view = PulseView(lambda c: paris_result(), summary_provider=PlaceholderSummaryProvider())
    view.search("Paris")
    assert view.panels.summary_placeholder
    assert "coming soon" in view.panels.summary_text


def test_search_while_busy_is_ignored():
    started = threading.Event()
    release = threading.Event()

    def slow(city):
        started.set()
        release.wait(timeout=2)
        return paris_result("ok")

    view = PulseView(slow)
    worker = threading.Thread(target=view.search, args=("Paris",))
    worker.start()
    started.wait(timeout=2)
    assert view.search("Berlin") is False
    release.set()
    worker.join(timeout=2)
    assert view.panels.city == "Paris"


def test_html_and_text_surfaces():
    view = PulseView(lambda c: paris_result("Fine day."))
    view.search("Paris")
    page = render_html(view.panels)
    assert '<ul id="data-list">' in page
    assert '<span class="data-label">US AQI:</span> 42' in page
    assert "<svg" in page
    assert "Fine day." in page

    text = render_text(view.panels)
    assert "== Paris, France ==" in text
    assert "42 Good" in text
    assert "AI: Fine day." in text
