"""
app/cli.py

Command-line front end for PlanetPulse.
- Reads a city name per line
- Either aggregates in-process (AI summary per PULSE_AI_ENABLED / GEMINI_API_KEY)
  or delegates to a running server with --server URL
- Renders the raw data, a text gauge and the summary through PulseView

Usage:
  python3 -m app.cli
  python3 -m app.cli --server http://localhost:3001
  python3 -m app.cli Paris Tokyo
"""

import argparse

from pulse.aggregator import aggregate
from pulse.remote import fetch_remote_pulse
from pulse.summary import provider_from_settings
from pulse.view import PulseView, ViewState, render_text
from util.config import configure_logging, get_settings


def build_view(settings, server=None, out=print):
    """Wire a PulseView to either the local aggregator or a remote server."""

    def on_change(state, panels):
        if state == ViewState.LOADING:
            out(f"{panels.button_text}")

    if server:
        return PulseView(
            lambda city: fetch_remote_pulse(city, server, timeout=settings.llm_timeout + settings.http_timeout),
            on_change=on_change,
        )
    return PulseView(
        lambda city: aggregate(city, timeout=settings.http_timeout),
        summary_provider=provider_from_settings(settings),
        on_change=on_change,
    )


def run_query(view, city, out=print):
    view.search(city)
    out(render_text(view.panels))
    out("")


def main(argv=None):
    """Run one-shot lookups for the given cities, or the interactive loop."""
    parser = argparse.ArgumentParser(description="Check the environmental pulse of a city.")
    parser.add_argument("cities", nargs="*", help="cities to look up (interactive when omitted)")
    parser.add_argument("--server", help="base URL of a running PlanetPulse server")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)
    view = build_view(settings, server=args.server)

    if args.cities:
        for city in args.cities:
            run_query(view, city)
        return

    print("PlanetPulse (type 'exit' to quit)\n")
    while True:
        try:
            raw = input("City: ")
        except EOFError:
            break
        city = raw.strip()
        if city.lower() in {"exit", "quit"}:
            print("Bye!")
            break
        run_query(view, city)


if __name__ == "__main__":
    main()
