"""
pulse/summary.py

Summary provider capability: whether AI summaries are on is a setting, not a separate client.

Classes:
- GeminiSummaryProvider: asks Gemini for a 2-sentence summary (degrades to a fallback string).
- PlaceholderSummaryProvider: AI switched off; the summary card shows a "coming soon" note.
"""

from __future__ import annotations

from typing import Protocol

from llm.client import summarize


PLACEHOLDER_TEXT = "AI-powered analysis coming soon."


class SummaryProvider(Protocol):
    available: bool

    def fetch(self, weather, aqi) -> str: ...


class GeminiSummaryProvider:
    available = True

    def __init__(self, settings):
        self.settings = settings

    def fetch(self, weather, aqi) -> str:
        return summarize(weather, aqi, self.settings)


class PlaceholderSummaryProvider:
    available = False

    def fetch(self, weather, aqi) -> str:
        return PLACEHOLDER_TEXT


def provider_from_settings(settings) -> SummaryProvider:
    """Gemini when AI is enabled and a key is present, otherwise the placeholder."""
    if settings.ai_enabled and settings.has_ai_key:
        return GeminiSummaryProvider(settings)
    return PlaceholderSummaryProvider()
