"""
llm/client.py

Gemini-only LLM client for the pulse summary.
- call_gemini(prompt, settings): one generateContent request, returns the first candidate's text
- summarize(weather, aqi, settings): never raises on upstream trouble; degrades to a fallback string

Environment variables (see util/config.py):
- GEMINI_API_KEY   (required)
- GEMINI_API_URL   (default: https://generativelanguage.googleapis.com/v1beta)
- GEMINI_MODEL     (default: gemini-2.5-flash-preview-09-2025)
- GEMINI_OFFLINE   (set to 1/true to stub responses without calling the API)
- LLM_TIMEOUT      (default 30s)
"""

import logging

import requests

from pulse.errors import ConfigurationError, SummarizationError
from pulse.prompts import build_summary_prompt
from util.http import post_json


logger = logging.getLogger(__name__)

FALLBACK_FAILED = "Failed to connect to AI."
FALLBACK_EMPTY = "Could not generate AI summary."
MISSING_KEY_MESSAGE = "Server is not configured. AI key is missing."


def call_gemini(prompt, settings):
    """
    Send `prompt` to Gemini generateContent.

    Returns:
        The first candidate's first text part, or "" when the response carries none.

    Raises:
        ConfigurationError: no API key configured (checked before any network call).
        SummarizationError: non-success status, network failure or a non-JSON reply.
    """
    if not settings.gemini_api_key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)

    if settings.gemini_offline:
        preview = (prompt or "").strip().splitlines()
        return f"[offline] {preview[0][:120]}" if preview else "[offline] OK"

    endpoint = f"{settings.gemini_api_url}/models/{settings.gemini_model}:generateContent"
    payload = {"contents": [{"parts": [{"text": prompt}]}]}
    try:
        data = post_json(
            endpoint,
            payload,
            params={"key": settings.gemini_api_key},
            timeout=settings.llm_timeout,
        )
    except requests.HTTPError as http_err:
        status = getattr(http_err.response, "status_code", None)
        body = http_err.response.text[:500] if http_err.response is not None else ""
        logger.error("Gemini API error (HTTP %s): %s", status, body)
        raise SummarizationError(f"Gemini API error (HTTP {status})") from http_err
    except (requests.RequestException, ValueError) as exc:
        raise SummarizationError(f"Gemini API call failed: {exc.__class__.__name__}") from exc

    try:
        text = data["candidates"][0]["content"]["parts"][0].get("text")
    except (KeyError, IndexError, TypeError, AttributeError):
        text = None
    return (text or "").strip()


def summarize(weather, aqi, settings):
    """Return a short summary for the readings, or a fallback string.

    ConfigurationError is the only error that escapes.
    """
    prompt = build_summary_prompt(weather, aqi)
    try:
        text = call_gemini(prompt, settings)
    except SummarizationError as exc:
        logger.error("Gemini API call failed: %s", exc)
        return FALLBACK_FAILED
    return text or FALLBACK_EMPTY
