"""
pulse/remote.py

Client for the server-side pulse endpoint (GET /api/pulse?city=...).
Used when the summary key lives on the server and the front end only renders.
"""

import requests

from pulse.errors import PulseError
from pulse.models import PulseResult
from util.config import DEFAULT_HTTP_TIMEOUT, DEFAULT_LLM_TIMEOUT


def fetch_remote_pulse(city, base_url, timeout=DEFAULT_HTTP_TIMEOUT + DEFAULT_LLM_TIMEOUT):
    """Return the server's PulseResult; a non-2xx reply raises PulseError with the server's message."""
    endpoint = f"{base_url.rstrip('/')}/api/pulse"
    resp = requests.get(endpoint, params={"city": city}, timeout=timeout)
    if not resp.ok:
        try:
            message = (resp.json() or {}).get("error")
        except ValueError:
            message = None
        err = PulseError(message or f"Server error: {resp.reason}")
        err.status_code = resp.status_code
        raise err
    return PulseResult.from_payload(resp.json())
