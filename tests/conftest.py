import threading

import pytest
import requests

from tools.air_quality import AIR_QUALITY_URL
from tools.geocoding import GEOCODING_URL
from tools.weather import FORECAST_URL
from util.config import Settings


PARIS_GEO = {"results": [{"name": "Paris", "country": "France", "latitude": 48.85, "longitude": 2.35}]}
PARIS_WEATHER = {
    "current": {"temperature_2m": 18, "relative_humidity_2m": 60},
    "daily": {"uv_index_max": [4]},
}
PARIS_AQI = {"current": {"us_aqi": 42}}
GEMINI_OK = {"candidates": [{"content": {"parts": [{"text": "Air is clean. Enjoy the sun with sunscreen."}]}}]}


def http_error(status, body=""):
    resp = requests.Response()
    resp.status_code = status
    resp._content = body.encode("utf-8")
    resp.reason = "Error"
    return requests.HTTPError(f"{status} Error", response=resp)


class FakeHttp:
    """Routes get_json/post_json by URL prefix to canned payloads or exceptions."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self._lock = threading.Lock()

    def route(self, url, payload=None, error=None):
        self.routes[url] = error if error is not None else payload

    def _answer(self, method, url, params, payload=None, timeout=None):
        with self._lock:
            self.calls.append({"method": method, "url": url, "params": params, "json": payload, "timeout": timeout})
        for prefix, answer in self.routes.items():
            if url.startswith(prefix):
                if isinstance(answer, BaseException):
                    raise answer
                return answer
        raise requests.ConnectionError(f"no fake route for {url}")

    def get_json(self, url, params=None, headers=None, timeout=None):
        return self._answer("GET", url, params, timeout=timeout)

    def post_json(self, url, payload, params=None, headers=None, timeout=None):
        return self._answer("POST", url, params, payload, timeout=timeout)

    def urls(self):
        return [c["url"] for c in self.calls]


@pytest.fixture
def fake_http(monkeypatch):
    fake = FakeHttp()
    monkeypatch.setattr("tools.geocoding.get_json", fake.get_json)
    monkeypatch.setattr("tools.weather.get_json", fake.get_json)
    monkeypatch.setattr("tools.air_quality.get_json", fake.get_json)
    monkeypatch.setattr("llm.client.post_json", fake.post_json)
    return fake


@pytest.fixture
def paris(fake_http):
    fake_http.route(GEOCODING_URL, PARIS_GEO)
    fake_http.route(FORECAST_URL, PARIS_WEATHER)
    fake_http.route(AIR_QUALITY_URL, PARIS_AQI)
    fake_http.route("https://generativelanguage.googleapis.com", GEMINI_OK)
    return fake_http


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", http_timeout=2.0, llm_timeout=2.0)
