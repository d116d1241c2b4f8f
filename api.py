from __future__ import annotations

import logging
from typing import Optional, Union

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from llm.client import MISSING_KEY_MESSAGE
from pulse.aggregator import aggregate
from pulse.errors import PulseError
from pulse.summary import GeminiSummaryProvider, provider_from_settings
from pulse.view import PulseView, render_html
from util.config import Settings, configure_logging, get_settings


logger = logging.getLogger(__name__)

app = FastAPI(title="PlanetPulse API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class WeatherOut(BaseModel):
    temp: Optional[float] = None
    humidity: Optional[float] = None
    uv: Optional[float] = None


class AqiOut(BaseModel):
    aqi: Union[int, str]


class PulseResponse(BaseModel):
    weather: Optional[WeatherOut] = None
    aqi: Optional[AqiOut] = None
    summary: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


@app.get(
    "/api/pulse",
    response_model=PulseResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def pulse(city: Optional[str] = None, settings: Settings = Depends(get_settings)):
    if not city or not city.strip():
        return _error(400, "City is required.")
    if not settings.has_ai_key:
        logger.error("GEMINI_API_KEY is not set in environment")
        return _error(500, MISSING_KEY_MESSAGE)

    try:
        result = aggregate(
            city,
            summary_provider=GeminiSummaryProvider(settings),
            timeout=settings.http_timeout,
        )
    except PulseError as exc:
        logger.error("Pulse lookup for %r failed: %s", city, exc.message)
        return _error(exc.status_code, exc.message)
    return result.to_payload()


@app.get("/", response_class=HTMLResponse)
def page(city: Optional[str] = None, settings: Settings = Depends(get_settings)):
    view = PulseView(
        lambda c: aggregate(c, timeout=settings.http_timeout),
        summary_provider=provider_from_settings(settings),
    )
    if city is not None:
        view.search(city)
    return HTMLResponse(render_html(view.panels))


@app.get("/healthz")
def healthz(settings: Settings = Depends(get_settings)):
    return {"status": "ok", "ai": settings.ai_enabled and settings.has_ai_key}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
