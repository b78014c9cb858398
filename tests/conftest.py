"""
Shared fixtures: fake upstream payloads and an httpx.MockTransport router.
"""
import os

# Must be set before agriweather.core.config is imported
os.environ["LOG_TO_FILE"] = "false"
os.environ["STORAGE_MODE"] = "local"
os.environ["OPENWEATHER_API_KEY"] = ""
os.environ["WEATHERAPI_KEY"] = ""

from datetime import datetime, timedelta, timezone

import httpx
import pytest


IST_OFFSET_SECONDS = 19800


def owm_geocode_body(name="Guntur", state="Andhra Pradesh", country="IN", lat=16.3067, lon=80.4365):
    return [{"name": name, "state": state, "country": country, "lat": lat, "lon": lon}]


def owm_forecast_body(days=2, temps=(30.0, 25.0)):
    """
    8 three-hour samples per day, starting at local midnight (IST) on
    2026-10-19 so every local calendar day is complete.
    """
    start = datetime(2026, 10, 18, 18, 30, tzinfo=timezone.utc)
    items = []
    for i in range(days * 8):
        ts = start + timedelta(hours=3 * i)
        items.append({
            "dt": int(ts.timestamp()),
            "main": {"temp": temps[i // 8] + (0.4 if i == 0 else 0.0), "humidity": 60},
            "wind": {"speed": 5.0},
            "rain": {"3h": 0.5},
            "weather": [{"main": "Clouds", "description": "scattered clouds"}],
        })
    return {"city": {"name": "Guntur", "timezone": IST_OFFSET_SECONDS}, "list": items}


def weatherapi_body():
    return {
        "location": {"name": "Guntur", "country": "India", "lat": 16.31, "lon": 80.44},
        "current": {
            "temp_c": 31.5,
            "condition": {"text": "Patchy rain possible"},
            "humidity": 70,
            "wind_kph": 12.2,
        },
        "forecast": {"forecastday": [
            {"date": "2026-10-19", "day": {
                "avgtemp_c": 29.5, "avghumidity": 71, "totalprecip_mm": 3.25,
                "condition": {"text": "Patchy rain possible"}}},
            {"date": "2026-10-20", "day": {
                "avgtemp_c": 28.2, "avghumidity": 65, "totalprecip_mm": 0.0,
                "condition": {"text": "Sunny"}}},
        ]},
    }


class FakeUpstream:
    """
    Routes requests by path to canned responses and records every call.
    A route value may be a JSON-able body, an httpx.Response, or an exception.
    """
    def __init__(self, routes: dict):
        self.routes = routes
        self.calls = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        outcome = self.routes.get(request.url.path)
        if outcome is None:
            return httpx.Response(404, json={"message": "no route"})
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(200, json=outcome)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, path: str) -> int:
        return sum(1 for r in self.calls if r.url.path == path)


OWM_GEO_DIRECT = "/geo/1.0/direct"
OWM_GEO_REVERSE = "/geo/1.0/reverse"
OWM_FORECAST = "/data/2.5/forecast"
WEATHERAPI_FORECAST = "/v1/forecast.json"


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2026, 10, 19, 9, 30)
