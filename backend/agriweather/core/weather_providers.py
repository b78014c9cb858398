"""
Weather Provider Implementations
Live upstream sources behind a unified interface. Every provider turns its
own failures (network, non-2xx, malformed payload) into UpstreamUnavailable.
"""
import httpx
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone, timedelta
from typing import Optional

from agriweather.core.errors import NotFoundError, UpstreamUnavailable
from agriweather.core.logger import logs
from agriweather.models.weather_model import (
    Coordinates,
    CurrentConditions,
    DailyForecast,
    RawForecastSample,
    ResolvedLocation,
    WeatherSnapshot,
)
from agriweather.services.Aggregation_service import ForecastAggregator, round_half_up


def _country_code(value: Optional[str]) -> str:
    value = (value or "").strip()
    return value.upper() if len(value) == 2 else ""


class BaseWeatherProvider(ABC):
    """Base class for all live weather providers"""

    source_name: str = ""
    reliability_score: int = 0

    def __init__(self, api_key: str, timeout: float = 10.0,
                 transport: httpx.AsyncBaseTransport = None):
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport, timeout=self.timeout)

    async def _get_json(self, client: httpx.AsyncClient, url: str, params: dict):
        # URLs are never logged: the credential travels as a query parameter
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(
                f"{self.get_provider_name()} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise UpstreamUnavailable(f"{self.get_provider_name()} timed out") from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(
                f"{self.get_provider_name()} request failed: {type(e).__name__}"
            ) from e
        except ValueError as e:
            raise UpstreamUnavailable(f"{self.get_provider_name()} sent invalid JSON") from e

    @abstractmethod
    async def fetch(self, location_text: str) -> WeatherSnapshot:
        """Fetch a normalized snapshot for a place name"""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of the provider"""
        pass


class OpenWeatherMapProvider(BaseWeatherProvider):
    """OpenWeatherMap: geocoding plus 5-day / 3-hour forecast (primary tier)"""

    source_name = "Primary API"
    reliability_score = 98

    GEO_DIRECT_URL = "https://api.openweathermap.org/geo/1.0/direct"
    GEO_REVERSE_URL = "https://api.openweathermap.org/geo/1.0/reverse"
    FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"

    def __init__(self, api_key: str, timeout: float = 10.0,
                 transport: httpx.AsyncBaseTransport = None,
                 aggregator: ForecastAggregator = None):
        super().__init__(api_key, timeout, transport)
        self.aggregator = aggregator or ForecastAggregator()

    def get_provider_name(self) -> str:
        return "OpenWeatherMap"

    async def geocode(self, query: str) -> Optional[ResolvedLocation]:
        async with self._client() as client:
            places = await self._get_json(
                client, self.GEO_DIRECT_URL, {"q": query, "limit": 1, "appid": self.api_key}
            )
        return self._first_place(places)

    async def reverse_geocode(self, lat: float, lon: float) -> Optional[ResolvedLocation]:
        async with self._client() as client:
            places = await self._get_json(
                client, self.GEO_REVERSE_URL,
                {"lat": lat, "lon": lon, "limit": 1, "appid": self.api_key}
            )
        return self._first_place(places)

    async def fetch(self, location_text: str) -> WeatherSnapshot:
        async with self._client() as client:
            places = await self._get_json(
                client, self.GEO_DIRECT_URL,
                {"q": location_text, "limit": 1, "appid": self.api_key}
            )
            # Forecast snapshots carry the bare place name, like the other tiers
            location = self._first_place(places, full_address=False)
            if location is None:
                raise NotFoundError(f"{self.get_provider_name()} has no match for the location")

            coords = location.coordinates
            logs.log(logging.INFO, f"Fetching {self.get_provider_name()} forecast for "
                                   f"{location.display_name} ({coords.latitude}, {coords.longitude})")
            payload = await self._get_json(
                client, self.FORECAST_URL,
                {"lat": coords.latitude, "lon": coords.longitude,
                 "units": "metric", "appid": self.api_key}
            )

        try:
            return self._to_snapshot(location, payload)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamUnavailable(
                f"{self.get_provider_name()} sent a malformed forecast: {type(e).__name__}"
            ) from e

    def _first_place(self, places, full_address: bool = True) -> Optional[ResolvedLocation]:
        if not isinstance(places, list):
            raise UpstreamUnavailable(f"{self.get_provider_name()} sent a malformed geocoding body")
        if not places:
            return None
        place = places[0]
        try:
            # Address format: "City, State, Country"
            parts = [place.get("name")]
            if full_address:
                parts += [place.get("state"), place.get("country")]
            return ResolvedLocation(
                display_name=", ".join(p for p in parts if p),
                country=_country_code(place.get("country")),
                coordinates=Coordinates(latitude=float(place["lat"]), longitude=float(place["lon"])),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise UpstreamUnavailable(
                f"{self.get_provider_name()} sent a malformed geocoding body"
            ) from e

    def _to_snapshot(self, location: ResolvedLocation, payload: dict) -> WeatherSnapshot:
        items = payload["list"]
        if not items:
            raise ValueError("empty forecast list")

        samples = [
            RawForecastSample(
                timestamp=datetime.fromtimestamp(item["dt"], tz=timezone.utc),
                temperature_c=item["main"]["temp"],
                humidity_pct=item["main"]["humidity"],
                wind_speed_mps=item.get("wind", {}).get("speed", 0.0),
                precipitation_mm=(item.get("rain") or {}).get("3h", 0.0),
                condition_text=item["weather"][0]["description"],
            )
            for item in items
        ]

        # Group by the location's own calendar when the API reports its offset
        tz = None
        offset = (payload.get("city") or {}).get("timezone")
        if isinstance(offset, (int, float)):
            tz = timezone(timedelta(seconds=int(offset)))

        first = items[0]
        current = CurrentConditions(
            temperature_c=int(round_half_up(first["main"]["temp"])),
            condition_text=first["weather"][0]["main"],
            humidity_pct=int(round_half_up(first["main"]["humidity"])),
            wind_speed_kph=round_half_up(samples[0].wind_speed_mps * 3.6),
        )

        return WeatherSnapshot(
            location=location,
            current=current,
            forecast=self.aggregator.aggregate(samples, tz=tz),
            is_simulated=False,
            source_name=self.source_name,
            reliability_score=self.reliability_score,
        )


class WeatherAPIProvider(BaseWeatherProvider):
    """WeatherAPI.com: accepts a place name directly (secondary tier)"""

    source_name = "Secondary API"
    reliability_score = 97

    FORECAST_URL = "https://api.weatherapi.com/v1/forecast.json"

    def get_provider_name(self) -> str:
        return "WeatherAPI.com"

    async def fetch(self, location_text: str) -> WeatherSnapshot:
        async with self._client() as client:
            payload = await self._get_json(
                client, self.FORECAST_URL,
                {"key": self.api_key, "q": location_text, "days": 7}
            )

        try:
            return self._to_snapshot(payload)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamUnavailable(
                f"{self.get_provider_name()} sent a malformed forecast: {type(e).__name__}"
            ) from e

    def _to_snapshot(self, payload: dict) -> WeatherSnapshot:
        place = payload["location"]
        location = ResolvedLocation(
            display_name=place["name"],
            country=_country_code(place.get("country")),
            coordinates=Coordinates(latitude=float(place["lat"]), longitude=float(place["lon"])),
        )

        forecast = []
        for day in payload["forecast"]["forecastday"][:7]:
            summary = day["day"]
            forecast.append(DailyForecast(
                date=datetime.strptime(day["date"], "%Y-%m-%d").date(),
                temperature_c=int(round_half_up(summary["avgtemp_c"])),
                humidity_pct=int(round_half_up(summary["avghumidity"])),
                precipitation_mm=round_half_up(summary.get("totalprecip_mm", 0.0), 1),
                condition_text=summary["condition"]["text"],
            ))
        if not forecast:
            raise ValueError("empty forecast")

        now = payload.get("current")
        if now:
            current = CurrentConditions(
                temperature_c=int(round_half_up(now["temp_c"])),
                condition_text=now["condition"]["text"],
                humidity_pct=int(round_half_up(now["humidity"])),
                wind_speed_kph=float(now["wind_kph"]),
            )
        else:
            # No "current" block: derive it from today's summary
            today = forecast[0]
            wind = payload["forecast"]["forecastday"][0]["day"].get("maxwind_kph") or 0.0
            current = CurrentConditions(
                temperature_c=today.temperature_c,
                condition_text=today.condition_text,
                humidity_pct=today.humidity_pct,
                wind_speed_kph=float(wind),
            )

        return WeatherSnapshot(
            location=location,
            current=current,
            forecast=forecast,
            is_simulated=False,
            source_name=self.source_name,
            reliability_score=self.reliability_score,
        )
