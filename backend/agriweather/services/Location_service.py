import httpx
import logging
from agriweather.core.config import SourceConfig
from agriweather.core.errors import ConfigurationError, NotFoundError, ValidationError
from agriweather.core.logger import logs
from agriweather.core.weather_providers import OpenWeatherMapProvider
from agriweather.models.weather_model import ResolvedLocation


class LocationResolver:
    """
    Turns a place name or a lat/lon pair into a ResolvedLocation.

    One geocoding request per call and no retries. Unlike the weather path
    there is no simulated fallback: an invented address would misstate where
    the advice applies, so NotFoundError reaches the caller as-is.
    """
    def __init__(self, config: SourceConfig, transport: httpx.AsyncBaseTransport = None):
        self.config = config
        self.transport = transport

    def _geocoder(self) -> OpenWeatherMapProvider:
        if not self.config.has_primary:
            logs.log(logging.ERROR, "Geocoding requested but no geocoding source is configured")
            raise ConfigurationError()
        return OpenWeatherMapProvider(
            self.config.primary_key, timeout=self.config.timeout, transport=self.transport
        )

    async def resolve_by_name(self, text: str) -> ResolvedLocation:
        if text is None or not str(text).strip():
            raise ValidationError("Location is required")
        query = str(text).strip()

        location = await self._geocoder().geocode(query)
        if location is None:
            logs.log(logging.INFO, f"No geocoding match for '{query}'")
            raise NotFoundError("No location found for this name")
        return location

    async def resolve_by_coordinates(self, lat: float, lon: float) -> ResolvedLocation:
        if lat is None or lon is None:
            raise ValidationError("Missing latitude or longitude")
        if not -90 <= lat <= 90 or not -180 <= lon <= 180:
            raise ValidationError("Latitude must be within [-90, 90] and longitude within [-180, 180]")

        location = await self._geocoder().reverse_geocode(lat, lon)
        if location is None:
            logs.log(logging.INFO, f"No reverse geocoding match for {lat}, {lon}")
            raise NotFoundError("No location found for these coordinates")
        return location
