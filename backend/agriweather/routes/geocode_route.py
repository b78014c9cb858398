from typing import Optional
from fastapi import APIRouter, Depends

from agriweather.core.config import SourceConfig
from agriweather.core.errors import ValidationError
from agriweather.models.weather_model import GeocodeResponse
from agriweather.routes.weather_route import get_source_config
from agriweather.services.Location_service import LocationResolver

router = APIRouter()

def get_location_resolver(config: SourceConfig = Depends(get_source_config)) -> LocationResolver:
    return LocationResolver(config)

def _parse_coordinate(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        raise ValidationError("Latitude and longitude must be numbers")

@router.get("/geocode", response_model=GeocodeResponse)
async def reverse_geocode_endpoint(
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    resolver: LocationResolver = Depends(get_location_resolver)
):
    # Raw strings so that missing or malformed values map to 400, not 422
    latitude = _parse_coordinate(lat)
    longitude = _parse_coordinate(lon)
    location = await resolver.resolve_by_coordinates(latitude, longitude)
    return GeocodeResponse(address=location.display_name)
