from fastapi import APIRouter, Depends

from agriweather.core.config import SourceConfig, settings
from agriweather.models.weather_model import WeatherRequest, WeatherResponse, SourcesResponse
from agriweather.services.Weather_service import MultiSourceWeatherFetcher
from agriweather.services.Reliability_service import ReliabilityScorer

router = APIRouter()

# --- Dependency Injection ---
def get_source_config() -> SourceConfig:
    return SourceConfig.from_settings(settings)

def get_weather_fetcher(config: SourceConfig = Depends(get_source_config)) -> MultiSourceWeatherFetcher:
    return MultiSourceWeatherFetcher(config)

@router.post("/weather", response_model=WeatherResponse, response_model_exclude_none=True)
async def get_weather_endpoint(
    request: WeatherRequest,
    fetcher: MultiSourceWeatherFetcher = Depends(get_weather_fetcher)
):
    snapshot = await fetcher.fetch(request.location)
    return WeatherResponse.from_snapshot(snapshot)

@router.get("/weather/sources", response_model=SourcesResponse)
async def get_sources_endpoint(config: SourceConfig = Depends(get_source_config)):
    scorer = ReliabilityScorer()
    return SourcesResponse(
        overall_reliability=scorer.overall_reliability(config),
        sources=scorer.source_statuses(config),
    )
