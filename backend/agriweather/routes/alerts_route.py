from fastapi import APIRouter, Depends, Query

from agriweather.core.config import settings
from agriweather.core.db_connection import get_db
from agriweather.models.alert_model import AlertRequest, AlertResponse, AlertListResponse
from agriweather.repos.base_repo import AlertRepository
from agriweather.repos.alert_repo import MongoAlertRepository
from agriweather.repos.local_repo import LocalAlertRepository
from agriweather.routes.weather_route import get_weather_fetcher
from agriweather.services.Alert_service import AlertGenerator
from agriweather.services.Weather_service import MultiSourceWeatherFetcher

router = APIRouter()

# --- Dependency Injection Helper ---
async def get_alert_repository() -> AlertRepository:
    """Get the appropriate repository based on storage mode."""
    if settings.STORAGE_MODE == "mongodb":
        return MongoAlertRepository(await get_db())
    return LocalAlertRepository(settings.LOCAL_DATA_DIR, settings.ALERTS_LIMIT)

@router.post("/alerts", response_model=AlertResponse)
async def generate_alerts_endpoint(
    request: AlertRequest,
    fetcher: MultiSourceWeatherFetcher = Depends(get_weather_fetcher),
    repo: AlertRepository = Depends(get_alert_repository)
):
    """
    Fetches weather for the farm location, evaluates the alert rules and
    stores whatever fired. Provenance is returned so clients can tone down
    advice built on simulated data.
    """
    weather = await fetcher.fetch(request.location)
    alerts = AlertGenerator().generate(weather, request.market, request.crop or "")
    saved = await repo.save_alerts(alerts)
    return AlertResponse(
        alerts=alerts,
        source=weather.source_name,
        isSimulated=weather.is_simulated,
        saved=saved,
    )

@router.get("/alerts", response_model=AlertListResponse)
async def list_alerts_endpoint(
    limit: int = Query(20, ge=1, le=200),
    repo: AlertRepository = Depends(get_alert_repository)
):
    return AlertListResponse(alerts=await repo.get_recent_alerts(limit))
