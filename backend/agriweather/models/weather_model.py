from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime, date

# --- Domain Models ---
# Immutable once built; a snapshot is never mutated after construction.

class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

class ResolvedLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_name: str
    country: str = ""  # 2-letter code or empty
    coordinates: Coordinates

class RawForecastSample(BaseModel):
    """One sub-daily observation as reported by a real upstream source."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    temperature_c: float
    humidity_pct: float
    wind_speed_mps: float = 0.0
    precipitation_mm: float = 0.0
    condition_text: str = ""

class DailyForecast(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    temperature_c: int
    humidity_pct: int
    precipitation_mm: float
    condition_text: str

class CurrentConditions(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature_c: int
    condition_text: str
    humidity_pct: int
    wind_speed_kph: float

class WeatherSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: ResolvedLocation
    current: Optional[CurrentConditions] = None
    forecast: List[DailyForecast] = Field(default_factory=list, max_length=7)
    is_simulated: bool
    source_name: str
    reliability_score: int = Field(..., ge=0, le=100)

class SourceStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_name: str
    configured: bool
    reliability_score: int

# --- API Request/Response Models ---

class WeatherRequest(BaseModel):
    location: Optional[str] = None

class WireCoordinates(BaseModel):
    lat: float
    lon: float

class WireCondition(BaseModel):
    text: str

class WireCurrent(BaseModel):
    temp_c: int
    condition: WireCondition
    humidity: int
    wind_kph: float

class WireDailyForecast(BaseModel):
    date: str
    temp: int
    humidity: int
    rain: float
    description: str

class WeatherResponse(BaseModel):
    location: str
    country: str
    coordinates: WireCoordinates
    current: Optional[WireCurrent] = None
    forecast: List[WireDailyForecast]
    source: str
    reliability: int
    isRealData: Optional[bool] = None
    isMockData: Optional[bool] = None
    simulationMode: Optional[bool] = None

    @classmethod
    def from_snapshot(cls, snapshot: WeatherSnapshot) -> "WeatherResponse":
        current = None
        if snapshot.current is not None:
            current = WireCurrent(
                temp_c=snapshot.current.temperature_c,
                condition=WireCondition(text=snapshot.current.condition_text),
                humidity=snapshot.current.humidity_pct,
                wind_kph=snapshot.current.wind_speed_kph,
            )
        coords = snapshot.location.coordinates
        response = cls(
            location=snapshot.location.display_name,
            country=snapshot.location.country,
            coordinates=WireCoordinates(lat=coords.latitude, lon=coords.longitude),
            current=current,
            forecast=[
                WireDailyForecast(
                    date=f.date.isoformat(),
                    temp=f.temperature_c,
                    humidity=f.humidity_pct,
                    rain=f.precipitation_mm,
                    description=f.condition_text,
                )
                for f in snapshot.forecast
            ],
            source=snapshot.source_name,
            reliability=snapshot.reliability_score,
        )
        if snapshot.is_simulated:
            response.isMockData = True
            response.simulationMode = True
        else:
            response.isRealData = True
        return response

class SourcesResponse(BaseModel):
    overall_reliability: int
    sources: List[SourceStatus]

class GeocodeResponse(BaseModel):
    address: str
