"""
Deterministic weather simulation, the last tier of the failover chain.

The output is a pure function of the location text and the calendar date of
the reference time, so it can be served repeatedly without caching and two
requests on the same day always agree. It is an approximation for keeping the
advisory features alive, not a forecasting model.
"""
import math
from datetime import date, datetime, timedelta
from typing import Union

from agriweather.models.weather_model import (
    Coordinates,
    CurrentConditions,
    DailyForecast,
    ResolvedLocation,
    WeatherSnapshot,
)
from agriweather.services.Aggregation_service import round_half_up

SIMULATION_SOURCE = "Simulation"
SIMULATION_RELIABILITY = 85
FORECAST_DAYS = 7

# India-centric defaults used for every simulated location
DEFAULT_COUNTRY = "IN"
DEFAULT_COORDINATES = Coordinates(latitude=17.3850, longitude=78.4867)

# season -> (base temperature C, base humidity %)
SEASONS = {
    "Summer": (32, 40),
    "Monsoon": (27, 80),
    "Post-Monsoon": (26, 65),
    "Winter": (22, 50),
}

TEMP_AMPLITUDE = 2.0
LOCATION_TEMP_SPREAD = 3.0
HUMIDITY_AMPLITUDE = 10.0
MAX_WIND_KPH = 20.0


def location_hash(text: str) -> int:
    """
    Polynomial rolling hash ``h = code + (h << 5) - h`` over UTF-16 code
    units, wrapped to a signed 32-bit integer at every step.
    """
    raw = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(raw), 2):
        code = raw[i] | (raw[i + 1] << 8)
        h = (code + (h << 5) - h) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
    return h


def season_for(month: int) -> str:
    """Northern-hemisphere (India) season for a 1-based calendar month."""
    if 3 <= month <= 5:
        return "Summer"
    if 6 <= month <= 9:
        return "Monsoon"
    if month == 10:
        return "Post-Monsoon"
    return "Winter"


def _condition(season: str, rain_mm: float, humidity: int) -> str:
    if rain_mm >= 10:
        return "Heavy rain"
    if rain_mm > 0:
        return "Light rain"
    if season == "Summer":
        return "Sunny"
    if humidity >= 70:
        return "Partly cloudy"
    return "Clear"


class DeterministicSimulator:

    def simulate(self, location_text: str, reference: Union[date, datetime]) -> WeatherSnapshot:
        if isinstance(reference, datetime):
            reference = reference.date()

        h = location_hash(location_text)
        season = season_for(reference.month)
        base_temp, base_humidity = SEASONS[season]
        day_seed = reference.day
        # Per-location shift and phase so different places get different curves
        location_offset = math.sin(h) * LOCATION_TEMP_SPREAD
        phase = h % 7

        forecast = []
        for index in range(FORECAST_DAYS):
            variation = math.sin(index + day_seed + phase) * TEMP_AMPLITUDE
            temperature = int(round_half_up(base_temp + location_offset + variation))

            humidity = base_humidity + math.cos(h + index) * HUMIDITY_AMPLITUDE
            humidity = int(min(100, max(0, round_half_up(humidity))))

            rain = 0.0
            if season == "Monsoon":
                rain = round_half_up(abs(math.sin(h * 2 + index)) * 20, 1)

            forecast.append(DailyForecast(
                date=reference + timedelta(days=index),
                temperature_c=temperature,
                humidity_pct=humidity,
                precipitation_mm=rain,
                condition_text=_condition(season, rain, humidity),
            ))

        today = forecast[0]
        current = CurrentConditions(
            temperature_c=today.temperature_c,
            condition_text=today.condition_text,
            humidity_pct=today.humidity_pct,
            wind_speed_kph=round_half_up(abs(math.cos(h)) * MAX_WIND_KPH, 1),
        )

        return WeatherSnapshot(
            location=ResolvedLocation(
                display_name=location_text,
                country=DEFAULT_COUNTRY,
                coordinates=DEFAULT_COORDINATES,
            ),
            current=current,
            forecast=forecast,
            is_simulated=True,
            source_name=SIMULATION_SOURCE,
            reliability_score=SIMULATION_RELIABILITY,
        )
