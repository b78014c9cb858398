from datetime import datetime, timezone
from typing import Optional

from agriweather.models.alert_model import (
    Alert,
    AlertCategory,
    AlertSeverity,
    MarketSnapshot,
)
from agriweather.models.weather_model import WeatherSnapshot
from agriweather.services.Aggregation_service import round_half_up

HEAT_THRESHOLD_C = 35
WIND_THRESHOLD_KPH = 30
PRICE_DROP_RATIO = 0.9


class AlertGenerator:
    """
    Threshold rules over a weather snapshot and an optional market snapshot.

    Each rule looks only at its own inputs, so a missing ``current`` block or
    missing market data skips that rule and nothing else. No I/O.
    """

    def generate(
        self,
        weather: Optional[WeatherSnapshot],
        market: Optional[MarketSnapshot],
        crop_label: str,
        now: datetime = None,
    ) -> list[Alert]:
        created_at = now or datetime.now(timezone.utc)
        crop = crop_label.strip() if crop_label and crop_label.strip() else "Crop"
        alerts = []

        current = weather.current if weather is not None else None
        if current is not None:
            if current.temperature_c > HEAT_THRESHOLD_C:
                alerts.append(Alert(
                    category=AlertCategory.WEATHER,
                    severity=AlertSeverity.WARNING,
                    title="High Heat Warning",
                    message=f"Temperature is {int(round_half_up(current.temperature_c))}°C. "
                            f"Ensure adequate irrigation for {crop}.",
                    created_at=created_at,
                ))

            condition = (current.condition_text or "").lower()
            if "rain" in condition or "storm" in condition:
                alerts.append(Alert(
                    category=AlertCategory.WEATHER,
                    severity=AlertSeverity.CRITICAL,
                    title="Rain Alert",
                    message=f"Heavy rain detected ({current.condition_text}). Pause spraying activities.",
                    created_at=created_at,
                ))

            if current.wind_speed_kph > WIND_THRESHOLD_KPH:
                alerts.append(Alert(
                    category=AlertCategory.WEATHER,
                    severity=AlertSeverity.WARNING,
                    title="High Winds",
                    message=f"Wind speed {current.wind_speed_kph:g} km/h. Avoid high sprayers.",
                    created_at=created_at,
                ))

        if market is not None and market.current_price is not None and market.price_history:
            last_avg = market.price_history[-1].avg_price
            if market.current_price.modal < last_avg * PRICE_DROP_RATIO:
                alerts.append(Alert(
                    category=AlertCategory.MARKET,
                    severity=AlertSeverity.CRITICAL,
                    title="Price Drop Alert",
                    message=f"Market price for {market.crop_name} has dropped below last month's average.",
                    created_at=created_at,
                ))

        return alerts
