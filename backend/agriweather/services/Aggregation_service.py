import math
from datetime import date, tzinfo
from typing import Iterable, Optional

from agriweather.models.weather_model import DailyForecast, RawForecastSample

MAX_FORECAST_DAYS = 7


def round_half_up(value: float, digits: int = 0) -> float:
    """Rounds .5 towards +infinity (2.5 -> 3, -2.5 -> -2), never to even."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class _DayBucket:
    __slots__ = ("temps", "humidities", "rain", "condition")

    def __init__(self, condition: str):
        self.temps = []
        self.humidities = []
        self.rain = 0.0
        self.condition = condition


class ForecastAggregator:
    """
    Collapses a sub-daily series (e.g. 3-hour steps) into daily summaries.

    Days keep the order in which they first appear in the input, which is
    already chronological for every forecast API we consume. Only the first
    ``max_days`` distinct days are kept; later ones are dropped, not merged.
    """

    def __init__(self, max_days: int = MAX_FORECAST_DAYS):
        self.max_days = max_days

    def aggregate(
        self, samples: Iterable[RawForecastSample], tz: Optional[tzinfo] = None
    ) -> list[DailyForecast]:
        # Calendar day is taken in ``tz``; None means the server's local calendar
        buckets: dict[date, _DayBucket] = {}

        for sample in samples:
            day = self._calendar_day(sample, tz)
            bucket = buckets.get(day)
            if bucket is None:
                if len(buckets) >= self.max_days:
                    continue
                bucket = buckets[day] = _DayBucket(sample.condition_text)
            bucket.temps.append(sample.temperature_c)
            bucket.humidities.append(sample.humidity_pct)
            bucket.rain += sample.precipitation_mm or 0.0

        return [
            DailyForecast(
                date=day,
                temperature_c=int(round_half_up(sum(b.temps) / len(b.temps))),
                humidity_pct=int(round_half_up(sum(b.humidities) / len(b.humidities))),
                precipitation_mm=round_half_up(b.rain, 1),
                condition_text=b.condition,
            )
            for day, b in buckets.items()
        ]

    @staticmethod
    def _calendar_day(sample: RawForecastSample, tz: Optional[tzinfo]) -> date:
        ts = sample.timestamp
        if ts.tzinfo is None:
            # Naive timestamps are already wall-clock time
            return ts.date()
        return ts.astimezone(tz).date()
