from agriweather.core.config import SourceConfig
from agriweather.core.weather_providers import OpenWeatherMapProvider, WeatherAPIProvider
from agriweather.models.weather_model import SourceStatus
from agriweather.services.Simulation_service import SIMULATION_RELIABILITY, SIMULATION_SOURCE

# Reliability of the whole chain when both live sources back each other up
BOTH_SOURCES_RELIABILITY = 99


class ReliabilityScorer:
    """Reports which sources are configured. Makes no network calls."""

    def source_statuses(self, config: SourceConfig) -> list[SourceStatus]:
        return [
            SourceStatus(
                source_name=OpenWeatherMapProvider.source_name,
                configured=config.has_primary,
                reliability_score=OpenWeatherMapProvider.reliability_score,
            ),
            SourceStatus(
                source_name=WeatherAPIProvider.source_name,
                configured=config.has_secondary,
                reliability_score=WeatherAPIProvider.reliability_score,
            ),
            SourceStatus(
                source_name=SIMULATION_SOURCE,
                configured=True,
                reliability_score=SIMULATION_RELIABILITY,
            ),
        ]

    def overall_reliability(self, config: SourceConfig) -> int:
        if config.has_primary and config.has_secondary:
            return BOTH_SOURCES_RELIABILITY
        if config.has_primary:
            return OpenWeatherMapProvider.reliability_score
        if config.has_secondary:
            return WeatherAPIProvider.reliability_score
        return SIMULATION_RELIABILITY
