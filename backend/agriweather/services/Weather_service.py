import asyncio
import httpx
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Union

from agriweather.core.config import SourceConfig
from agriweather.core.errors import AgriWeatherError, ValidationError
from agriweather.core.logger import logs
from agriweather.core.weather_providers import (
    BaseWeatherProvider,
    OpenWeatherMapProvider,
    WeatherAPIProvider,
)
from agriweather.models.weather_model import WeatherSnapshot
from agriweather.services.Simulation_service import DeterministicSimulator


# --- Tier results ---
@dataclass(frozen=True)
class TierOk:
    snapshot: WeatherSnapshot

@dataclass(frozen=True)
class TierFailed:
    tier: str
    reason: str

TierResult = Union[TierOk, TierFailed]


class MultiSourceWeatherFetcher:
    """
    Walks the failover chain: primary API -> secondary API -> simulation.

    Tiers run strictly one after another and the first one that yields a
    snapshot wins, without comparing it to later tiers. Tier failures are
    logged and never reach the caller; the simulator always answers. The
    fetcher holds no cache or session, so concurrent calls are independent.
    Cancellation is not intercepted: a cancelled fetch returns nothing.
    """
    def __init__(
        self,
        config: SourceConfig,
        transport: httpx.AsyncBaseTransport = None,
        simulator: DeterministicSimulator = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.simulator = simulator or DeterministicSimulator()
        self.clock = clock
        self.tiers = self._build_tiers(transport)

    def _build_tiers(self, transport) -> list[BaseWeatherProvider]:
        tiers = []
        if self.config.has_primary:
            tiers.append(OpenWeatherMapProvider(
                self.config.primary_key, timeout=self.config.timeout, transport=transport
            ))
        if self.config.has_secondary:
            tiers.append(WeatherAPIProvider(
                self.config.secondary_key, timeout=self.config.timeout, transport=transport
            ))
        return tiers

    async def fetch(self, location_text: str) -> WeatherSnapshot:
        if location_text is None or not str(location_text).strip():
            raise ValidationError("Location is required")
        location_text = str(location_text).strip()

        for provider in self.tiers:
            result = await self._attempt(provider, location_text)
            if isinstance(result, TierOk):
                logs.log(logging.INFO, f"Weather for '{location_text}' served by {result.snapshot.source_name}")
                return result.snapshot
            logs.log(logging.WARNING, f"Tier {result.tier} failed for '{location_text}': {result.reason}")

        logs.log(logging.INFO, f"Serving simulated forecast for '{location_text}'")
        return self.simulator.simulate(location_text, self.clock())

    async def _attempt(self, provider: BaseWeatherProvider, location_text: str) -> TierResult:
        tier = provider.get_provider_name()
        try:
            # Overall bound for the tier (geocode + forecast), on top of the
            # per-request httpx timeout
            snapshot = await asyncio.wait_for(
                provider.fetch(location_text), timeout=self.config.timeout
            )
        except asyncio.TimeoutError:
            return TierFailed(tier, f"no answer within {self.config.timeout}s")
        except AgriWeatherError as e:
            return TierFailed(tier, e.message)
        except Exception as e:
            logs.log(logging.ERROR, f"Unexpected error in tier {tier}: {type(e).__name__}: {e}")
            return TierFailed(tier, f"unexpected {type(e).__name__}")
        return TierOk(snapshot)
