from dataclasses import dataclass
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder values shipped in sample .env files; treated as "not configured"
PLACEHOLDER_KEYS = {"", "demo", "your-key-here"}

class Settings(BaseSettings):
    # Storage mode for generated alerts: "mongodb" or "local"
    STORAGE_MODE: str = "local"
    LOCAL_DATA_DIR: str = "data"

    # MongoDB Configuration (only needed if STORAGE_MODE=mongodb)
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "agriweather_db"

    LOGGER: int = 20
    LOG_TO_FILE: bool = True

    # Weather sources. Either may be absent; with neither set every
    # forecast is served by the simulator.
    OPENWEATHER_API_KEY: Optional[str] = None
    WEATHERAPI_KEY: Optional[str] = None

    # Upper bound (seconds) for every outbound call and every failover tier
    HTTP_TIMEOUT: float = 10.0

    ALERTS_LIMIT: int = 50

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )


def _clean_key(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if value.lower() in PLACEHOLDER_KEYS:
        return None
    return value


@dataclass(frozen=True)
class SourceConfig:
    """
    Credentials for the weather failover chain.
    A missing key removes that tier from the chain.
    """
    primary_key: Optional[str] = None
    secondary_key: Optional[str] = None
    timeout: float = 10.0

    def __post_init__(self):
        object.__setattr__(self, "primary_key", _clean_key(self.primary_key))
        object.__setattr__(self, "secondary_key", _clean_key(self.secondary_key))

    @property
    def has_primary(self) -> bool:
        return self.primary_key is not None

    @property
    def has_secondary(self) -> bool:
        return self.secondary_key is not None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SourceConfig":
        return cls(
            primary_key=settings.OPENWEATHER_API_KEY,
            secondary_key=settings.WEATHERAPI_KEY,
            timeout=settings.HTTP_TIMEOUT,
        )

    def __repr__(self) -> str:
        # Never render credential values
        return (
            f"SourceConfig(primary={'set' if self.has_primary else 'unset'}, "
            f"secondary={'set' if self.has_secondary else 'unset'}, timeout={self.timeout})"
        )


settings = Settings()
