"""SafePath Application Configuration.

Centralized configuration management for the SafePath risk surface engine using
Pydantic settings. Handles environment variables, snapshot file locations,
query defaults and the settings of the geocoding proxy.

Environment variables are loaded from .env file in development and from the
system environment in production.
"""

from typing import Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Base risk by case resolution status (exact, case-sensitive match).
# Any status not listed here falls back to DEFAULT_RESOLUTION_RISK.
RESOLUTION_BASE_RISK: Dict[str, float] = {
    "Under investigation": 0.2,
    "No further action": 0.4,
}
DEFAULT_RESOLUTION_RISK = 0.6

# Winter months get a small risk boost
WINTER_MONTHS = (12, 1, 2)
WINTER_BOOST = 0.1

# Heatmap grid cell size in degrees, per map resolution
HEATMAP_CELL_SIZES: Dict[str, float] = {
    "high": 0.0025,
    "medium": 0.005,
    "low": 0.01,
}


class Settings(BaseSettings):
    """Application settings - single source of truth for configuration."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = ""

    # Data files
    HEATMAP_DATA_PATH: str = Field(default="data/processed/heatmap.json")
    POI_DATA_PATH: str = Field(default="data/processed/poi.json")
    RAW_DATA_DIR: str = Field(default="data/raw")

    # Query defaults
    DEFAULT_MONTHS_BACK: int = 6
    DEFAULT_RESOLUTION: str = "medium"
    DEFAULT_ALGORITHM: str = "safe-aware"
    WALKING_SPEED_KMH: float = 5.0

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60

    # Geocoding
    GEOCODER_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODER_USER_AGENT: str = "SafePath-POC/1.0"
    GEOCODER_RESULT_LIMIT: int = 5

    @field_validator("CORS_ORIGINS")
    @classmethod
    def parse_cors_origins(cls, v: str) -> List[str]:
        """Parse comma-separated CORS origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        if isinstance(self.CORS_ORIGINS, str):
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        return self.CORS_ORIGINS


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
