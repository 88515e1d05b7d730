from pydantic_settings import BaseSettings

from shared.constants import MAX_RING_VERTICES


class Settings(BaseSettings):
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: str = "*"             # comma separated
    MAX_RING_VERTICES: int = MAX_RING_VERTICES
    DEFAULT_AREA_UNIT: str = "HECTARE"
    REFERENCE_AREA_ENABLED: bool = True       # pyproj Geod cross-check in /measure
    CACHE_TOLERANCE_M2: float = 0.5           # persisted area drift before it counts as stale

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def cors_origins(self):
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


settings = Settings()
