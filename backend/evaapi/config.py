from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "", "case_sensitive": False}

    # App
    environment: str = "development"
    debug: bool = True
    app_name: str = "EvaMap"
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Upstream data sources
    open_meteo_archive_url: str = "https://archive-api.open-meteo.com/v1/archive"
    eia_base_url: str = "https://api.eia.gov/v2"
    eia_api_key: str = ""
    http_timeout_seconds: float = 30.0
    max_concurrent_fetches: int = 5

    # Cache
    cache_backend: str = "memory"  # "memory" | "redis"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl_seconds: int = 24 * 3600
    coordinate_precision: int = 2

    # Timeline window around "now"
    history_years: int = 5
    projection_months: int = 60

    @property
    def json_logs(self) -> bool:
        return self.environment == "production"


settings = Settings()
