from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TASKS_", env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./tasks.db"
    host: str = "0.0.0.0"
    port: int = 8080
    static_dir: str = "static"
    log_level: str = "INFO"
    metrics_enabled: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
