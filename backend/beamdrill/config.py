from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path

# Get the directory where this config file lives, then go up to backend/
ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    app_name: str = "Beam Drill"

    # Generation
    default_difficulty: str = "mixed"
    clean_value_attempts: int = 10
    overhang_attempts: int = 15
    random_seed: int | None = None  # fixed seed for reproducible sessions

    # Logging
    log_level: str = "INFO"

    # CORS
    frontend_url: str = "http://localhost:5173"

    class Config:
        env_file = ENV_FILE
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
