from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    environment: str = ""
    debug: bool = False
    sentry_dsn: str = ""
    frontend_url: str = "http://localhost:3000"
    max_resume_bytes: int = 5 * 1024 * 1024  # 5MB
    default_display_name: str = "My"
    rate_limit_enabled: bool = True
    resume_upload_rate_limit: str = "30/minute"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
