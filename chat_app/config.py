from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # GitHub OAuth
    github_client_id: Optional[str] = None
    github_client_secret: Optional[str] = None
    github_oauth_url: str = "https://github.com"
    github_api_url: str = "https://api.github.com"

    # Database
    database_url: str

    # Session cookie
    session_cookie_name: str = "session_token"
    session_max_age_seconds: int = 60 * 60 * 24 * 7

    # Outbound HTTP; unset means calls wait indefinitely
    http_timeout_seconds: Optional[float] = None

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
