from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    STATS_API_BASE: str = "https://api.bilibili.com"

    # Certificate verification for outbound calls, scoped to our own client
    VERIFY_TLS: bool = True
    HTTP_TIMEOUT: Optional[float] = 30.0

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    LOG_LEVEL: str = "INFO"

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create a single instance of the settings to use everywhere
settings = Settings()
