"""Gateway configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gateway settings loaded from environment variables."""

    # S3 bucket
    S3_BUCKET: str = ""
    S3_REGION: str = "us-east-1"
    S3_ACCESS_KEY: str = ""
    S3_SECRET_KEY: str = ""

    # Empty means AWS; set host[:port] or a full URL for S3-compatible stores
    S3_ENDPOINT: str = ""

    # Seconds, or "never" for the longest lifetime the signer allows
    S3_LINK_EXPIRATION: str = ""

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
