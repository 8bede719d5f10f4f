"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_URL = "https://api.exchange.coinbase.com"
DEFAULT_TIMEOUT = 0.1  # seconds


class ClientSettings(BaseSettings):
    """Coinbase REST connection settings.

    All fields configurable via CBPRO_ environment variable prefix or a
    local .env file. The secret is the base64 string issued by Coinbase;
    it is decoded once when the client is built.
    """

    model_config = SettingsConfigDict(
        env_prefix="CBPRO_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    url: str = DEFAULT_URL
    key: str = ""
    secret: SecretStr = SecretStr("")
    passphrase: SecretStr = SecretStr("")
    timeout: float = DEFAULT_TIMEOUT
    header_prefix: str = "CB-"
    log_level: str = "INFO"

    @field_validator("timeout")
    @classmethod
    def default_timeout(cls, value: float) -> float:
        # Zero or negative means "not set"
        if value <= 0:
            return DEFAULT_TIMEOUT
        return value

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
