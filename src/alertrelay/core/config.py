"""
Alert Relay - Application Configuration
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
    
    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    APP_ENV: str = Field(default="development")
    APP_DEBUG: bool = Field(default=True)
    API_PREFIX: str = Field(default="/api/v1")
    CORS_ORIGINS: List[str] = Field(default=["*"])
    
    # Base URL of the monitoring UI, used to build check links
    BASE_URL: str = Field(default="http://localhost:8080/seyren")
    
    # -------------------------------------------------------------------------
    # Jabber / XMPP
    # -------------------------------------------------------------------------
    JABBER_ENABLED: bool = Field(default=True)
    JABBER_HOST: str = Field(default="localhost")
    JABBER_PORT: int = Field(default=5222)
    JABBER_USER: str = Field(default="")
    JABBER_PASSWORD: str = Field(default="")
    JABBER_SERVICE_NAME: str = Field(default="")
    JABBER_ROOM: str = Field(default="")
    JABBER_HANDLE: str = Field(default="alertrelay")
    JABBER_USE_TLS: bool = Field(default=True)
    
    # Keep-alive ping interval (seconds)
    JABBER_PING_INTERVAL: int = Field(default=60)
    JABBER_CONNECT_TIMEOUT: float = Field(default=30.0)
    
    # Reconnect with exponential backoff
    JABBER_RECONNECT_ATTEMPTS: int = Field(default=3)
    JABBER_RECONNECT_MIN_WAIT: float = Field(default=1.0)
    JABBER_RECONNECT_MAX_WAIT: float = Field(default=30.0)
    JABBER_RECONNECT_ON_SEND: bool = Field(default=True)
    
    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LOG_REDACT_SECRETS: bool = Field(default=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
