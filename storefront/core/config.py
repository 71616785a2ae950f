"""Storefront Configuration"""

import os
from typing import Optional
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file="config/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "storefront"
    mongo_timeout_ms: int = 5000

    # Token signing (Ed25519)
    token_private_key: Optional[str] = None  # Can also be inline
    token_private_key_path: Optional[str] = None
    token_public_key: Optional[str] = None
    token_public_key_path: Optional[str] = None
    token_ttl_seconds: int = 3600

    def get_token_private_key(self) -> Optional[str]:
        """Get token private key from file or inline"""
        return self._read_key(self.token_private_key, self.token_private_key_path)

    def get_token_public_key(self) -> Optional[str]:
        """Get token public key from file or inline"""
        return self._read_key(self.token_public_key, self.token_public_key_path)

    @staticmethod
    def _read_key(inline: Optional[str], path: Optional[str]) -> Optional[str]:
        if inline:
            return inline

        if path and os.path.exists(path):
            with open(path, "r") as f:
                return f.read()

        return None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
