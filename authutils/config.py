from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from authutils.services.email_validation.models import ValidationOptions


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    debug: bool = Field(default=False)
    config_path: str = Field(default="config.yml")

    # OAuth / OpenID Connect (override config.yml)
    oauth_issuer: str = Field(default="")
    oauth_client_id: str = Field(default="")
    oauth_redirect_url: str = Field(default="")


class EmailValidationConfig:
    """Email validation defaults from config.yml (used by the CLI)."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.allow_international: bool = data.get("allow_international", False)
        self.allow_display_name: bool = data.get("allow_display_name", False)
        self.require_tld: bool = data.get("require_tld", True)
        self.max_length: int = data.get("max_length", 254)

    def to_options(self) -> "ValidationOptions":
        from authutils.services.email_validation.models import ValidationOptions

        return ValidationOptions(
            allow_international=self.allow_international,
            allow_display_name=self.allow_display_name,
            require_tld=self.require_tld,
            max_length=self.max_length,
        )


class OAuthConfig:
    """OpenID Connect client configuration from config.yml and environment."""

    def __init__(self, data: dict[str, Any], settings: "Settings") -> None:
        # Env takes precedence over config.yml
        self.issuer: str = (settings.oauth_issuer or data.get("issuer", "")).rstrip("/")
        self.client_id: str = settings.oauth_client_id or data.get("client_id", "")
        self.redirect_url: str = settings.oauth_redirect_url or data.get("redirect_url", "")
        self.scopes: list[str] = data.get("scopes", ["openid", "profile", "email"])

        # Keycloak-style endpoints derived from the issuer unless set explicitly
        endpoints = data.get("service_configuration", {})
        base = f"{self.issuer}/protocol/openid-connect" if self.issuer else ""
        self.authorization_endpoint: str = endpoints.get(
            "authorization_endpoint", f"{base}/auth" if base else ""
        )
        self.token_endpoint: str = endpoints.get("token_endpoint", f"{base}/token" if base else "")
        self.revocation_endpoint: str = endpoints.get(
            "revocation_endpoint", f"{base}/revoke" if base else ""
        )

    def is_configured(self) -> bool:
        return bool(self.client_id and self.redirect_url and self.authorization_endpoint)


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._load_yaml()

    def _load_yaml(self) -> None:
        config_path = Path(self.settings.config_path)
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.email_validation = EmailValidationConfig(data.get("email_validation", {}))
        self.oauth = OAuthConfig(data.get("oauth", {}), self.settings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig(get_settings())
