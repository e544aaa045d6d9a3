"""
Pytest configuration and fixtures for auth-utilities tests.

Provides:
- Config isolation (no .env / config.yml leakage between tests)
- A config.yml writer for CLI and config tests
- Sample token / claim payloads
"""

import sys

import pytest
import yaml
from loguru import logger

from authutils.config import get_config, get_settings
from authutils.core.datetime_utils import to_epoch, utc_now
from authutils.core.security import generate_pkce_challenge


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Point settings at an empty temp config and clear cached instances."""
    monkeypatch.chdir(tmp_path)
    for var in ("DEBUG", "CONFIG_PATH", "OAUTH_ISSUER", "OAUTH_CLIENT_ID", "OAUTH_REDIRECT_URL"):
        monkeypatch.delenv(var, raising=False)

    get_settings.cache_clear()
    get_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_config.cache_clear()


@pytest.fixture(autouse=True)
def reset_loguru():
    """Restore the default loguru sink after tests that call setup_logging()."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """Factory writing a config.yml and pointing CONFIG_PATH at it."""

    def _write(data: dict) -> str:
        path = tmp_path / "config.yml"
        path.write_text(yaml.safe_dump(data))
        monkeypatch.setenv("CONFIG_PATH", str(path))
        get_settings.cache_clear()
        get_config.cache_clear()
        return str(path)

    return _write


@pytest.fixture
def keycloak_config():
    """OAuth section for a local Keycloak realm."""
    return {
        "oauth": {
            "issuer": "http://localhost:9192/realms/PKCE-RN",
            "client_id": "app-auth",
            "redirect_url": "myapp://callback",
            "scopes": ["openid", "profile", "email"],
        }
    }


@pytest.fixture
def pkce_challenge():
    return generate_pkce_challenge()


@pytest.fixture
def token_response():
    """Raw token endpoint response."""
    return {
        "access_token": "eyJhbGciOiJSUzI1NiJ9.payload.signature",
        "refresh_token": "refresh-token-value",
        "token_type": "bearer",
        "expires_in": 300,
        "scope": "openid profile email",
    }


@pytest.fixture
def keycloak_claims():
    """Decoded Keycloak access token claims."""
    issued_at = to_epoch(utc_now())
    return {
        "sub": "f1c2d3e4-0000-4000-8000-123456789abc",
        "iss": "http://localhost:9192/realms/PKCE-RN",
        "aud": ["app-auth", "account"],
        "exp": issued_at + 300,
        "iat": issued_at,
        "jti": "token-id-1",
        "preferred_username": "jane",
        "email": "jane@company.com",
        "email_verified": True,
        "given_name": "Jane",
        "family_name": "Doe",
        "realm_access": {"roles": ["offline_access", "user"]},
        "resource_access": {"app-auth": {"roles": ["editor"]}},
        "azp": "app-auth",
        "session_state": "abc123",
        "acr": "1",
    }
