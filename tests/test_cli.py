"""Tests for the typer CLI."""

import json
from urllib.parse import parse_qs, urlparse

import pytest
from typer.testing import CliRunner

from authutils.cli import app
from authutils.core.security import compute_code_challenge


@pytest.fixture
def runner():
    return CliRunner()


class TestValidateCommand:
    """Tests for `authutils validate`."""

    def test_valid(self, runner):
        result = runner.invoke(app, ["validate", "  test@example.com "])

        assert result.exit_code == 0
        assert "test@example.com is valid" in result.output

    def test_invalid_exit_code(self, runner):
        result = runner.invoke(app, ["validate", "test@localhost"])

        assert result.exit_code == 1
        assert "Email must include a top-level domain" in result.output

    def test_no_require_tld(self, runner):
        result = runner.invoke(app, ["validate", "test@localhost", "--no-require-tld"])

        assert result.exit_code == 0

    def test_disposable_warning(self, runner):
        result = runner.invoke(app, ["validate", "test@10minutemail.com"])

        assert result.exit_code == 0
        assert "Disposable email address detected" in result.output

    def test_strict_by_default(self, runner):
        result = runner.invoke(app, ["validate", "josé@example.com"])

        assert result.exit_code == 1
        assert "Invalid email format" in result.output

    def test_international_flag(self, runner):
        result = runner.invoke(app, ["validate", "josé@example.com", "--international"])

        assert result.exit_code == 0

    def test_international_from_config(self, runner, write_config):
        write_config({"email_validation": {"allow_international": True}})

        assert runner.invoke(app, ["validate", "josé@example.com"]).exit_code == 0
        assert runner.invoke(app, ["validate", "josé@example.com", "--strict"]).exit_code == 1

    def test_max_length(self, runner):
        result = runner.invoke(app, ["validate", "test@example.com", "--max-length", "10"])

        assert result.exit_code == 1
        assert "Email cannot exceed 10 characters" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(app, ["validate", "test@10minutemail.com", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["is_valid"] is True
        assert data["warning_codes"] == ["disposable-domain"]


class TestHelperCommands:
    """Tests for normalize and domain."""

    def test_normalize(self, runner):
        result = runner.invoke(app, ["normalize", "  USER@EXAMPLE.COM  "])

        assert result.exit_code == 0
        assert result.stdout.strip() == "user@example.com"

    def test_domain(self, runner):
        result = runner.invoke(app, ["domain", "user@EXAMPLE.COM"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "example.com"

    def test_domain_missing(self, runner):
        result = runner.invoke(app, ["domain", "invalid-email"])

        assert result.exit_code == 1
        assert "No domain found" in result.output


class TestPkceCommand:
    """Tests for `authutils pkce`."""

    def test_s256(self, runner):
        result = runner.invoke(app, ["pkce"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["code_challenge_method"] == "S256"
        assert data["code_challenge"] == compute_code_challenge(data["code_verifier"])

    def test_plain(self, runner):
        data = json.loads(runner.invoke(app, ["pkce", "--method", "plain"]).stdout)

        assert data["code_challenge"] == data["code_verifier"]

    def test_unknown_method(self, runner):
        result = runner.invoke(app, ["pkce", "--method", "S512"])

        assert result.exit_code == 1
        assert "Unknown code challenge method" in result.output


class TestAuthorizeUrlCommand:
    """Tests for `authutils authorize-url`."""

    def test_not_configured(self, runner):
        result = runner.invoke(app, ["authorize-url"])

        assert result.exit_code == 1
        assert "OAuth client not configured" in result.output

    def test_builds_url(self, runner, write_config, keycloak_config):
        write_config(keycloak_config)

        result = runner.invoke(app, ["authorize-url", "--state", "abc"])

        assert result.exit_code == 0
        url = urlparse(result.stdout.splitlines()[0])
        query = parse_qs(url.query)
        assert url.netloc == "localhost:9192"
        assert query["client_id"] == ["app-auth"]
        assert query["state"] == ["abc"]
        assert query["code_challenge_method"] == ["S256"]
