"""
Tests for settings and credential service construction
"""

import pytest

from forum.auth.factory import build_credential_services
from forum.config import Settings, resolve_jwt_secret


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FORUM_DEFAULT_PAGE_LIMIT", raising=False)
        config = Settings(_env_file=None)

        assert config.default_page_limit == 10
        assert config.token_expiry_hours == 24
        assert config.signin_verify_password is False

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("FORUM_API_PORT", "4000")
        monkeypatch.setenv("FORUM_SIGNIN_VERIFY_PASSWORD", "true")

        config = Settings(_env_file=None)

        assert config.api_port == 4000
        assert config.signin_verify_password is True

    @pytest.mark.parametrize("environment", ["production", "PROD"])
    def test_is_production(self, environment):
        assert Settings(_env_file=None, environment=environment).is_production


class TestResolveJwtSecret:
    def test_configured_secret_is_used(self):
        config = Settings(_env_file=None, jwt_secret="configured")

        assert resolve_jwt_secret(config) == "configured"

    def test_missing_secret_in_production_fails(self):
        config = Settings(_env_file=None, jwt_secret=None, environment="production")

        with pytest.raises(ValueError, match="FORUM_JWT_SECRET"):
            resolve_jwt_secret(config)

    def test_missing_secret_in_development_is_ephemeral(self):
        config = Settings(_env_file=None, jwt_secret=None, environment="development")

        first = resolve_jwt_secret(config)
        second = resolve_jwt_secret(config)

        assert first and second
        assert first != second


class TestBuildCredentialServices:
    @pytest.mark.asyncio
    async def test_services_follow_configuration(self):
        config = Settings(
            _env_file=None,
            jwt_secret="configured",
            jwt_issuer="iss",
            jwt_audience="aud",
            token_expiry_hours=0,
            password_hash_iterations=1_500,
        )

        credentials = build_credential_services(config)

        assert credentials.tokens.secret_key == "configured"
        assert credentials.tokens.issuer == "iss"
        assert credentials.tokens.audience == "aud"
        assert credentials.passwords.hash("pw").startswith("pbkdf2:sha256:1500$")
        assert credentials.verify_signin_password is False

    def test_signin_verification_flag_is_carried(self):
        config = Settings(_env_file=None, jwt_secret="configured", signin_verify_password=True)

        assert build_credential_services(config).verify_signin_password is True
