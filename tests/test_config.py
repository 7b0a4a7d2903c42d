"""Tests for configuration handling."""

import pytest

from webcrm.client import configure
from webcrm.config import Configuration, ConfigurationError


class TestValidate:
    """Tests for Configuration.validate()."""

    def test_complete(self):
        """A complete configuration validates."""
        Configuration(tenant="t", login="l", api_key="k").validate()

    def test_endpoint_replaces_tenant(self):
        """An endpoint makes the tenant optional."""
        Configuration(endpoint="crm.example.com", login="l", api_key="k").validate()

    @pytest.mark.parametrize(
        "kwargs,missing",
        [
            ({}, "api_key"),
            ({"tenant": "t", "login": "l"}, "api_key"),
            ({"tenant": "t", "api_key": "k"}, "login"),
            ({"login": "l", "api_key": "k"}, "tenant"),
            ({"tenant": "t", "login": "l", "api_key": ""}, "api_key"),
        ],
    )
    def test_reports_first_missing_key(self, kwargs, missing):
        """Keys are checked in the order api_key, login, tenant."""
        with pytest.raises(ConfigurationError, match=f"Missing required configuration key: {missing}"):
            Configuration(**kwargs).validate()

    def test_configure_validates(self):
        """configure() rejects incomplete credentials."""
        with pytest.raises(ConfigurationError, match="login"):
            configure(tenant="t", api_key="k")


class TestEndpointUrl:
    """Tests for Configuration.endpoint_url."""

    def test_tenant_default_host(self):
        """Without endpoint the tenant's default host is used."""
        config = Configuration(tenant="my_tenant")
        assert config.endpoint_url == "https://my_tenant.crm.infopark.net/api2/"

    def test_endpoint_without_scheme(self):
        """https is assumed and a trailing slash added."""
        config = Configuration(tenant="ignored", endpoint="crm.example.com/api2")
        assert config.endpoint_url == "https://crm.example.com/api2/"

    def test_endpoint_with_scheme(self):
        """Explicit schemes are kept."""
        config = Configuration(endpoint="http://localhost:3000/api2/")
        assert config.endpoint_url == "http://localhost:3000/api2/"


class TestFromEnv:
    """Tests for Configuration.from_env()."""

    def test_reads_environment(self, clean_env, monkeypatch):
        """WEBCRM_* variables are picked up."""
        monkeypatch.setenv("WEBCRM_TENANT", "acme")
        monkeypatch.setenv("WEBCRM_LOGIN", "api")
        monkeypatch.setenv("WEBCRM_API_KEY", "key")
        monkeypatch.setenv("WEBCRM_LOG_LEVEL", "DEBUG")

        config = Configuration.from_env()

        assert config.tenant == "acme"
        assert config.login == "api"
        assert config.api_key == "key"
        assert config.endpoint is None
        assert config.log_level == "DEBUG"

    def test_defaults(self, clean_env):
        """Unset variables stay None; log level defaults to WARNING."""
        config = Configuration.from_env()
        assert config.api_key is None
        assert config.log_level == "WARNING"

    def test_reads_env_file(self, clean_env):
        """A .env file fills in missing variables."""
        env_file = clean_env / "crm.env"
        env_file.write_text("WEBCRM_TENANT=from_file\nWEBCRM_API_KEY=file_key\n")

        config = Configuration.from_env(env_file)

        assert config.tenant == "from_file"
        assert config.api_key == "file_key"

    def test_environment_wins_over_env_file(self, clean_env, monkeypatch):
        """Variables already set are not overridden."""
        monkeypatch.setenv("WEBCRM_TENANT", "from_env")
        env_file = clean_env / "crm.env"
        env_file.write_text("WEBCRM_TENANT=from_file\n")

        assert Configuration.from_env(env_file).tenant == "from_env"
