"""Configuration and environment handling for the WebCRM client."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_HOST_TEMPLATE = "https://{tenant}.crm.infopark.net/api2/"


class ConfigurationError(ValueError):
    """Raised when the client is configured incompletely."""

    pass


class Configuration:
    """Credentials and endpoint for accessing the API.

    `api_key`, `login` and one of `tenant` / `endpoint` must be provided.
    """

    def __init__(
        self,
        tenant: Optional[str] = None,
        login: Optional[str] = None,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        log_level: str = "WARNING",
    ):
        self.tenant = tenant
        self.login = login
        self.api_key = api_key
        self.endpoint = endpoint
        self.log_level = log_level

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Configuration":
        """Build a configuration from WEBCRM_* environment variables.

        A `.env` file in the working directory (or `env_file`) is loaded first
        if it exists; variables already set in the environment win.
        """
        env_path = env_file or Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        return cls(
            tenant=os.getenv("WEBCRM_TENANT"),
            login=os.getenv("WEBCRM_LOGIN"),
            api_key=os.getenv("WEBCRM_API_KEY"),
            endpoint=os.getenv("WEBCRM_ENDPOINT"),
            log_level=os.getenv("WEBCRM_LOG_LEVEL", "WARNING"),
        )

    @property
    def endpoint_url(self) -> str:
        """Base URL of the API, always ending with a slash."""
        if self.endpoint:
            url = self.endpoint
            if not url.startswith("http"):
                url = f"https://{url}"
            if not url.endswith("/"):
                url += "/"
            return url
        return DEFAULT_HOST_TEMPLATE.format(tenant=self.tenant)

    def validate(self) -> None:
        """Check that all required keys are set.

        Keys are checked in the order api_key, login, tenant/endpoint.

        Raises:
            ConfigurationError: naming the first missing key
        """
        if not self.api_key:
            raise ConfigurationError("Missing required configuration key: api_key")
        if not self.login:
            raise ConfigurationError("Missing required configuration key: login")
        if not self.tenant and not self.endpoint:
            raise ConfigurationError("Missing required configuration key: tenant")
