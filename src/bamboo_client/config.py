# -
# #%L
# Bamboo REST Client
# %%
# Copyright (C) 2025 Contrast Security, Inc.
# %%
# Contact: support@contrastsecurity.com
# License: Commercial
# NOTICE: This Software and the patented inventions embodied within may only be
# used as part of Contrast Security's commercial offerings. Even though it is
# made available through public repositories, use of this Software is subject to
# the applicable End User Licensing Agreement found at
# https://www.contrastsecurity.com/enduser-terms-0317a or as otherwise agreed
# between Contrast Security and the End User. The Software may not be reverse
# engineered, modified, repackaged, sold, redistributed or otherwise used in a
# way not consistent with the End User License Agreement.
# #L%
#

import os
from typing import Optional, Any
from urllib.parse import urlsplit

from bamboo_client.errors import ConstructionError
from bamboo_client.utils import debug_log, log, redact_url


class BambooConfig:
    """
    Configuration for the Bamboo client.
    Handles loading, validating, and accessing configuration values.

    Explicit constructor arguments win over environment variables. The object
    is treated as read-only once built; use with_base_url() to point a client
    somewhere else.
    """

    # Preset values
    VERSION = "v0.4.1"
    USER_AGENT = f"bamboo-rest-client {VERSION}"
    DEFAULT_TIMEOUT = 30.0
    MIN_TIMEOUT = 1.0
    MAX_TIMEOUT = 300.0

    def __init__(self, base_url=None, username=None, password=None, timeout=None,
                 rest_version=None, env_vars=None):
        """
        Initialize the configuration.

        Args:
            base_url: Bamboo server URL, e.g. https://bamboo.example.com
            username: Basic auth user name
            password: Basic auth password
            timeout: Request timeout in seconds
            rest_version: REST API version segment, "latest" by default
            env_vars: Optional dictionary of environment variables (for testing)
        """
        self.env_vars = env_vars if env_vars is not None else os.environ
        self._load_config(base_url, username, password, timeout, rest_version)

    def _get_env_var(self, var_name: str, required: bool = False, default: Optional[Any] = None) -> Optional[str]:
        """Gets an environment variable or raises if required and not found."""
        value = self.env_vars.get(var_name)
        if required and not value:
            log(f"Error: Required environment variable {var_name} is not set.", is_error=True)
            raise ConstructionError(f"Required environment variable {var_name} is not set")
        return value if value else default

    def _load_config(self, base_url, username, password, timeout, rest_version):
        """Loads configuration from arguments, falling back to environment variables."""

        # --- Server ---
        url = base_url if base_url is not None else self._get_env_var("BAMBOO_URL")
        self.base_url = url.rstrip("/") if url else None
        self.rest_version = rest_version or self._get_env_var("BAMBOO_REST_VERSION", default="latest")

        # --- Credentials ---
        self.username = username if username is not None else self._get_env_var("BAMBOO_USERNAME")
        self.password = password if password is not None else self._get_env_var("BAMBOO_PASSWORD")

        # --- Transport ---
        self.timeout = self._get_timeout(timeout)

        debug_log(f"Bamboo URL: {redact_url(self.base_url)}")
        debug_log(f"REST Version: {self.rest_version}")
        debug_log(f"Timeout: {self.timeout}")
        if self.username:
            debug_log("Bamboo credentials found.")

    def _get_timeout(self, timeout) -> float:
        """Validates and normalizes the BAMBOO_TIMEOUT setting."""
        raw = timeout if timeout is not None else self._get_env_var("BAMBOO_TIMEOUT", default=str(self.DEFAULT_TIMEOUT))
        try:
            value = float(raw)
        except (ValueError, TypeError):
            log(f"Invalid BAMBOO_TIMEOUT value. Using default: {self.DEFAULT_TIMEOUT}", is_warning=True)
            return self.DEFAULT_TIMEOUT
        if value < self.MIN_TIMEOUT:
            log(f"BAMBOO_TIMEOUT ({value}) is too low. Using minimum value: {self.MIN_TIMEOUT}", is_warning=True)
            return self.MIN_TIMEOUT
        if value > self.MAX_TIMEOUT:
            log(f"BAMBOO_TIMEOUT ({value}) is too high. Using maximum value: {self.MAX_TIMEOUT}", is_warning=True)
            return self.MAX_TIMEOUT
        return value

    @property
    def rest_prefix(self) -> str:
        return f"rest/api/{self.rest_version}/"

    @property
    def auth(self):
        """Basic auth tuple for requests, or None when no user name is configured."""
        if not self.username:
            return None
        return (self.username, self.password or "")

    def validated_base_url(self) -> str:
        """Returns the base URL, raising ConstructionError if it is unset or malformed."""
        if not self.base_url:
            raise ConstructionError("Bamboo base URL is not set")
        parts = urlsplit(self.base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConstructionError(f"Bamboo base URL is malformed: {redact_url(self.base_url)}")
        return self.base_url

    def with_base_url(self, base_url: str) -> "BambooConfig":
        """Return a copy of this configuration pointing at another server."""
        return BambooConfig(
            base_url=base_url,
            username=self.username,
            password=self.password,
            timeout=self.timeout,
            rest_version=self.rest_version,
            env_vars=self.env_vars,
        )
