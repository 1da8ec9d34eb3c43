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

"""Bamboo REST API client.

This module owns the request/response pipeline every resource service goes
through: build a request against the configured server, send it over one
shared ``requests.Session`` and decode the JSON body.
"""

from typing import Optional

import requests

from bamboo_client.comments import CommentService
from bamboo_client.config import BambooConfig
from bamboo_client.errors import ConstructionError, DecodeError
from bamboo_client.plans import PlanService
from bamboo_client.raw import RawService
from bamboo_client.results import ResultService
from bamboo_client.utils import debug_log, redact_url


class BambooClient:
    """
    Client for the Bamboo REST API.

    Resource operations live on the sub-clients:

    - plans: PlanService
    - results: ResultService
    - comments: CommentService
    - raw: RawService

    The configuration is shared read-only by all of them.
    """

    def __init__(self, config: Optional[BambooConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Server and credential configuration; read from the environment when omitted
            session: Optional pre-configured requests session (adapters, proxies, retries)
        """
        self.config = config or BambooConfig()
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": self.config.USER_AGENT
        })
        if self.config.auth:
            self.session.auth = self.config.auth

        self.plans = PlanService(self)
        self.results = ResultService(self)
        self.comments = CommentService(self)
        self.raw = RawService(self)

    @classmethod
    def simple(cls, base_url: str, username: str = None, password: str = None,
               session: Optional[requests.Session] = None) -> 'BambooClient':
        """Create a client for a server with basic auth credentials."""
        return cls(BambooConfig(base_url=base_url, username=username, password=password), session=session)

    @classmethod
    def from_env(cls, env_vars=None) -> 'BambooClient':
        """Create a client from BAMBOO_* environment variables."""
        return cls(BambooConfig(env_vars=env_vars))

    def set_url(self, base_url: str):
        """Point the client at another server."""
        self.config = self.config.with_base_url(base_url)

    def _build(self, method: str, url_prefix: str, path: str, body=None) -> requests.Request:
        if not path:
            raise ConstructionError("Request path cannot be empty")
        base_url = self.config.validated_base_url()
        url = f"{base_url}/{url_prefix}{path.lstrip('/')}"
        return requests.Request(method=method, url=url, json=body, params={}, headers={})

    def new_request(self, method: str, path: str, body=None) -> requests.Request:
        """
        Builds a request against the REST API.

        Query parameters can be added to the returned request's ``params``
        before it is passed to do().

        Args:
            method: HTTP method
            path: Path relative to the REST prefix, e.g. "plan.json"
            body: Optional JSON-serialisable body

        Raises:
            ConstructionError: If the path is empty or the base URL is unset or malformed
        """
        return self._build(method, self.config.rest_prefix, path, body)

    def raw_request(self, method: str, path: str, body=None) -> requests.Request:
        """Builds a request relative to the server root instead of the REST prefix."""
        return self._build(method, "", path, body)

    def do(self, request: requests.Request, decode: bool = True, stream: bool = False):
        """
        Sends a request and decodes the JSON body.

        The body is only decoded for 2xx responses that have one. A non-2xx
        status is not an error here; callers check ``response.status_code``.

        Args:
            request: Request built by new_request() or raw_request()
            decode: Whether to decode the body as JSON
            stream: Leave the body unread on the response

        Returns:
            tuple: (decoded payload or None, requests.Response)

        Raises:
            requests.exceptions.RequestException: On transport failures
            DecodeError: If a successful response body is not valid JSON
        """
        prepared = self.session.prepare_request(request)
        debug_log(f"Making {prepared.method} request to: {redact_url(prepared.url)}")

        response = self.session.send(prepared, timeout=self.config.timeout, stream=stream)
        debug_log(f"Bamboo API Response Status Code: {response.status_code}")

        if not decode or not 200 <= response.status_code < 300 or not response.content:
            return None, response

        try:
            return response.json(), response
        except ValueError as e:
            raise DecodeError(f"Error decoding JSON response from {redact_url(prepared.url)}: {e}", response=response) from e
