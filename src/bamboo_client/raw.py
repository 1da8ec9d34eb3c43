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

from urllib.parse import urlsplit

import requests

from bamboo_client.errors import BodyReadError, ConstructionError
from bamboo_client.service import Service
from bamboo_client.utils import debug_log, redact_url

DEFAULT_CHARSET = "utf-8"


def _charset(content_type) -> str:
    """Returns the charset named in a Content-Type header, or UTF-8 when none is given."""
    for param in (content_type or "").split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset" and value.strip(" \"'"):
            return value.strip(" \"'")
    return DEFAULT_CHARSET


def _strip_base_url(path: str, base_url) -> str:
    """Turns a full URL on the configured server into a server-relative path."""
    if base_url and path.startswith(base_url):
        rest = path[len(base_url):]
        if not rest or rest[0] in "/?#":
            return rest
    if urlsplit(path).netloc:
        raise ConstructionError(f"{redact_url(path)} is not on the configured Bamboo server")
    return path


class RawService(Service):
    """GET passthrough for anything the typed services do not cover."""

    def get_raw(self, path: str):
        """
        Sends a GET request and returns the body undecoded.

        ``path`` may be relative to the server or a full URL on the configured
        server, e.g. a ``link.href`` taken from another response.

        The body is read as UTF-8 unless the response names another charset.
        Bytes that do not decode are kept as surrogate escapes, so
        ``text.encode(charset, "surrogateescape")`` gives back the exact body.

        Returns:
            tuple: (body text, response)

        Raises:
            UnexpectedStatusError: If the server does not answer 200
            ConstructionError: If path is a full URL on another server
            BodyReadError: If the body could not be read after a 200
        """
        path = _strip_base_url(path, self.client.config.base_url)

        request = self.client.raw_request("GET", path)
        request.headers["Content-Type"] = "application/x-www-form-urlencoded"

        _, response = self.client.do(request, decode=False, stream=True)
        try:
            self.expect_status(response, 200, "Get")
            try:
                body = response.content
            except (requests.exceptions.RequestException, OSError) as e:
                raise BodyReadError(f"Read body {e}", response=response) from e
        finally:
            response.close()

        encoding = _charset(response.headers.get("Content-Type"))
        try:
            text = body.decode(encoding, errors="surrogateescape")
        except LookupError:
            debug_log(f"Unknown charset {encoding}, reading body as UTF-8")
            text = body.decode("utf-8", errors="surrogateescape")
        return text, response
