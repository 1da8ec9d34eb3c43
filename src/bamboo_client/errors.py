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

"""Exceptions raised by the Bamboo client.

Every library error carries the ``requests.Response`` it was raised for (or
None when no request was sent) so callers can still look at the status code.
Transport failures are not wrapped: they surface as the ``requests``
exception the transport raised.
"""

import requests

# Network/connection failures propagate verbatim from requests
TransportError = requests.exceptions.RequestException


class BambooError(Exception):
    """Base exception for errors raised by the Bamboo client."""
    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response


class ConstructionError(BambooError):
    """The base URL, request path or a required identifier is unusable."""


class ValidationError(BambooError):
    """A caller-supplied required field is empty; no request was sent."""


class UnexpectedStatusError(BambooError):
    """The server answered with a status code other than the expected one."""
    def __init__(self, message, response=None):
        super().__init__(message, response)
        self.status_code = response.status_code if response is not None else None
        self.reason = response.reason if response is not None else None


class PartialResultError(BambooError):
    """
    Non-fatal: the server returned fewer items than it reports in total.

    The truncated items are still usable and are available on ``items``.
    """
    def __init__(self, message, items, returned, total, response=None):
        super().__init__(message, response)
        self.items = items
        self.returned = returned
        self.total = total


class NotFoundError(BambooError, LookupError):
    """A strict lookup by name found no match."""


class BodyReadError(BambooError):
    """The status was fine but the response body could not be read."""


class DecodeError(BambooError):
    """A successful response carried a body that is not valid JSON."""
