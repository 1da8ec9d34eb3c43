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

from bamboo_client.errors import ConstructionError, UnexpectedStatusError


class Service:
    """Base class for the resource sub-clients; all of them share one BambooClient."""

    def __init__(self, client):
        self.client = client

    @staticmethod
    def require(value: str, name: str) -> str:
        """Raises ConstructionError when an identifier needed to build a path is empty."""
        if not value:
            raise ConstructionError(f"{name} cannot be empty")
        return value

    @staticmethod
    def expect_status(response, expected: int, message: str):
        """Raises UnexpectedStatusError unless the response has the expected status code."""
        if response.status_code != expected:
            raise UnexpectedStatusError(
                f"{message} returned {response.status_code} {response.reason or ''}".rstrip(),
                response=response
            )
