"""Test helpers package for the Bamboo client test suite.

This package provides a stub Bamboo server and response builders shared by
the client tests.
"""

from .http_stubs import (
    StubServer,
    make_client,
    make_response,
    serve,
)

__all__ = [
    'StubServer',
    'make_client',
    'make_response',
    'serve',
]
