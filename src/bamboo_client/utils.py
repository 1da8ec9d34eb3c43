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
import sys
from urllib.parse import urlsplit, urlunsplit

# Read once at import so every module shares the same switch
DEBUG_MODE = os.environ.get("DEBUG_MODE", "false").lower() == "true"


def safe_print(message, file=None, flush=True):
    """Safely print message, handling consoles that cannot encode it."""
    try:
        print(message, file=file, flush=flush)
    except UnicodeEncodeError:
        # Replace anything outside ASCII with '?'
        message = ''.join([c if ord(c) < 128 else '?' for c in message])
        print(message, file=file, flush=flush)


def log(message: str, is_error: bool = False, is_warning: bool = False):
    """Prints a message to stdout/stderr."""
    if is_error:
        safe_print(message, file=sys.stderr, flush=True)
    elif is_warning:
        safe_print(f"WARNING: {message}", flush=True)
    else:
        safe_print(message, flush=True)


def debug_log(*args, **kwargs):
    """Prints only if DEBUG_MODE is True."""
    if DEBUG_MODE:
        message = " ".join(map(str, args))
        safe_print(message, flush=True)


def empty_strings(*values) -> bool:
    """Returns True if any of the given values is None or an empty string."""
    return any(not value for value in values)


def redact_url(url: str) -> str:
    """Strips any user:password@ credentials from a URL before it is logged."""
    if not url:
        return url
    parts = urlsplit(url)
    if not parts.username and not parts.password:
        return url
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urlunsplit((parts.scheme, host, parts.path, parts.query, parts.fragment))
