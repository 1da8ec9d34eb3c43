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

"""Shapes shared by every Bamboo resource: links, metadata and list envelopes."""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple


@dataclass(frozen=True)
class Link:
    """Hyperlink embedded in Bamboo payloads."""
    href: str = ""
    rel: str = ""

    @classmethod
    def from_api_response(cls, response_data: Optional[dict]) -> Optional['Link']:
        """Create instance from API response data, None when the link is absent."""
        if not response_data:
            return None
        return cls(
            href=response_data.get('href', ''),
            rel=response_data.get('rel', '')
        )


@dataclass(frozen=True)
class ResourceMetadata:
    """Top level metadata the server attaches to every resource response."""
    expand: str = ""
    link: Optional[Link] = None

    @classmethod
    def from_api_response(cls, response_data: Optional[dict]) -> 'ResourceMetadata':
        response_data = response_data or {}
        return cls(
            expand=response_data.get('expand', ''),
            link=Link.from_api_response(response_data.get('link'))
        )


@dataclass(frozen=True)
class Collection:
    """
    Resource collection envelope around any Bamboo list payload.

    ``size`` is the server's total; ``max_results`` is the page size actually
    returned and may be smaller. A collection is only complete when both match.
    """
    size: int = 0
    max_results: int = 0
    start_index: int = 0
    items: Tuple[Any, ...] = ()

    @property
    def is_complete(self) -> bool:
        """Check if the server returned every item it knows about."""
        return self.max_results == self.size

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    @classmethod
    def from_api_response(cls, response_data: Optional[dict], item_key: str,
                          item_factory: Callable[[Any], Any] = None) -> 'Collection':
        """
        Create instance from API response data.

        Args:
            response_data: The envelope dict, e.g. {"size": 2, "max-results": 2, "plan": [...]}
            item_key: Name of the list field holding the items ("plan", "result", ...)
            item_factory: Called on each raw item; items are kept as-is when omitted
        """
        response_data = response_data or {}
        raw_items = response_data.get(item_key) or []
        if item_factory is not None:
            items = tuple(item_factory(item) for item in raw_items)
        else:
            items = tuple(raw_items)
        return cls(
            size=response_data.get('size', 0),
            max_results=response_data.get('max-results', 0),
            start_index=response_data.get('start-index', 0),
            items=items
        )
