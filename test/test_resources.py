#!/usr/bin/env python
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

import dataclasses
import unittest

from bamboo_client.resources import Collection, Link, ResourceMetadata


class TestCollection(unittest.TestCase):
    """Test cases for the collection envelope."""

    def test_from_api_response(self):
        collection = Collection.from_api_response(
            {"size": 10, "max-results": 2, "start-index": 4, "plan": [{"key": "A"}, {"key": "B"}]},
            "plan",
            lambda item: item["key"]
        )

        self.assertEqual(collection.size, 10)
        self.assertEqual(collection.max_results, 2)
        self.assertEqual(collection.start_index, 4)
        self.assertEqual(collection.items, ("A", "B"))
        self.assertEqual(len(collection), 2)
        self.assertEqual(list(collection), ["A", "B"])

    def test_is_complete(self):
        self.assertTrue(Collection(size=2, max_results=2).is_complete)
        self.assertFalse(Collection(size=3, max_results=2).is_complete)
        self.assertTrue(Collection().is_complete)

    def test_missing_envelope(self):
        collection = Collection.from_api_response(None, "plan")
        self.assertEqual(collection, Collection())

    def test_items_without_factory_kept_raw(self):
        collection = Collection.from_api_response({"size": 1, "max-results": 1, "error": ["x"]}, "error")
        self.assertEqual(collection.items, ("x",))

    def test_collection_is_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            Collection().size = 5


class TestMetadata(unittest.TestCase):
    """Test cases for links and resource metadata."""

    def test_link(self):
        link = Link.from_api_response({"href": "https://bamboo.example.com/rest/api/latest/plan", "rel": "self"})
        self.assertEqual(link.href, "https://bamboo.example.com/rest/api/latest/plan")
        self.assertEqual(link.rel, "self")
        self.assertIsNone(Link.from_api_response(None))

    def test_resource_metadata(self):
        metadata = ResourceMetadata.from_api_response({
            "expand": "plans",
            "link": {"href": "https://bamboo.example.com/rest/api/latest/plan", "rel": "self"}
        })
        self.assertEqual(metadata.expand, "plans")
        self.assertEqual(metadata.link.rel, "self")
        self.assertEqual(ResourceMetadata.from_api_response(None), ResourceMetadata())


if __name__ == '__main__':
    unittest.main()
