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

import base64
import unittest

import requests

# Test setup imports (path is set up by conftest.py)
from setup_test_env import TEST_BASE_URL, TestEnvironmentMixin
from test_helpers import make_client, make_response, serve
from bamboo_client import BambooClient, BambooConfig
from bamboo_client.errors import ConstructionError, DecodeError, TransportError


class TestRequestBuilding(unittest.TestCase):
    """Tests for BambooClient.new_request and raw_request"""

    def setUp(self):
        self.client = make_client()

    def test_new_request_uses_rest_prefix(self):
        """Test that REST requests are built under rest/api/latest"""
        request = self.client.new_request("GET", "plan.json")
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.url, f"{TEST_BASE_URL}/rest/api/latest/plan.json")
        self.assertEqual(request.params, {})

    def test_new_request_strips_leading_slash(self):
        """Test that a leading slash on the path does not produce a double slash"""
        request = self.client.new_request("GET", "/plan/PROJ-PLAN")
        self.assertEqual(request.url, f"{TEST_BASE_URL}/rest/api/latest/plan/PROJ-PLAN")

    def test_new_request_with_body(self):
        """Test that the body is attached as JSON"""
        request = self.client.new_request("POST", "result/A-B-1/comment.json", body={"content": "hi"})
        self.assertEqual(request.json, {"content": "hi"})

    def test_new_request_custom_rest_version(self):
        """Test that the REST version segment comes from the configuration"""
        client = BambooClient(BambooConfig(base_url=TEST_BASE_URL, rest_version="1.0", env_vars={}))
        request = client.new_request("GET", "plan.json")
        self.assertEqual(request.url, f"{TEST_BASE_URL}/rest/api/1.0/plan.json")

    def test_raw_request_skips_rest_prefix(self):
        """Test that raw requests are built against the server root"""
        request = self.client.raw_request("GET", "/browse/PROJ-PLAN")
        self.assertEqual(request.url, f"{TEST_BASE_URL}/browse/PROJ-PLAN")

    def test_empty_path_raises(self):
        """Test that an empty path is rejected"""
        with self.assertRaises(ConstructionError):
            self.client.new_request("GET", "")

    def test_unset_base_url_raises(self):
        """Test that building a request without a base URL is rejected"""
        client = BambooClient(BambooConfig(env_vars={}))
        with self.assertRaises(ConstructionError):
            client.new_request("GET", "plan.json")

    def test_malformed_base_url_raises(self):
        """Test that a base URL without scheme or host is rejected"""
        for bad_url in ["bamboo.example.com", "ftp://bamboo.example.com", "https://"]:
            with self.subTest(url=bad_url):
                client = BambooClient(BambooConfig(base_url=bad_url, env_vars={}))
                with self.assertRaises(ConstructionError):
                    client.new_request("GET", "plan.json")

    def test_set_url_replaces_configuration(self):
        """Test that set_url points the client at another server without mutating the old config"""
        old_config = self.client.config
        self.client.set_url("http://other.example.com:8085/")

        self.assertIsNot(self.client.config, old_config)
        self.assertEqual(old_config.base_url, TEST_BASE_URL)
        request = self.client.new_request("GET", "plan.json")
        self.assertEqual(request.url, "http://other.example.com:8085/rest/api/latest/plan.json")


class TestDispatch(unittest.TestCase):
    """Tests for BambooClient.do"""

    def setUp(self):
        self.client = make_client()

    def test_decodes_json_on_success(self):
        """Test that a 2xx JSON body is decoded"""
        patcher, server = serve(self.client, lambda r: make_response(200, {"key": "PROJ-PLAN"}))
        with patcher:
            payload, response = self.client.do(self.client.new_request("GET", "plan/PROJ-PLAN"))

        self.assertEqual(payload, {"key": "PROJ-PLAN"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(server.requests), 1)

    def test_non_2xx_is_not_a_decode_error(self):
        """Test that an error page body is left undecoded and no exception is raised"""
        patcher, _ = serve(self.client, lambda r: make_response(401, text="<html>Unauthorized</html>"))
        with patcher:
            payload, response = self.client.do(self.client.new_request("GET", "plan.json"))

        self.assertIsNone(payload)
        self.assertEqual(response.status_code, 401)

    def test_empty_body_is_not_decoded(self):
        """Test that an empty 2xx body yields no payload"""
        patcher, _ = serve(self.client, lambda r: make_response(204))
        with patcher:
            payload, response = self.client.do(self.client.new_request("DELETE", "plan/A-B/enable"))

        self.assertIsNone(payload)
        self.assertEqual(response.status_code, 204)

    def test_decode_false_skips_decoding(self):
        """Test that decode=False returns no payload even for JSON bodies"""
        patcher, _ = serve(self.client, lambda r: make_response(200, {"key": "X"}))
        with patcher:
            payload, _ = self.client.do(self.client.new_request("GET", "plan.json"), decode=False)

        self.assertIsNone(payload)

    def test_invalid_json_raises_decode_error(self):
        """Test that a 2xx body which is not JSON is surfaced as DecodeError"""
        patcher, _ = serve(self.client, lambda r: make_response(200, text="not json"))
        with patcher:
            with self.assertRaises(DecodeError) as context:
                self.client.do(self.client.new_request("GET", "plan.json"))

        self.assertEqual(context.exception.response.status_code, 200)

    def test_transport_error_propagates_verbatim(self):
        """Test that transport failures are not wrapped"""
        error = requests.exceptions.ConnectionError("connection refused")

        def handler(request):
            raise error

        patcher, _ = serve(self.client, handler)
        with patcher:
            with self.assertRaises(TransportError) as context:
                self.client.do(self.client.new_request("GET", "plan.json"))

        self.assertIs(context.exception, error)

    def test_auth_and_default_headers_applied(self):
        """Test that basic auth, Accept and User-Agent headers are sent"""
        patcher, server = serve(self.client, lambda r: make_response(200, {}))
        with patcher:
            self.client.do(self.client.new_request("GET", "plan.json"))

        sent = server.requests[0]
        expected_auth = "Basic " + base64.b64encode(b"test-user:test-password").decode("ascii")
        self.assertEqual(sent.headers["Authorization"], expected_auth)
        self.assertEqual(sent.headers["Accept"], "application/json")
        self.assertEqual(sent.headers["User-Agent"], BambooConfig.USER_AGENT)

    def test_no_auth_without_username(self):
        """Test that no Authorization header is sent when no user is configured"""
        client = BambooClient(BambooConfig(base_url=TEST_BASE_URL, env_vars={}))
        patcher, server = serve(client, lambda r: make_response(200, {}))
        with patcher:
            client.do(client.new_request("GET", "plan.json"))

        self.assertNotIn("Authorization", server.requests[0].headers)

    def test_timeout_passed_to_transport(self):
        """Test that the configured timeout is handed to the transport"""
        client = BambooClient(BambooConfig(base_url=TEST_BASE_URL, timeout=12, env_vars={}))
        patcher, _ = serve(client, lambda r: make_response(200, {}))
        with patcher as mock_send:
            client.do(client.new_request("GET", "plan.json"))

        self.assertEqual(mock_send.call_args.kwargs["timeout"], 12.0)


class TestClientFromEnv(unittest.TestCase, TestEnvironmentMixin):
    """Tests for building a client from environment variables"""

    def setUp(self):
        self.setup_standard_test_env()

    def tearDown(self):
        self.cleanup_standard_test_env()

    def test_from_env(self):
        """Test that from_env reads the BAMBOO_* variables"""
        client = BambooClient.from_env()
        self.assertEqual(client.config.base_url, TEST_BASE_URL)
        self.assertEqual(client.session.auth, ("test-user", "test-password"))
        self.assertEqual(client.config.timeout, 10.0)

    def test_simple(self):
        """Test that simple() overrides the environment with explicit arguments"""
        client = BambooClient.simple("http://localhost:8085", "admin", "admin")
        self.assertEqual(client.config.base_url, "http://localhost:8085")
        self.assertEqual(client.session.auth, ("admin", "admin"))

    def test_sub_clients_share_client(self):
        """Test that all sub-clients go through the same client"""
        client = BambooClient.from_env()
        for service in (client.plans, client.results, client.comments, client.raw):
            self.assertIs(service.client, client)


if __name__ == '__main__':
    unittest.main()
