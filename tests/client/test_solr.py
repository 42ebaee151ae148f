"""
Tests for the request assembler and the response envelope check.
"""
import json
import unittest

import httpx

from solrzero.client.solr import Solr
from solrzero.client.testing import RecordingTransport
from solrzero.client.transport import HTTPTransport
from solrzero.core.config import ClientConfig
from solrzero.core.exceptions import (ConfigError, DecodeError, ServerError,
                                      TransportError)


class TestBuildUrl(unittest.TestCase):
    def test_build_url(self):
        solr = Solr("http", "localhost", 8983, transport=RecordingTransport())
        self.assertEqual(
            solr.build_url("admin/collections?action=LIST"),
            "http://localhost:8983/solr/admin/collections?action=LIST",
        )

    def test_endpoint_properties(self):
        solr = Solr("https", "search.example.com", 443, transport=RecordingTransport())
        self.assertEqual((solr.protocol, solr.host, solr.port), ("https", "search.example.com", 443))

    def test_invalid_endpoint(self):
        with self.assertRaises(ConfigError):
            Solr("gopher", "localhost", 8983, transport=RecordingTransport())

    def test_url_encode(self):
        solr = Solr(transport=RecordingTransport())
        self.assertEqual(solr.url_encode("a b"), "a%20b")


class TestEnvelope(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.transport = RecordingTransport()
        self.solr = Solr(transport=self.transport)

    async def test_get_returns_parsed_json(self):
        self.transport.respond({"responseHeader": {"status": 0}, "collections": []})
        res = await self.solr.get("admin/collections?action=LIST")
        self.assertEqual(res["collections"], [])
        request = self.transport.requests[0]
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.url, "http://localhost:8983/solr/admin/collections?action=LIST")
        self.assertIsNone(request.body)

    async def test_post_sends_json_body(self):
        self.transport.respond({"responseHeader": {"status": 0}})
        await self.solr.post("users/schema", {"add-field": [{"name": "a", "type": "string"}]})
        request = self.transport.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url, "http://localhost:8983/solr/users/schema")
        self.assertEqual(request.body, {"add-field": [{"name": "a", "type": "string"}]})

    async def test_error_key_with_ok_status(self):
        self.transport.respond({"error": {"msg": "undefined field foo", "code": 400}}, status_code=200)
        with self.assertRaises(ServerError) as ctx:
            await self.solr.get("users/select?q=foo%3A1")
        self.assertEqual(str(ctx.exception), "undefined field foo")
        self.assertEqual(ctx.exception.payload["code"], 400)
        self.assertEqual(ctx.exception.status_code, 200)

    async def test_error_key_with_error_status(self):
        self.transport.respond({"error": {"msg": "Collection exists", "code": 400}}, status_code=400)
        with self.assertRaises(ServerError):
            await self.solr.get("admin/collections?action=CREATE&name=users")

    async def test_error_key_that_is_not_an_object(self):
        self.transport.respond({"error": "bad"})
        with self.assertRaises(ServerError) as ctx:
            await self.solr.post("users/update?commit=true", [{"id": 1}])
        self.assertEqual(ctx.exception.payload, "bad")

    async def test_non_2xx_without_error_key(self):
        self.transport.respond({"responseHeader": {"status": 500}}, status_code=500)
        with self.assertRaises(ServerError) as ctx:
            await self.solr.get("admin/info/system?wt=json")
        self.assertEqual(ctx.exception.status_code, 500)

    async def test_invalid_json(self):
        self.transport.respond_raw(b"<html>not json</html>")
        with self.assertRaises(DecodeError):
            await self.solr.get("admin/info/system")

    async def test_invalid_json_with_error_status(self):
        self.transport.respond_raw(b"Not Found", status_code=404)
        with self.assertRaises(ServerError) as ctx:
            await self.solr.get("missing/select?q=x")
        self.assertEqual(ctx.exception.status_code, 404)

    async def test_transport_failure(self):
        self.transport.fail("Connection refused")
        with self.assertRaises(TransportError):
            await self.solr.get("admin/info/system")

    async def test_top_level_array_is_returned(self):
        self.transport.respond([1, 2, 3])
        self.assertEqual(await self.solr.get("whatever"), [1, 2, 3])

    async def test_system_info(self):
        self.transport.respond({"lucene": {"solr-spec-version": "8.5.1"}})
        info = await self.solr.system_info()
        self.assertEqual(info["lucene"]["solr-spec-version"], "8.5.1")
        self.assertTrue(self.transport.requests[0].url.endswith("/solr/admin/info/system?wt=json"))

    async def test_context_manager_closes_transport(self):
        async with Solr(transport=self.transport) as solr:
            self.assertIsInstance(solr, Solr)
        self.assertTrue(self.transport.closed)


class TestHTTPTransport(unittest.IsolatedAsyncioTestCase):
    async def test_sends_through_httpx(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"response": {"docs": []}})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = HTTPTransport(headers={"X-Trace": "abc"}, client=client)
        solr = Solr(transport=transport)

        res = await solr.post("users/update?commit=true", [{"id": "1"}])

        self.assertEqual(res, {"response": {"docs": []}})
        self.assertEqual(seen[0].method, "POST")
        self.assertEqual(str(seen[0].url), "http://localhost:8983/solr/users/update?commit=true")
        self.assertEqual(json.loads(seen[0].content), [{"id": "1"}])
        self.assertEqual(seen[0].headers["X-Trace"], "abc")
        await client.aclose()

    async def test_http_errors_become_transport_errors(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        solr = Solr(transport=HTTPTransport(client=client))
        with self.assertRaises(TransportError):
            await solr.get("admin/info/system")
        await client.aclose()

    async def test_default_transport_uses_config(self):
        solr = Solr(config=ClientConfig(timeout=5.0, headers={"X-Env": "test"}))
        self.assertIsInstance(solr.transport, HTTPTransport)
        self.assertEqual(solr.transport.headers["X-Env"], "test")
        await solr.aclose()


if __name__ == "__main__":
    unittest.main()
