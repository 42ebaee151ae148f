from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Optional

from solrzero.client.transport import HTTPTransport, Transport, TransportResponse
from solrzero.core.config import ClientConfig, Endpoint, resolve_config
from solrzero.core.encoding import url_encode
from solrzero.core.exceptions import DecodeError, ServerError

if TYPE_CHECKING:
    from solrzero.client.collections import Collection, CollectionsAPI

logger = logging.getLogger(__name__)


class Solr:
    """
    Handle on a Solr server.

    Every request goes through `get` / `post`, which apply the envelope
    check: a response is a failure if it is not JSON, carries a top-level
    "error" key, or has a non-2xx status.

    Usage:
        async with Solr("http", "localhost", 8983) as solr:
            users = await solr.collections().create("users").num_shards(2).commit()
            users.add({"name": "Some", "age": 19})
            await users.commit()
            docs = await users.search().query("name:Some").commit()
    """

    def __init__(
        self,
        protocol: str = "http",
        host: str = "localhost",
        port: int = 8983,
        transport: Optional[Transport] = None,
        config: Optional[ClientConfig] = None,
    ):
        self.endpoint = Endpoint.create(protocol, host, port)
        self.config = resolve_config(config)
        self.transport = transport or HTTPTransport(
            timeout=self.config.timeout, headers=self.config.headers
        )

    async def __aenter__(self) -> "Solr":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    @property
    def protocol(self) -> str:
        return self.endpoint.protocol

    @property
    def host(self) -> str:
        return self.endpoint.host

    @property
    def port(self) -> int:
        return self.endpoint.port

    def url_encode(self, text: str) -> str:
        return url_encode(text)

    def build_url(self, path: str) -> str:
        """{protocol}://{host}:{port}/solr/{path}"""
        return f"{self.endpoint.base_url}/solr/{path}"

    # -- Requests --

    async def get(self, path: str) -> Any:
        """
        GET `path` (relative to /solr/) and return the decoded response.

        Raises:
            TransportError: If the request could not be sent.
            DecodeError: If the body is not JSON.
            ServerError: If Solr reported an error.
        """
        url = self.build_url(path)
        logger.debug(f"GET: {url}")
        resp = await self.transport.send("GET", url)
        return self._parse_response(resp)

    async def post(self, path: str, body: Any) -> Any:
        """POST `body` as JSON to `path`. Raises like `get`."""
        url = self.build_url(path)
        logger.debug(f"POST: {url}")
        resp = await self.transport.send("POST", url, body)
        return self._parse_response(resp)

    def _parse_response(self, resp: TransportResponse) -> Any:
        try:
            data = json.loads(resp.content)
        except ValueError as e:
            if resp.status_code >= 400:
                raise ServerError(
                    f"Solr responded with HTTP {resp.status_code}.",
                    status_code=resp.status_code,
                ) from e
            raise DecodeError(f"Response is not valid JSON: {e}") from e

        if isinstance(data, dict) and "error" in data:
            error = data["error"]
            logger.warning(f"Solr returned an error (HTTP {resp.status_code}): {error}")
            message = error.get("msg") if isinstance(error, dict) else None
            raise ServerError(
                message or str(error), status_code=resp.status_code, payload=error
            )

        if not 200 <= resp.status_code < 300:
            raise ServerError(
                f"Solr responded with HTTP {resp.status_code}.",
                status_code=resp.status_code,
                payload=data,
            )
        return data

    # -- APIs --

    async def system_info(self) -> Any:
        return await self.get("admin/info/system?wt=json")

    def collections(self) -> "CollectionsAPI":
        """Returns the API used to create, list and delete collections."""
        from solrzero.client.collections import CollectionsAPI

        return CollectionsAPI(self)

    def collection(self, name: str) -> "Collection":
        """Returns a handle on an existing collection without checking it exists."""
        from solrzero.client.collections import Collection

        return Collection(self, name)
