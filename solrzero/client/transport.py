from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from solrzero.core.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    content: bytes


class Transport(ABC):
    """
    The HTTP capability the client sends its requests through.

    Implementations deliver one request and hand back the raw status and
    body; interpreting the body is left to the caller.
    """

    @abstractmethod
    async def send(
        self, method: str, url: str, body: Optional[Any] = None
    ) -> TransportResponse:
        """
        Send a request. `body`, when given, is sent as JSON.

        Raises:
            TransportError: If the request could not be delivered.
        """
        pass

    async def aclose(self) -> None:
        pass


class HTTPTransport(Transport):
    def __init__(
        self,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.headers = {"Accept": "application/json", **(headers or {})}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def send(
        self, method: str, url: str, body: Optional[Any] = None
    ) -> TransportResponse:
        try:
            if body is None:
                resp = await self._client.request(method, url, headers=self.headers)
            else:
                resp = await self._client.request(method, url, json=body, headers=self.headers)
        except httpx.HTTPError as e:
            logger.debug(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e
        return TransportResponse(status_code=resp.status_code, content=resp.content)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
