"""
Test transport for the solrzero client.

Records every request and answers from a queue of canned responses, so the
client can be exercised without a Solr server.
"""
import json
from collections import deque
from dataclasses import dataclass
from typing import Any, List, Optional

from solrzero.client.transport import Transport, TransportResponse
from solrzero.core.exceptions import TransportError


@dataclass
class RecordedRequest:
    method: str
    url: str
    body: Any = None


class RecordingTransport(Transport):
    """
    Transport that records requests and replays queued responses.

    Usage:
        transport = RecordingTransport()
        transport.respond({"response": {"docs": [{"id": 1}]}})
        solr = Solr(transport=transport)
        ...
        transport.requests[0].url

    When the queue is empty, `default` is answered ({"success": {}} unless
    overridden).
    """

    def __init__(self, default: Any = None):
        self.requests: List[RecordedRequest] = []
        self.default = {"success": {}} if default is None else default
        self._responses = deque()
        self.closed = False

    def respond(self, data: Any, status_code: int = 200) -> "RecordingTransport":
        """Queue a JSON response."""
        return self.respond_raw(json.dumps(data).encode("utf-8"), status_code)

    def respond_raw(self, content: bytes, status_code: int = 200) -> "RecordingTransport":
        """Queue a response body that is sent as-is."""
        self._responses.append(TransportResponse(status_code=status_code, content=content))
        return self

    def fail(self, message: str = "Connection refused") -> "RecordingTransport":
        """Queue a transport failure."""
        self._responses.append(TransportError(message))
        return self

    async def send(
        self, method: str, url: str, body: Optional[Any] = None
    ) -> TransportResponse:
        self.requests.append(RecordedRequest(method, url, body))
        if not self._responses:
            return TransportResponse(200, json.dumps(self.default).encode("utf-8"))
        response = self._responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response

    async def aclose(self) -> None:
        self.closed = True
