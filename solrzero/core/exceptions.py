from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


@dataclass
class ErrorDetail:
    message: str
    code: str

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ErrorDetail(message={self.message!r}, code={self.code!r})"


class SolrZeroError(Exception):
    """Base exception for all solrzero errors."""

    default_detail: Union[str, Dict, List] = "A Solr client error occurred."
    default_code: str = "error"

    def __init__(
        self,
        detail: Optional[Union[str, Dict, List]] = None,
        code: Optional[str] = None,
    ):
        detail = detail if detail is not None else self.default_detail
        self.detail = self._normalize_detail(detail, code or self.default_code)
        super().__init__(str(self.detail))

    def _normalize_detail(
        self, detail: Union[str, Dict, List], code: Optional[str]
    ) -> Union[ErrorDetail, Dict, List]:
        """Convert details to ErrorDetail objects recursively."""
        if isinstance(detail, str):
            return ErrorDetail(detail, code or self.default_code)
        elif isinstance(detail, dict):
            return {
                key: self._normalize_detail(value, code)
                for key, value in detail.items()
            }
        elif isinstance(detail, list):
            return [self._normalize_detail(item, code) for item in detail]
        return detail


class ValidationError(SolrZeroError):
    """Error raised before any request is sent, for invalid local input."""

    default_detail = "Invalid input."
    default_code = "validation_error"

    def __init__(self, detail: Optional[Union[str, Dict, List]] = None):
        super().__init__(detail, self.default_code)


class MissingQueryError(ValidationError):
    """Error raised when a query is committed without a `q` parameter."""

    default_detail = "No query was set."
    default_code = "missing_query"


class TransportError(SolrZeroError):
    """Error raised when the request could not be delivered."""

    default_detail = "The request could not be sent."
    default_code = "transport_error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, self.default_code)


class DecodeError(SolrZeroError):
    """Error raised when a response body is not valid JSON."""

    default_detail = "The response is not valid JSON."
    default_code = "decode_error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, self.default_code)


class ServerError(SolrZeroError):
    """
    Error raised for a decodable response that Solr reports as failed:
    a top-level "error" key, a non-2xx status or a missing acknowledgement.
    """

    default_detail = "Solr reported an error."
    default_code = "server_error"

    def __init__(
        self,
        detail: Optional[Union[str, Dict, List]] = None,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        self.status_code = status_code
        self.payload = payload
        super().__init__(detail, self.default_code)


class NotFound(ServerError):
    """Error raised when a named collection does not exist."""

    default_detail = "Not found."
    default_code = "not_found"


class MalformedResponseError(SolrZeroError):
    """Error raised when a response lacks the shape an operation expects."""

    default_detail = "Unexpected response shape."
    default_code = "malformed_response"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, self.default_code)


class CompileError(SolrZeroError):
    """Error raised for structured queries that cannot be compiled."""

    default_detail = "Query syntax error."
    default_code = "compile_error"

    def __init__(self, detail: Optional[Union[Dict, List, str]] = None):
        super().__init__(detail, self.default_code)


class MissingValueError(CompileError):
    """A field match without a value."""

    default_detail = "Field match has no value."
    default_code = "missing_value"


class InvalidSyntaxError(CompileError):
    """A node that is neither a field match nor a boolean operator."""

    default_detail = "Unrecognised query node."
    default_code = "invalid_syntax"


class ConfigError(Exception):
    """Error raised for configuration issues."""
    pass
