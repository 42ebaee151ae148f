"""
solrzero: an asyncio client for the Solr HTTP API, built from typed request
builders.
"""

from solrzero.client import (Collection, CollectionBuilder, CollectionsAPI,
                             HTTPTransport, Query, SchemaAPI, Solr, Transport,
                             TransportResponse)
from solrzero.core import (And, ClientConfig, CompileError, ConfigError,
                           DecodeError, Endpoint, FieldBuilder, FieldMatch,
                           InvalidSyntaxError, MalformedResponseError,
                           MissingQueryError, MissingValueError, Negate, Node,
                           NotFound, Or, ServerError, SolrZeroError,
                           TransportError, ValidationError, compile_query,
                           configure, parse_node, url_encode)

__all__ = [
    # Client
    "Solr",
    "CollectionsAPI",
    "CollectionBuilder",
    "Collection",
    "SchemaAPI",
    "Query",
    # Transport
    "Transport",
    "TransportResponse",
    "HTTPTransport",
    # Configuration
    "ClientConfig",
    "Endpoint",
    "configure",
    # Builders and queries
    "FieldBuilder",
    "Node",
    "FieldMatch",
    "And",
    "Or",
    "Negate",
    "compile_query",
    "parse_node",
    "url_encode",
    # Errors
    "SolrZeroError",
    "ValidationError",
    "MissingQueryError",
    "TransportError",
    "DecodeError",
    "ServerError",
    "NotFound",
    "MalformedResponseError",
    "CompileError",
    "MissingValueError",
    "InvalidSyntaxError",
    "ConfigError",
]

__version__ = "0.1.0"
