from solrzero.core.config import ClientConfig, Endpoint, configure
from solrzero.core.encoding import build_path, encode_value, join_params, url_encode
from solrzero.core.exceptions import (CompileError, ConfigError, DecodeError,
                                      InvalidSyntaxError,
                                      MalformedResponseError,
                                      MissingQueryError, MissingValueError,
                                      NotFound, ServerError, SolrZeroError,
                                      TransportError, ValidationError)
from solrzero.core.fields import FieldBuilder
from solrzero.core.query import (And, FieldMatch, Negate, Node, Or,
                                 compile_query, parse_node)
