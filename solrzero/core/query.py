"""
Structured boolean queries compiled into Solr's standard query syntax.

A query can be written either with node objects

    (FieldMatch("name", "Some") & FieldMatch("age", 19)) | FieldMatch("age", 21)

or in its JSON form

    {"or": [{"and": [{"field": "name", "value": "Some"},
                     {"field": "age", "value": 19}]},
            {"field": "age", "value": 21}]}

and both compile to "((name:Some AND age:19) OR age:21)".
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from solrzero.core.exceptions import InvalidSyntaxError, MissingValueError

OPERATOR_KEYS = ("and", "or", "neg")


class Node:
    """Base of all structured query nodes."""

    def __and__(self, other: "Node") -> "And":
        return And((self, other))

    def __or__(self, other: "Node") -> "Or":
        return Or((self, other))

    def __invert__(self) -> "Negate":
        return Negate(self)

    def compile(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class FieldMatch(Node):
    field: str
    value: Any = None

    def compile(self) -> str:
        if self.value is None:
            raise MissingValueError(f"Field match on '{self.field}' has no value.")
        return f"{self.field}:{_render_value(self.value)}"


@dataclass(frozen=True)
class And(Node):
    children: Tuple[Node, ...]

    def compile(self) -> str:
        return _compile_group("and", self.children)


@dataclass(frozen=True)
class Or(Node):
    children: Tuple[Node, ...]

    def compile(self) -> str:
        return _compile_group("or", self.children)


@dataclass(frozen=True)
class Negate(Node):
    child: Node

    def compile(self) -> str:
        return "!" + parse_node(self.child).compile()


def _compile_group(key: str, children: Any) -> str:
    # Children may be nodes or their JSON form; both go through parse_node.
    if not isinstance(children, (tuple, list)) or not children:
        raise InvalidSyntaxError(f"'{key}' expects a non-empty list of nodes.")
    separator = f" {key.upper()} "
    return "(" + separator.join(parse_node(child).compile() for child in children) + ")"


def _render_value(value: Any) -> str:
    # Strings are emitted verbatim, everything else as JSON text (19, true, 1.5).
    if isinstance(value, str):
        return value
    return json.dumps(value)


def parse_node(data: Union[Node, Dict[str, Any]]) -> Node:
    """
    Convert the JSON form of a structured query into node objects.

    Raises:
        MissingValueError: A {"field": ...} node without a value.
        InvalidSyntaxError: Anything that is neither a field match nor one
            of the "and", "or" and "neg" operators.
    """
    if isinstance(data, Node):
        return data
    if not isinstance(data, dict):
        raise InvalidSyntaxError(f"Expected a query node object, got {type(data).__name__}.")

    if "field" in data:
        if data.get("value") is None:
            raise MissingValueError(f"Field match on '{data['field']}' has no value.")
        return FieldMatch(str(data["field"]), data["value"])

    if "and" in data or "or" in data:
        key = "and" if "and" in data else "or"
        children = data[key]
        if not isinstance(children, list) or not children:
            raise InvalidSyntaxError(f"'{key}' expects a non-empty list of nodes.")
        nodes = tuple(parse_node(child) for child in children)
        return And(nodes) if key == "and" else Or(nodes)

    if "neg" in data:
        return Negate(parse_node(data["neg"]))

    raise InvalidSyntaxError(
        f"Query node must contain 'field' or one of {', '.join(OPERATOR_KEYS)}; "
        f"got keys {sorted(data)}."
    )


def compile_query(query: Union[Node, Dict[str, Any]]) -> str:
    """Compile a structured query (node or JSON form) into query syntax."""
    return parse_node(query).compile()
