from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Union

from solrzero.core.encoding import build_path, encode_value
from solrzero.core.exceptions import MalformedResponseError, MissingQueryError
from solrzero.core.query import Node, compile_query

if TYPE_CHECKING:
    from solrzero.client.collections import Collection

# Order in which known parameters appear in the request path.
# https://solr.apache.org/guide/8_5/common-query-parameters.html
QUERY_PARAMS = (
    "q",
    "defType",
    "sort",
    "start",
    "rows",
    "fq",
    "fl",
    "debug",
    "explainOther",
    "timeAllowed",
    "segmentTerminateEarly",
    "omitHeader",
    "wt",
    "cache",
    "logParamsList",
    "echoParams",
)


class Query:
    """
    A search against one collection. Immutable: every setter returns a new
    Query, so a base query can be shared and refined.

        docs = await users.search() \\
            .query("name:Some") \\
            .sort("age asc") \\
            .fields("name,age") \\
            .commit()
    """

    def __init__(self, collection: "Collection"):
        self.collection = collection
        self._params: Dict[str, str] = {}

    def _clone(self) -> "Query":
        query = Query(self.collection)
        query._params = dict(self._params)
        return query

    def param(self, name: str, value: Any) -> "Query":
        """Set any request parameter. Values are encoded on the way in."""
        query = self._clone()
        query._params[name] = encode_value(value)
        return query

    @property
    def params(self) -> Dict[str, str]:
        return dict(self._params)

    # -- Chaining methods --

    def query(self, q: str) -> "Query":
        """Query in the standard query syntax, e.g. "name:Some AND age:[18 TO *]"."""
        return self.param("q", q)

    def structured(self, node: Union[Node, Dict[str, Any]]) -> "Query":
        """
        Compile a structured query and use it as `q`.

            users.search().structured({"and": [{"field": "name", "value": "Some"},
                                               {"field": "age", "value": 19}]})
            # q = (name:Some AND age:19)

        Raises:
            MissingValueError: A field match without a value.
            InvalidSyntaxError: A node that is not a field match or operator.
        """
        return self.query(compile_query(node))

    def def_type(self, def_type: str) -> "Query":
        return self.param("defType", def_type)

    def sort(self, sort: str) -> "Query":
        return self.param("sort", sort)

    def start(self, start: int) -> "Query":
        return self.param("start", int(start))

    def rows(self, rows: int) -> "Query":
        return self.param("rows", int(rows))

    def filter_query(self, fq: str) -> "Query":
        return self.param("fq", fq)

    def fields(self, fl: str) -> "Query":
        return self.param("fl", fl)

    def debug(self, debug: str) -> "Query":
        return self.param("debug", debug)

    def explain_other(self, explain_other: str) -> "Query":
        return self.param("explainOther", explain_other)

    def time_allowed(self, milliseconds: int) -> "Query":
        return self.param("timeAllowed", int(milliseconds))

    def segment_terminate_early(self, value: bool) -> "Query":
        return self.param("segmentTerminateEarly", bool(value))

    def omit_header(self, value: bool) -> "Query":
        return self.param("omitHeader", bool(value))

    def wt(self, wt: str) -> "Query":
        return self.param("wt", wt)

    def cache(self, value: bool) -> "Query":
        return self.param("cache", bool(value))

    def log_params_list(self, value: str) -> "Query":
        return self.param("logParamsList", value)

    def echo_params(self, value: str) -> "Query":
        return self.param("echoParams", value)

    # -- Request building --

    def build_path(self) -> str:
        ordered = [(key, self._params[key]) for key in QUERY_PARAMS if key in self._params]
        ordered += [
            (key, value) for key, value in self._params.items() if key not in QUERY_PARAMS
        ]
        return build_path(f"{self.collection.name}/select", ordered)

    async def commit(self) -> List[Any]:
        """
        Run the query and return the matching documents.

        Raises:
            MissingQueryError: If no query was set. Nothing is sent.
            MalformedResponseError: If the response has no response.docs list.
        """
        if "q" not in self._params:
            raise MissingQueryError()

        res = await self.collection.client.get(self.build_path())
        response = res.get("response") if isinstance(res, dict) else None
        docs = response.get("docs") if isinstance(response, dict) else None
        if not isinstance(docs, list):
            raise MalformedResponseError("Search response has no 'response.docs' list.")
        return list(docs)
