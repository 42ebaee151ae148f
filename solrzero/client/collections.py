from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from solrzero.core.encoding import build_path, encode_value, url_encode
from solrzero.core.exceptions import (
    MalformedResponseError,
    NotFound,
    ServerError,
    SolrZeroError,
    ValidationError,
)

if TYPE_CHECKING:
    from solrzero.client.query import Query
    from solrzero.client.schema import SchemaAPI
    from solrzero.client.solr import Solr

logger = logging.getLogger(__name__)

COLLECTIONS_PATH = "admin/collections"


class CollectionsAPI:
    """Create, list and delete collections."""

    def __init__(self, client: "Solr"):
        self.client = client

    def create(self, name: str) -> "CollectionBuilder":
        """
        Returns a builder for a new collection. Nothing is sent until
        `CollectionBuilder.commit`.
        """
        return CollectionBuilder(self.client, name)

    async def list(self) -> List["Collection"]:
        res = await self.client.get(f"{COLLECTIONS_PATH}?action=LIST")
        names = res.get("collections") if isinstance(res, dict) else None
        if not isinstance(names, list):
            raise MalformedResponseError("LIST response has no 'collections' array.")
        return [Collection(self.client, str(name)) for name in names]

    async def get(self, name: str) -> "Collection":
        """
        Returns the collection called `name`.

        Raises:
            NotFound: If the server does not list such a collection.
        """
        for collection in await self.list():
            if collection.name == name:
                return collection
        raise NotFound(f"Collection '{name}' does not exist.")

    async def delete(self, name: str) -> None:
        path = build_path(COLLECTIONS_PATH, {"action": "DELETE", "name": url_encode(name)})
        await self.client.get(path)

    async def status(self, name: Optional[str] = None) -> Dict[str, Any]:
        """Cluster status of every collection, or only of `name`."""
        params = {"action": "CLUSTERSTATUS"}
        if name:
            params["collection"] = url_encode(name)
        res = await self.client.get(build_path(COLLECTIONS_PATH, params))
        cluster = res.get("cluster") if isinstance(res, dict) else None
        collections = cluster.get("collections") if isinstance(cluster, dict) else None
        if not isinstance(collections, dict):
            raise MalformedResponseError("CLUSTERSTATUS response has no 'cluster.collections'.")
        return collections


class CollectionBuilder:
    """
    Accumulates the parameters of a collection CREATE request.

    See https://solr.apache.org/guide/8_5/collection-management.html#create
    """

    def __init__(self, client: "Solr", name: str):
        self.client = client
        self.name = name
        self._params: Dict[str, str] = {}
        self._fields: List[Dict[str, Any]] = []
        if name:
            self._params["name"] = url_encode(name)

    def set(self, param: str, value: Any) -> "CollectionBuilder":
        """Set an arbitrary CREATE parameter. The value is encoded on the way in."""
        self._params[param] = encode_value(value)
        if param == "name":
            self.name = str(value)
        return self

    def num_shards(self, value: int) -> "CollectionBuilder":
        return self.set("numShards", value)

    def replication_factor(self, value: int) -> "CollectionBuilder":
        return self.set("replicationFactor", value)

    def nrt_replicas(self, value: int) -> "CollectionBuilder":
        return self.set("nrtReplicas", value)

    def tlog_replicas(self, value: int) -> "CollectionBuilder":
        return self.set("tlogReplicas", value)

    def pull_replicas(self, value: int) -> "CollectionBuilder":
        return self.set("pullReplicas", value)

    def max_shards_per_node(self, value: int) -> "CollectionBuilder":
        return self.set("maxShardsPerNode", value)

    def shards(self, value: str) -> "CollectionBuilder":
        """Comma-separated shard names, for the implicit router."""
        return self.set("shards", value)

    def router_name(self, value: str) -> "CollectionBuilder":
        return self.set("router.name", value)

    def router_field(self, value: str) -> "CollectionBuilder":
        """Field used to compute the routing hash."""
        return self.set("router.field", value)

    def rule(self, value: str) -> "CollectionBuilder":
        return self.set("rule", value)

    def create_node_set(self, value: str) -> "CollectionBuilder":
        return self.set("createNodeSet", value)

    def create_node_set_shuffle(self, value: bool) -> "CollectionBuilder":
        return self.set("createNodeSet.shuffle", value)

    def config_name(self, value: str) -> "CollectionBuilder":
        return self.set("collection.configName", value)

    def with_collection(self, value: str) -> "CollectionBuilder":
        return self.set("withCollection", value)

    def alias(self, value: str) -> "CollectionBuilder":
        return self.set("alias", value)

    def auto_add_replicas(self, value: bool) -> "CollectionBuilder":
        return self.set("autoAddReplicas", value)

    def policy(self, value: str) -> "CollectionBuilder":
        return self.set("policy", value)

    def field(self, descriptor: Dict[str, Any]) -> "CollectionBuilder":
        """Attach a field descriptor, added to the schema once the collection exists."""
        self._fields.append(descriptor)
        return self

    def build_path(self) -> str:
        params = {"action": "CREATE", **self._params}
        return build_path(COLLECTIONS_PATH, params)

    async def commit(self) -> "Collection":
        """
        Create the collection and return a handle on it.

        Raises:
            ValidationError: If no name was given.
            ServerError: If Solr did not acknowledge the creation.
        """
        if not self._params.get("name"):
            raise ValidationError({"name": "Collection name must not be empty."})

        res = await self.client.get(self.build_path())
        if not isinstance(res, dict) or "success" not in res:
            raise ServerError(
                f"Creation of collection '{self.name}' was not acknowledged.", payload=res
            )

        collection = Collection(self.client, self.name)
        if self._fields:
            fields, self._fields = self._fields, []
            schema = collection.schema()
            for descriptor in fields:
                schema.add_field(descriptor)
            try:
                await schema.commit()
            except SolrZeroError as e:
                logger.warning(
                    f"Collection '{self.name}' was created but its fields were not added: {e}"
                )
        return collection


class Collection:
    """
    A single existing collection.

    Documents passed to `add` are queued locally and sent together by
    `commit`.
    """

    def __init__(self, client: "Solr", name: str):
        self.client = client
        self.name = name
        self._docs_to_commit: List[Dict[str, Any]] = []
        self._error: Optional[ValidationError] = None

    def __repr__(self) -> str:
        return f"Collection({self.name!r}, pending={len(self._docs_to_commit)})"

    def schema(self) -> "SchemaAPI":
        from solrzero.client.schema import SchemaAPI

        return SchemaAPI(self)

    def search(self) -> "Query":
        from solrzero.client.query import Query

        return Query(self)

    def add(self, document: Any) -> "Collection":
        """
        Queue a document (dict) or several documents (list of dicts).

        Within a list, the first element that is not a dict stops the call
        and makes the next `commit` fail; the elements before it stay
        queued. Values that are neither a dict nor a list are ignored.

            users.add({"name": "Some", "age": 19}).add({"name": "Dude", "age": 21})
            # is the same as
            users.add([{"name": "Some", "age": 19}, {"name": "Dude", "age": 21}])
        """
        if isinstance(document, list):
            for index, doc in enumerate(document):
                if not isinstance(doc, dict):
                    self._error = ValidationError(
                        f"Document at index {index} is a {type(doc).__name__}, not an object."
                    )
                    break
                self._docs_to_commit.append(doc)
        elif isinstance(document, dict):
            self._docs_to_commit.append(document)
        return self

    @property
    def commit_size(self) -> int:
        """Number of documents queued for the next commit."""
        return len(self._docs_to_commit)

    async def commit(self) -> None:
        """
        Send the queued documents.

        The queue is emptied once the request has been issued, even if it
        fails, so documents are not resent by a later commit.

        Raises:
            ValidationError: If a previous `add` met a non-object document.
                The error is raised once, without contacting the server.
        """
        if self._error is not None:
            error, self._error = self._error, None
            raise error

        if not self._docs_to_commit:
            logger.info("No documents to commit, skipping...")
            return

        docs, self._docs_to_commit = self._docs_to_commit, []
        await self.client.post(f"{self.name}/update?commit=true", docs)
