from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

if TYPE_CHECKING:
    from solrzero.client.collections import Collection

logger = logging.getLogger(__name__)


class SchemaAPI:
    """
    Batches schema changes of one collection and sends them as a single
    request.

        await users.schema() \\
            .add_field(FieldBuilder.string("name")) \\
            .delete_field("age") \\
            .commit()

    See https://solr.apache.org/guide/8_5/schema-api.html
    """

    def __init__(self, collection: "Collection"):
        self.collection = collection
        self._fields_to_add: List[Dict[str, Any]] = []
        self._fields_to_delete: List[str] = []
        self._fields_to_replace: List[Dict[str, Any]] = []

    @property
    def path(self) -> str:
        return f"{self.collection.name}/schema"

    @property
    def pending(self) -> Tuple[int, int, int]:
        """Queued (adds, deletes, replaces)."""
        return (
            len(self._fields_to_add),
            len(self._fields_to_delete),
            len(self._fields_to_replace),
        )

    async def get(self) -> Dict[str, Any]:
        """Retrieve the collection's current schema."""
        res = await self.collection.client.get(self.path)
        return res.get("schema", res)

    def add_field(self, field: Dict[str, Any]) -> "SchemaAPI":
        self._fields_to_add.append(field)
        return self

    def delete_field(self, name: str) -> "SchemaAPI":
        self._fields_to_delete.append(name)
        return self

    def replace_field(self, field: Dict[str, Any]) -> "SchemaAPI":
        self._fields_to_replace.append(field)
        return self

    def build_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self._fields_to_add:
            body["add-field"] = list(self._fields_to_add)
        if self._fields_to_delete:
            body["delete-field"] = [{"name": name} for name in self._fields_to_delete]
        if self._fields_to_replace:
            body["replace-field"] = list(self._fields_to_replace)
        return body

    async def commit(self) -> None:
        """
        Send every queued change in one request.

        All queues are emptied once the request has been issued, whether it
        succeeds or not. Without queued changes nothing is sent.
        """
        body = self.build_body()
        if not body:
            logger.info("No schema changes to commit, skipping...")
            return

        self._fields_to_add = []
        self._fields_to_delete = []
        self._fields_to_replace = []
        await self.collection.client.post(self.path, body)
