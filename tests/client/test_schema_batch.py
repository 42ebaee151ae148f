"""
Tests for the schema mutation batch.
"""
import unittest

from solrzero.client.solr import Solr
from solrzero.client.testing import RecordingTransport
from solrzero.core.exceptions import ServerError
from solrzero.core.fields import FieldBuilder

SCHEMA_URL = "http://localhost:8983/solr/users/schema"


class TestSchemaBatch(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.transport = RecordingTransport(default={"responseHeader": {"status": 0}})
        self.users = Solr(transport=self.transport).collection("users")

    async def test_empty_commit_sends_nothing(self):
        await self.users.schema().commit()
        self.assertEqual(self.transport.requests, [])

    async def test_all_commands_in_one_request(self):
        schema = (
            self.users.schema()
            .add_field(FieldBuilder.string("name"))
            .add_field(FieldBuilder.numeric("age"))
            .delete_field("nickname")
            .replace_field(FieldBuilder.date("birthday"))
        )
        self.assertEqual(schema.pending, (2, 1, 1))
        await schema.commit()

        self.assertEqual(len(self.transport.requests), 1)
        request = self.transport.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url, SCHEMA_URL)
        self.assertEqual(
            request.body,
            {
                "add-field": [FieldBuilder.string("name"), FieldBuilder.numeric("age")],
                "delete-field": [{"name": "nickname"}],
                "replace-field": [FieldBuilder.date("birthday")],
            },
        )
        self.assertEqual(schema.pending, (0, 0, 0))

    async def test_empty_queues_are_omitted(self):
        await self.users.schema().delete_field("age").commit()
        self.assertEqual(self.transport.requests[0].body, {"delete-field": [{"name": "age"}]})

    async def test_second_commit_is_a_no_op(self):
        schema = self.users.schema().add_field(FieldBuilder.string("name"))
        await schema.commit()
        await schema.commit()
        self.assertEqual(len(self.transport.requests), 1)

    async def test_queues_are_cleared_on_failure(self):
        self.transport.respond({"error": {"msg": "Field 'age' already exists."}}, status_code=400)
        schema = self.users.schema().add_field(FieldBuilder.numeric("age")).delete_field("x")
        with self.assertRaises(ServerError):
            await schema.commit()
        self.assertEqual(schema.pending, (0, 0, 0))

    async def test_get(self):
        self.transport.respond({"schema": {"name": "default-config", "fields": []}})
        schema = await self.users.schema().get()
        self.assertEqual(schema["name"], "default-config")
        self.assertEqual(self.transport.requests[0].method, "GET")
        self.assertEqual(self.transport.requests[0].url, SCHEMA_URL)


if __name__ == "__main__":
    unittest.main()
